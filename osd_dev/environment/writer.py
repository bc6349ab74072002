# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 osd-dev Contributors
#
# This file is part of osd-dev.
#
# osd-dev is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# osd-dev is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

import os
from collections.abc import Mapping, MutableMapping
from typing import Protocol


class EnvironmentWriter(Protocol):
    """
    Output channel for the variables consumed by the Compose file.

    Reads see previously written values as well as the ambient values the
    writer was seeded with.
    """

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...


class MappingEnvironmentWriter:
    """
    Dict-backed writer; nothing leaks into the process environment.

    ``written`` holds only the variables set through this writer, while
    ``to_dict`` returns the seed merged with them (what Compose should see).
    """

    def __init__(self, seed: Mapping[str, str] | None = None) -> None:
        self._seed: dict[str, str] = dict(seed or {})
        self._written: dict[str, str] = {}

    def get(self, name: str) -> str | None:
        if name in self._written:
            return self._written[name]
        return self._seed.get(name)

    def set(self, name: str, value: str) -> None:
        self._written[name] = value

    @property
    def written(self) -> Mapping[str, str]:
        return dict(self._written)

    def to_dict(self) -> dict[str, str]:
        return {**self._seed, **self._written}


class ProcessEnvironmentWriter:
    """Writes straight into ``os.environ`` (or any mutable mapping)."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)

    def set(self, name: str, value: str) -> None:
        self._environ[name] = value
