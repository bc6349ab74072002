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

"""
Canonical mode (profile) resolution.

Mode flags are reconciled by a single ordered rule list, evaluated top-down:

  1. --server / mode "server"              -> server
  2. --server-local / mode "server-local"  -> server-local
  3. --saml / mode "saml"                  -> saml
  4. anything else                         -> standard (final stage only)

The argument parser runs ``infer`` right after scanning; the standard
fallback is left to ``finalize``, which runs while configuring the
environment.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import auto

from osd_dev.core.config import Config
from osd_dev.core.constants import Profile
from osd_dev.core.errors import ValidationError
from osd_dev.core.messages import (
    MSG_SERVER_LOCAL_MODE_REQUIRES_VERSION,
    MSG_SERVER_MODE_REQUIRES_VERSION,
    msg_cannot_combine_server_flags,
    msg_unsupported_mode_token,
)
from osd_dev.utils.enum import StrEnum


class ModeState(StrEnum):
    UNRESOLVED = auto()
    STANDARD = Profile.STANDARD.value
    SAML = Profile.SAML.value
    SERVER = Profile.SERVER.value
    SERVER_LOCAL = Profile.SERVER_LOCAL.value


@dataclass(frozen=True, slots=True)
class ModeRule:
    state: ModeState
    applies: Callable[[Config], bool]
    version: Callable[[Config], str | None]
    terminal: bool = False  # only considered by finalize()


@dataclass(frozen=True, slots=True)
class ModeResolution:
    state: ModeState
    version: str | None = None


RULES: tuple[ModeRule, ...] = (
    ModeRule(
        state=ModeState.SERVER,
        applies=lambda c: bool(c.server_flag_version) or c.mode == Profile.SERVER,
        version=lambda c: c.mode_version or c.server_flag_version,
    ),
    ModeRule(
        state=ModeState.SERVER_LOCAL,
        applies=lambda c: bool(c.server_local_flag_version) or c.mode == Profile.SERVER_LOCAL,
        version=lambda c: c.mode_version or c.server_local_flag_version,
    ),
    ModeRule(
        state=ModeState.SAML,
        applies=lambda c: c.mode == Profile.SAML or (c.mode is None and c.enable_saml),
        version=lambda c: None,
    ),
    ModeRule(
        state=ModeState.STANDARD,
        applies=lambda c: True,
        version=lambda c: None,
        terminal=True,
    ),
)


class ModeResolver:
    def __init__(self, rules: tuple[ModeRule, ...] = RULES) -> None:
        self._rules = rules

    def _check_conflicts(self, config: Config) -> None:
        if config.server_flag_version and config.server_local_flag_version:
            raise ValidationError(msg_cannot_combine_server_flags())

    def _match(self, config: Config, *, include_terminal: bool) -> ModeResolution:
        for rule in self._rules:
            if rule.terminal and not include_terminal:
                continue
            if rule.applies(config):
                return ModeResolution(state=rule.state, version=rule.version(config))
        return ModeResolution(state=ModeState.UNRESOLVED)

    def infer(self, config: Config, source: str) -> ModeResolution:
        """
        Map mode flags onto ``config.mode``/``config.mode_version``.

        Leaves the config untouched when no flag selects a mode; the standard
        profile is only established by ``finalize``.
        """
        self._check_conflicts(config)
        resolution = self._match(config, include_terminal=False)
        if resolution.state is ModeState.UNRESOLVED:
            return resolution

        config.set_mode(resolution.state.value, source)
        if resolution.version is not None:
            config.set_mode_version(resolution.version, source)
        return resolution

    def finalize(self, config: Config) -> ModeResolution:
        """
        Resolve the terminal profile, validating versions.

        Raw composite tokens such as "server-local-rpm" are rejected; the
        agents suffix must come from --agents-up.
        """
        if config.mode and config.mode.startswith(f"{Profile.SERVER_LOCAL}-"):
            raise ValidationError(msg_unsupported_mode_token(config.mode))
        self._check_conflicts(config)

        resolution = self._match(config, include_terminal=True)
        if resolution.state is ModeState.SERVER and not resolution.version:
            raise ValidationError(MSG_SERVER_MODE_REQUIRES_VERSION)
        if resolution.state is ModeState.SERVER_LOCAL and not resolution.version:
            raise ValidationError(MSG_SERVER_LOCAL_MODE_REQUIRES_VERSION)
        return resolution
