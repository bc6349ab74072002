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

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from osd_dev.core.constants import (
    AGENTS_UP_ALIASES,
    DEFAULT_COMPOSE_FILE,
    DEFAULT_CURRENT_REPO_CONTAINER_ROOT,
    DEFAULT_SIBLING_REPO_CONTAINER_ROOT,
    ENV_COMPOSE_FILE,
    ENV_CURRENT_REPO_CONTAINER_ROOT,
    ENV_CURRENT_REPO_HOST_ROOT,
    ENV_PACKAGE_JSON_PATH,
    ENV_SIBLING_REPO_CONTAINER_ROOT,
    ENV_SIBLING_REPO_HOST_ROOT,
    PACKAGE_MANIFEST,
    Action,
    AgentsUp,
    Flag,
)
from osd_dev.core.errors import ValidationError
from osd_dev.core.messages import msg_action_provided_multiple, msg_empty_version, msg_invalid_agents_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnvironmentPaths:
    """
    Ambient paths supplied by the environment the CLI runs in.

    Host roots are locations on the machine running Docker; container roots
    are where the same directories are mounted inside the orchestration
    container. Never mutated.
    """

    current_repo_host_root: str | None = None
    sibling_repo_host_root: str | None = None
    current_repo_container_root: str = DEFAULT_CURRENT_REPO_CONTAINER_ROOT
    sibling_repo_container_root: str = DEFAULT_SIBLING_REPO_CONTAINER_ROOT
    package_json_path: str = f"{DEFAULT_CURRENT_REPO_CONTAINER_ROOT}/plugins/main/{PACKAGE_MANIFEST}"
    compose_file: str = DEFAULT_COMPOSE_FILE

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "EnvironmentPaths":
        current_container = environ.get(ENV_CURRENT_REPO_CONTAINER_ROOT) or DEFAULT_CURRENT_REPO_CONTAINER_ROOT
        sibling_container = environ.get(ENV_SIBLING_REPO_CONTAINER_ROOT) or DEFAULT_SIBLING_REPO_CONTAINER_ROOT
        package_json = environ.get(ENV_PACKAGE_JSON_PATH) or str(
            PurePosixPath(current_container) / "plugins" / "main" / PACKAGE_MANIFEST
        )
        return cls(
            current_repo_host_root=environ.get(ENV_CURRENT_REPO_HOST_ROOT) or None,
            sibling_repo_host_root=environ.get(ENV_SIBLING_REPO_HOST_ROOT) or None,
            current_repo_container_root=current_container,
            sibling_repo_container_root=sibling_container,
            package_json_path=package_json,
            compose_file=environ.get(ENV_COMPOSE_FILE) or DEFAULT_COMPOSE_FILE,
        )


@dataclass(frozen=True, slots=True)
class RepositoryOverride:
    name: str
    path: str


@dataclass
class Config:
    """
    Mutable configuration record for one invocation.

    Filled in order: argument scan -> mode inference -> repository inference
    -> defaulting. Every setter records which stage set the field; the value
    itself is authoritative regardless of source.
    """

    action: Action | None = None
    plugins_root: str | None = None
    os_version: str | None = None
    osd_version: str | None = None
    agents_up: AgentsUp | None = None
    enable_saml: bool = False
    server_flag_version: str | None = None
    server_local_flag_version: str | None = None
    mode: str | None = None
    mode_version: str | None = None
    use_dashboard_from_source: bool = False
    dashboard_base: str | None = None
    use_indexer_from_package: bool = False
    indexer_package_tag: str | None = None
    user_repositories: list[RepositoryOverride] = field(default_factory=list)

    provenance: dict[str, str] = field(default_factory=dict, repr=False)

    def _record(self, name: str, value: object, source: str) -> None:
        setattr(self, name, value)
        self.provenance[name] = source
        logger.debug("config.%s = %r (set by %s)", name, value, source)

    def set_action(self, action: str, source: str) -> None:
        if self.action is not None:
            raise ValidationError(msg_action_provided_multiple(str(self.action), action))
        self._record("action", Action(action), source)

    def set_plugins_root(self, path: str, source: str) -> None:
        self._record("plugins_root", path, source)

    def set_os_version(self, version: str, source: str) -> None:
        if not version:
            raise ValidationError(msg_empty_version(Flag.OS_VERSION))
        self._record("os_version", version, source)

    def set_osd_version(self, version: str, source: str) -> None:
        if not version:
            raise ValidationError(msg_empty_version(Flag.OSD_VERSION))
        self._record("osd_version", version, source)

    def set_agents_up(self, value: str | None, source: str) -> None:
        """
        Normalize and store the agents-up selection.

        "none" and "0" alias to "without"; an empty string leaves the default
        (two agents) in place.
        """
        if value is None:
            raise ValidationError(msg_invalid_agents_up(Flag.AGENTS_UP, value))
        normalized = AGENTS_UP_ALIASES.get(value, value)
        if normalized == "":
            self._record("agents_up", None, source)
            return
        if normalized not in AgentsUp.values():
            raise ValidationError(msg_invalid_agents_up(Flag.AGENTS_UP, value))
        self._record("agents_up", AgentsUp(normalized), source)

    def set_enable_saml(self, enabled: bool, source: str) -> None:
        self._record("enable_saml", enabled, source)

    def set_server_flag_version(self, version: str, source: str) -> None:
        self._record("server_flag_version", version, source)

    def set_server_local_flag_version(self, version: str, source: str) -> None:
        self._record("server_local_flag_version", version, source)

    def set_mode(self, mode: str, source: str) -> None:
        self._record("mode", mode, source)

    def set_mode_version(self, version: str | None, source: str) -> None:
        self._record("mode_version", version, source)

    def set_use_dashboard_from_source(self, enabled: bool, source: str) -> None:
        self._record("use_dashboard_from_source", enabled, source)

    def set_dashboard_base(self, path: str, source: str) -> None:
        self._record("dashboard_base", path, source)

    def set_use_indexer_from_package(self, enabled: bool, source: str) -> None:
        self._record("use_indexer_from_package", enabled, source)

    def set_indexer_package_tag(self, tag: str, source: str) -> None:
        self._record("indexer_package_tag", tag, source)

    def add_user_repository_override(self, override: RepositoryOverride, source: str) -> None:
        self.user_repositories.append(override)
        self.provenance["user_repositories"] = source
        logger.debug("config.user_repositories += %s=%s (set by %s)", override.name, override.path, source)

    def find_repository_override(self, name: str) -> RepositoryOverride | None:
        """Last-listed override for ``name`` wins."""
        for override in reversed(self.user_repositories):
            if override.name == name:
                return override
        return None

    def source_of(self, name: str) -> str | None:
        return self.provenance.get(name)
