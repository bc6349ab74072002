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
from collections.abc import Iterable
from pathlib import Path

from osd_dev.core.config import Config, EnvironmentPaths
from osd_dev.core.constants import (
    DASHBOARD_PLUGINS_REPO_NAME,
    DASHBOARD_REPO_NAME,
    ENV_CURRENT_REPO_HOST_ROOT,
    PACKAGE_MANIFEST,
    REQUIRED_REPOSITORIES,
)
from osd_dev.core.errors import ConfigurationError, ValidationError
from osd_dev.core.messages import msg_env_not_set, msg_repo_path_must_be_absolute, msg_repo_path_not_provided
from osd_dev.utils.env import to_repository_env_var
from osd_dev.utils.paths import ensure_accessible_host_path, join_host_path, strip_trailing_slash, to_container_path

logger = logging.getLogger(__name__)


def required_repositories(config: Config) -> tuple[str, ...]:
    """Built-in plugin repositories followed by user overrides, de-duplicated in order."""
    names = list(REQUIRED_REPOSITORIES) + [o.name for o in config.user_repositories]
    return tuple(dict.fromkeys(names))


class RepositoryResolver:
    """
    Maps logical repository names to absolute host paths.

    Resolution order (first match wins):
      1. the last ``--repo name=path`` override for the name
      2. a search over candidate base directories; for each base the
         sub-paths ``plugins/<name>``, ``<name>`` and the base itself are
         probed, accepting the first one that is visible inside the
         container and holds a package.json
    """

    def candidate_bases(self, config: Config, env_paths: EnvironmentPaths) -> list[str]:
        if not env_paths.current_repo_host_root:
            raise ConfigurationError(msg_env_not_set(ENV_CURRENT_REPO_HOST_ROOT))

        bases: list[str] = []
        if config.plugins_root:
            bases.append(config.plugins_root)
        bases.append(env_paths.current_repo_host_root)
        if env_paths.sibling_repo_host_root:
            bases.append(join_host_path(env_paths.sibling_repo_host_root, DASHBOARD_PLUGINS_REPO_NAME))
            bases.append(join_host_path(env_paths.sibling_repo_host_root, DASHBOARD_REPO_NAME))
        return [strip_trailing_slash(b) for b in bases if b]

    def _probe(self, base: str, repo_name: str, env_paths: EnvironmentPaths) -> str | None:
        for candidate in (f"{base}/plugins/{repo_name}", f"{base}/{repo_name}", base):
            container_candidate = to_container_path(candidate, env_paths)
            if not container_candidate:
                continue
            if (Path(container_candidate) / PACKAGE_MANIFEST).is_file():
                return candidate
        return None

    def resolve_one(self, repo_name: str, config: Config, env_paths: EnvironmentPaths) -> str:
        override = config.find_repository_override(repo_name)
        host_path = strip_trailing_slash(override.path) if override and override.path else ""

        if host_path:
            if not host_path.startswith("/"):
                raise ValidationError(msg_repo_path_must_be_absolute(repo_name, host_path))
            logger.debug("Repository %s: using override %s", repo_name, host_path)
        else:
            for base in self.candidate_bases(config, env_paths):
                found = self._probe(base, repo_name, env_paths)
                if found:
                    host_path = found
                    logger.debug("Repository %s: auto-detected at %s", repo_name, host_path)
                    break
            else:
                raise ValidationError(msg_repo_path_not_provided(repo_name))

        ensure_accessible_host_path(host_path, f"Repository path for '{repo_name}'", env_paths)
        return host_path

    def resolve_all(
        self,
        repo_names: Iterable[str],
        config: Config,
        env_paths: EnvironmentPaths,
    ) -> dict[str, str]:
        """Resolve every repository; the first failure aborts the whole call."""
        env_map: dict[str, str] = {}
        for name in repo_names:
            path = self.resolve_one(name, config, env_paths)
            env_map[to_repository_env_var(name)] = path
            logger.info("Repository %s -> %s", name, path)
        return env_map
