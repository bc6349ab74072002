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
import sys
from collections.abc import Sequence
from typing import NoReturn, TextIO

from osd_dev.core.config import Config, EnvironmentPaths, RepositoryOverride
from osd_dev.core.constants import (
    DASHBOARD_REPO_NAME,
    ENV_SIBLING_REPO_HOST_ROOT,
    FORBIDDEN_REPO_SUBFOLDER,
    Action,
    AgentsUp,
    Flag,
)
from osd_dev.core.errors import ConfigurationError, ValidationError
from osd_dev.core.messages import (
    USAGE_NOTE_BASE_AUTODETECT,
    USAGE_NOTE_REPO_SHORTHAND,
    msg_base_requires_absolute,
    msg_cannot_infer_dashboard_base,
    msg_cannot_resolve_under_common_parent,
    msg_flag_requires_absolute_path,
    msg_flag_requires_value,
    msg_invalid_repo_spec,
    msg_invalid_repo_subfolder,
    msg_positional_args_not_allowed,
    msg_unable_locate_dashboard_auto,
    msg_unsupported_option,
)
from osd_dev.resolve.mode import ModeResolver
from osd_dev.utils.env import canonical_repository_name
from osd_dev.utils.paths import (
    ensure_accessible_host_path,
    join_host_path,
    strip_trailing_slash,
    to_container_path,
)

logger = logging.getLogger(__name__)

SOURCE = "argumentParser"

EXIT_HELP = 1


def usage_text() -> str:
    lines = [
        "",
        f"osd-dev <action> [{Flag.PLUGINS_ROOT} /abs/path] [{Flag.OS_VERSION} os_version]"
        f" [{Flag.OSD_VERSION} osd_version] [{Flag.AGENTS_UP} agents_up] [{Flag.REPO} repo=absolute_path ...]"
        f" [{Flag.SAML} | {Flag.SERVER} <version> | {Flag.SERVER_LOCAL} <tag>] [{Flag.BASE} [absolute_path]]",
        "",
        f"Actions: {', '.join(Action.values())}",
        "",
        "Flags",
        f"  {Flag.PLUGINS_ROOT} <abs>  Optional. Absolute base path where repositories live"
        f" (aliases: {Flag.PLUGINS_ROOT_WDP}, {Flag.PLUGINS_ROOT_WZ_HOME}).",
        f"  {Flag.OS_VERSION} <os_version>      Optional OS version",
        f"  {Flag.OSD_VERSION} <osd_version>    Optional OSD version",
        f"  {Flag.AGENTS_UP_SHORT}, {Flag.AGENTS_UP} <agents_up>  Optional for server-local:"
        f" {' | '.join(repr(v) for v in AgentsUp.values())} (default: deploy 2 agents)",
        f"  {Flag.SAML}                 Enable SAML profile (can be combined with {Flag.SERVER}/{Flag.SERVER_LOCAL})",
        f"  {Flag.SERVER} <version>    Enable server mode with the given version",
        f"  {Flag.SERVER_LOCAL} <tag>  Enable server-local mode with the given local image tag",
        f"  {Flag.REPO_SHORT}, {Flag.REPO} repo=absolute_path  Mount an external plugin repository (repeatable)."
        f" Must point to the repository ROOT, not a subfolder. {USAGE_NOTE_REPO_SHORTHAND}",
        f"  {Flag.BASE_SHORT}, {Flag.BASE} [absolute_path]  {USAGE_NOTE_BASE_AUTODETECT}",
        f"  {Flag.INDEXER_LOCAL} [image_tag]  Use an indexer from package.",
        "",
        'Note: The only allowed positional token is the action (e.g., "up"). All other values must use flags.',
    ]
    return "\n".join(lines)


def print_usage_and_exit(out: TextIO | None = None) -> NoReturn:
    print(usage_text(), file=out or sys.stdout)
    raise SystemExit(EXIT_HELP)


def _looks_like_flag(token: str | None) -> bool:
    return token is not None and token.startswith("-")


class DefaultArgumentParser:
    """
    Stateful left-to-right scanner over argv.

    Each flag consumes a fixed number of following tokens; ``--base`` and
    ``--indexer-local`` take an optional value that is only consumed when it
    is neither another flag nor an action token.
    """

    def __init__(self, mode_resolver: ModeResolver | None = None) -> None:
        self._mode_resolver = mode_resolver or ModeResolver()
        self._actions = frozenset(Action.values())

    def parse(self, argv: Sequence[str], env_paths: EnvironmentPaths) -> Config:
        config = Config()
        tokens = list(argv)
        index = 0

        while index < len(tokens):
            arg = tokens[index]
            following = tokens[index + 1] if index + 1 < len(tokens) else None

            if arg in (Flag.HELP, Flag.HELP_SHORT):
                print_usage_and_exit()

            elif arg in (Flag.PLUGINS_ROOT, Flag.PLUGINS_ROOT_WDP, Flag.PLUGINS_ROOT_WZ_HOME):
                if not following or not following.startswith("/"):
                    raise ValidationError(msg_flag_requires_absolute_path(Flag.PLUGINS_ROOT))
                plugins_root = strip_trailing_slash(following)
                ensure_accessible_host_path(plugins_root, "Base path", env_paths)
                config.set_plugins_root(plugins_root, SOURCE)
                index += 2

            elif arg == Flag.OS_VERSION:
                config.set_os_version(self._required_value(arg, following, "2.19.1"), SOURCE)
                index += 2

            elif arg == Flag.OSD_VERSION:
                config.set_osd_version(self._required_value(arg, following, "2.19.1"), SOURCE)
                index += 2

            elif arg in (Flag.AGENTS_UP, Flag.AGENTS_UP_SHORT):
                config.set_agents_up(following, SOURCE)
                index += 2

            elif arg == Flag.SAML:
                config.set_enable_saml(True, SOURCE)
                index += 1

            elif arg == Flag.SERVER:
                config.set_server_flag_version(self._required_value(arg, following, "4.12.0"), SOURCE)
                index += 2

            elif arg == Flag.SERVER_LOCAL:
                config.set_server_local_flag_version(self._required_value(arg, following, "my-tag"), SOURCE)
                index += 2

            elif arg in (Flag.REPO, Flag.REPO_SHORT):
                spec = self._required_value(Flag.REPO, following, "wazuh-core=/absolute/path")
                config.add_user_repository_override(self._parse_repo_spec(spec, env_paths), SOURCE)
                index += 2

            elif arg in (Flag.BASE, Flag.BASE_SHORT):
                config.set_use_dashboard_from_source(True, SOURCE)
                if following and following.startswith("/"):
                    base = strip_trailing_slash(following)
                    ensure_accessible_host_path(base, "Dashboard base path", env_paths)
                    config.set_dashboard_base(base, SOURCE)
                    index += 2
                elif self._is_optional_value(following):
                    logger.warning("Ignoring relative path %r after %s; it will be auto-detected.", following, arg)
                    index += 2
                else:
                    index += 1

            elif arg == Flag.INDEXER_LOCAL:
                config.set_use_indexer_from_package(True, SOURCE)
                if following and self._is_optional_value(following):
                    config.set_indexer_package_tag(following, SOURCE)
                    index += 2
                else:
                    index += 1

            elif arg.startswith("-"):
                raise ValidationError(msg_unsupported_option(arg))

            elif arg in self._actions:
                config.set_action(arg, SOURCE)
                index += 1

            else:
                raise ValidationError(msg_positional_args_not_allowed(arg))

        self._resolve_dashboard_base(config, env_paths)
        self._default_plugins_root(config, env_paths)
        self._mode_resolver.infer(config, SOURCE)
        return config

    def _required_value(self, flag: str, value: str | None, example: str) -> str:
        if not value or _looks_like_flag(value):
            raise ValidationError(msg_flag_requires_value(flag, example))
        return value

    def _is_optional_value(self, token: str | None) -> bool:
        return bool(token) and not _looks_like_flag(token) and token not in self._actions

    def _parse_repo_spec(self, spec: str, env_paths: EnvironmentPaths) -> RepositoryOverride:
        if "=" in spec:
            name, _, path = spec.partition("=")
            if not name or not path:
                raise ValidationError(msg_invalid_repo_spec(spec))
            if FORBIDDEN_REPO_SUBFOLDER in path:
                raise ValidationError(msg_invalid_repo_subfolder(name, path))
            return RepositoryOverride(name=name, path=path)

        # shorthand: the repository is a sibling checkout
        name = spec
        if not env_paths.sibling_repo_host_root:
            raise ValidationError(msg_cannot_resolve_under_common_parent(name, Flag.REPO, ENV_SIBLING_REPO_HOST_ROOT))
        inferred = join_host_path(env_paths.sibling_repo_host_root, canonical_repository_name(name))
        ensure_accessible_host_path(inferred, f"Repository path for '{name}'", env_paths)
        return RepositoryOverride(name=name, path=inferred)

    def _resolve_dashboard_base(self, config: Config, env_paths: EnvironmentPaths) -> None:
        if not config.use_dashboard_from_source:
            return

        if not config.dashboard_base:
            if not env_paths.sibling_repo_host_root:
                raise ConfigurationError(msg_cannot_infer_dashboard_base())
            candidate = join_host_path(env_paths.sibling_repo_host_root, DASHBOARD_REPO_NAME)
            if not to_container_path(candidate, env_paths):
                raise ValidationError(msg_unable_locate_dashboard_auto())
            config.set_dashboard_base(candidate, SOURCE)

        if not config.dashboard_base or not config.dashboard_base.startswith("/"):
            raise ValidationError(msg_base_requires_absolute())
        ensure_accessible_host_path(config.dashboard_base, "Dashboard base path", env_paths)

    def _default_plugins_root(self, config: Config, env_paths: EnvironmentPaths) -> None:
        if not config.plugins_root and env_paths.current_repo_host_root:
            config.set_plugins_root(join_host_path(env_paths.current_repo_host_root, "plugins"), SOURCE)

        if config.plugins_root:
            ensure_accessible_host_path(config.plugins_root, "Base path", env_paths)
