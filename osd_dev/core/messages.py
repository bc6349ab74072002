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
User-facing error and usage messages.

Every message names the offending flag, value or repository so the CLI can
print it verbatim.
"""

from osd_dev.core.constants import (
    DASHBOARD_REPO_NAME,
    ENV_SIBLING_REPO_HOST_ROOT,
    SECURITY_PLUGIN_ALIASES,
    SECURITY_PLUGIN_REPO_NAME,
    Action,
    AgentsUp,
    Flag,
    Profile,
)

USAGE_NOTE_REPO_SHORTHAND = (
    f"Shorthand: {Flag.REPO} <name> resolves to ${ENV_SIBLING_REPO_HOST_ROOT}/<name>"
    f" ({', '.join(SECURITY_PLUGIN_ALIASES)} map to {SECURITY_PLUGIN_REPO_NAME})."
)
USAGE_NOTE_BASE_AUTODETECT = (
    f"Run the dashboard from source. Without a path, ${ENV_SIBLING_REPO_HOST_ROOT}/{DASHBOARD_REPO_NAME} is used."
)

MSG_SERVER_MODE_REQUIRES_VERSION = f"Mode '{Profile.SERVER}' requires a version, e.g. {Flag.SERVER} 4.12.0"
MSG_SERVER_LOCAL_MODE_REQUIRES_VERSION = (
    f"Mode '{Profile.SERVER_LOCAL}' requires an image tag, e.g. {Flag.SERVER_LOCAL} my-tag"
)


def msg_flag_requires_value(flag: str, example: str) -> str:
    return f"{flag} requires a value, e.g. {flag} {example}"


def msg_flag_requires_absolute_path(flag: str) -> str:
    return f"{flag} requires an absolute path argument, e.g. {flag} /absolute/path"


def msg_invalid_agents_up(flag: str, value: str | None) -> str:
    allowed = ", ".join(f"'{v}'" for v in AgentsUp.values())
    return f"Invalid value {value!r} for {flag}. Allowed values: {allowed} (aliases: 'none', '0')."


def msg_empty_version(flag: str) -> str:
    return f"{flag} cannot be empty."


def msg_invalid_repo_spec(spec: str) -> str:
    return f"Invalid repository specification '{spec}'. Expected format repo=/absolute/path."


def msg_invalid_repo_subfolder(name: str, path: str) -> str:
    return (
        f"Repository path '{path}' for '{name}' points inside a plugins subfolder."
        " Point it at the repository ROOT instead."
    )


def msg_cannot_resolve_under_common_parent(name: str, flag: str, env_var: str) -> str:
    return (
        f"Cannot resolve repository '{name}' from shorthand {flag} {name}: {env_var} is not set."
        f" Use {flag} {name}=/absolute/path instead."
    )


def msg_unsupported_option(arg: str) -> str:
    return f"Unsupported option '{arg}'. Run with {Flag.HELP} for usage."


def msg_action_provided_multiple(first: str, second: str) -> str:
    return f"Action already provided ('{first}'); unexpected second action '{second}'."


def msg_positional_args_not_allowed(arg: str) -> str:
    allowed = ", ".join(Action.values())
    return f"Unexpected positional argument '{arg}'. The only positional token allowed is the action ({allowed})."


def msg_cannot_infer_dashboard_base() -> str:
    return f"Cannot infer the dashboard base for {Flag.BASE}: {ENV_SIBLING_REPO_HOST_ROOT} is not set."


def msg_unable_locate_dashboard_auto() -> str:
    return (
        f"Unable to locate {DASHBOARD_REPO_NAME} under ${ENV_SIBLING_REPO_HOST_ROOT}."
        f" Pass {Flag.BASE} /absolute/path explicitly."
    )


def msg_base_requires_absolute() -> str:
    return f"{Flag.BASE} requires an absolute path to the dashboard sources."


def msg_cannot_combine_server_flags() -> str:
    return f"{Flag.SERVER} and {Flag.SERVER_LOCAL} cannot be used together."


def msg_unsupported_mode_token(mode: str) -> str:
    return (
        f"Unsupported mode '{mode}'. Use {Flag.SERVER_LOCAL} <tag> together with"
        f" {Flag.AGENTS_UP} <{'|'.join(AgentsUp.values())}> instead."
    )


def msg_action_required() -> str:
    return f"An action is required ({', '.join(Action.values())}). Run with {Flag.HELP} for usage."


def msg_env_not_set(name: str) -> str:
    return f"Environment variable {name} is not set."


def msg_no_mounted_roots(label: str) -> str:
    return f"{label}: no host roots are configured, cannot map host paths into the container."


def msg_path_not_under_mount(label: str, path: str) -> str:
    return f"{label} '{path}' is not under a directory mounted into the container."


def msg_path_not_found(label: str, path: str, container_path: str) -> str:
    return f"{label} '{path}' does not exist (checked {container_path} inside the container)."


def msg_repo_path_must_be_absolute(name: str, path: str) -> str:
    return f"Repository path for '{name}' must be absolute, got '{path}'."


def msg_repo_path_not_provided(name: str) -> str:
    return (
        f"Could not find repository '{name}'. Provide it with {Flag.REPO} {name}=/absolute/path"
        f" or {Flag.PLUGINS_ROOT} /absolute/path."
    )


def msg_invalid_manifest(path: str, reason: str) -> str:
    return f"Cannot read package manifest '{path}': {reason}"
