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

from typing import Final

from osd_dev.utils.enum import StrEnum


class Action(StrEnum):
    """Orchestration verbs accepted as the single positional token."""

    UP = "up"
    DOWN = "down"
    STOP = "stop"
    START = "start"


class Profile(StrEnum):
    """Canonical deployment flavors (Compose profiles)."""

    STANDARD = "standard"
    SAML = "saml"
    SERVER = "server"
    SERVER_LOCAL = "server-local"


class AgentsUp(StrEnum):
    RPM = "rpm"
    DEB = "deb"
    WITHOUT = "without"


# Aliases accepted by -a/--agents-up for "without"
AGENTS_UP_ALIASES: Final[dict[str, str]] = {
    "none": AgentsUp.WITHOUT.value,
    "0": AgentsUp.WITHOUT.value,
}


class Flag:
    HELP = "--help"
    HELP_SHORT = "-h"
    PLUGINS_ROOT = "--plugins-root"
    PLUGINS_ROOT_WDP = "--wdp"
    PLUGINS_ROOT_WZ_HOME = "--wz-home"
    OS_VERSION = "--os-version"
    OSD_VERSION = "--osd-version"
    AGENTS_UP = "--agents-up"
    AGENTS_UP_SHORT = "-a"
    SAML = "--saml"
    SERVER = "--server"
    SERVER_LOCAL = "--server-local"
    REPO = "--repo"
    REPO_SHORT = "-r"
    BASE = "--base"
    BASE_SHORT = "-b"
    INDEXER_LOCAL = "--indexer-local"


SECURITY_PLUGIN_REPO_NAME: Final[str] = "wazuh-security-dashboards-plugin"
SECURITY_PLUGIN_ALIASES: Final[tuple[str, ...]] = (
    "security",
    "wazuh-security",
    "wazuh-security-dashboards",
    SECURITY_PLUGIN_REPO_NAME,
)

DASHBOARD_REPO_NAME: Final[str] = "wazuh-dashboard"
DASHBOARD_PLUGINS_REPO_NAME: Final[str] = "wazuh-dashboard-plugins"

# Plugins always mounted into the dashboard container
REQUIRED_REPOSITORIES: Final[tuple[str, ...]] = ("main", "wazuh-core", "wazuh-check-updates")

# Path segment that marks a checkout nested inside a repository's plugin subtree
FORBIDDEN_REPO_SUBFOLDER: Final[str] = "/plugins/"

PACKAGE_MANIFEST: Final[str] = "package.json"

DEFAULT_PASSWORD: Final[str] = "admin"
DEFAULT_OS_VERSION: Final[str] = "2.19.1"
DEFAULT_OSD_VERSION: Final[str] = "2.19.1"
DEFAULT_OSD_PORT: Final[str] = "5601"
IMPOSTER_VERSION: Final[str] = "3.44.1"

OSD_MAJOR_2X: Final[str] = "2.x"
SECURITY_CONFIG_PATHS: Final[dict[str, str]] = {
    OSD_MAJOR_2X: "/usr/share/opensearch/config/opensearch-security",
}

DEFAULT_CURRENT_REPO_CONTAINER_ROOT: Final[str] = "/workspace/current"
DEFAULT_SIBLING_REPO_CONTAINER_ROOT: Final[str] = "/workspace/siblings"
DEFAULT_COMPOSE_FILE: Final[str] = "dev.yml"

# Environment variables consumed
ENV_CURRENT_REPO_HOST_ROOT: Final[str] = "CURRENT_REPO_HOST_ROOT"
ENV_SIBLING_REPO_HOST_ROOT: Final[str] = "SIBLING_REPO_HOST_ROOT"
ENV_CURRENT_REPO_CONTAINER_ROOT: Final[str] = "CURRENT_REPO_CONTAINER_ROOT"
ENV_SIBLING_REPO_CONTAINER_ROOT: Final[str] = "SIBLING_REPO_CONTAINER_ROOT"
ENV_PACKAGE_JSON_PATH: Final[str] = "PACKAGE_JSON_PATH"
ENV_COMPOSE_FILE: Final[str] = "OSD_DEV_COMPOSE_FILE"
ENV_LOG_LEVEL: Final[str] = "OSD_DEV_LOG_LEVEL"
ENV_PORT: Final[str] = "PORT"

# Environment variables produced (read by the Compose file)
ENV_PASSWORD: Final[str] = "PASSWORD"
ENV_OS_VERSION: Final[str] = "OS_VERSION"
ENV_OSD_VERSION: Final[str] = "OSD_VERSION"
ENV_OSD_PORT: Final[str] = "OSD_PORT"
ENV_IMPOSTER_VERSION: Final[str] = "IMPOSTER_VERSION"
ENV_SRC: Final[str] = "SRC"
ENV_OSD_MAJOR_NUMBER: Final[str] = "OSD_MAJOR_NUMBER"
ENV_COMPOSE_PROJECT_NAME: Final[str] = "COMPOSE_PROJECT_NAME"
ENV_WAZUH_STACK: Final[str] = "WAZUH_STACK"
ENV_WAZUH_VERSION_DEVELOPMENT: Final[str] = "WAZUH_VERSION_DEVELOPMENT"
ENV_OSD_MAJOR: Final[str] = "OSD_MAJOR"
ENV_WAZUH_DASHBOARD_CONF: Final[str] = "WAZUH_DASHBOARD_CONF"
ENV_SEC_CONFIG_FILE: Final[str] = "SEC_CONFIG_FILE"
ENV_SEC_CONFIG_PATH: Final[str] = "SEC_CONFIG_PATH"
ENV_IMAGE_TAG: Final[str] = "IMAGE_TAG"
ENV_IMAGE_INDEXER_PACKAGE_TAG: Final[str] = "IMAGE_INDEXER_PACKAGE_TAG"
ENV_WAZUH_DASHBOARD_BASE: Final[str] = "WAZUH_DASHBOARD_BASE"
REPOSITORY_ENV_PREFIX: Final[str] = "REPO_"
