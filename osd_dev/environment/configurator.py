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

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path

from osd_dev.core.config import Config, EnvironmentPaths
from osd_dev.core.constants import (
    DEFAULT_OS_VERSION,
    DEFAULT_OSD_PORT,
    DEFAULT_OSD_VERSION,
    DEFAULT_PASSWORD,
    ENV_COMPOSE_PROJECT_NAME,
    ENV_IMAGE_INDEXER_PACKAGE_TAG,
    ENV_IMAGE_TAG,
    ENV_IMPOSTER_VERSION,
    ENV_OS_VERSION,
    ENV_OSD_MAJOR,
    ENV_OSD_MAJOR_NUMBER,
    ENV_OSD_PORT,
    ENV_OSD_VERSION,
    ENV_PASSWORD,
    ENV_PORT,
    ENV_SEC_CONFIG_FILE,
    ENV_SEC_CONFIG_PATH,
    ENV_SRC,
    ENV_WAZUH_DASHBOARD_BASE,
    ENV_WAZUH_DASHBOARD_CONF,
    ENV_WAZUH_STACK,
    ENV_WAZUH_VERSION_DEVELOPMENT,
    IMPOSTER_VERSION,
    OSD_MAJOR_2X,
    SECURITY_CONFIG_PATHS,
    AgentsUp,
    Profile,
)
from osd_dev.core.errors import ConfigurationError
from osd_dev.core.messages import msg_invalid_manifest
from osd_dev.environment.writer import EnvironmentWriter
from osd_dev.resolve.mode import ModeResolver, ModeState

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

NOT_A_NUMBER = "NaN"


def parse_major_number(version: str) -> str:
    """
    Leading integer of the first dot-delimited segment, as a string.

    Non-numeric input yields "NaN"; callers write it through unchanged.
    """
    match = _LEADING_INT.match(version.split(".")[0])
    if not match:
        return NOT_A_NUMBER
    return str(int(match.group(1)))


def compose_project_name(osd_version: str) -> str:
    return f"os-dev-{osd_version.replace('.', '')}"


class EnvironmentConfigurator:
    """
    Projects a resolved Config into the variables read by the Compose file.

    All output goes through ``writer``; pre-set values (PASSWORD, PORT,
    WAZUH_STACK) are read back from it as well.
    """

    def __init__(self, writer: EnvironmentWriter, mode_resolver: ModeResolver | None = None) -> None:
        self._writer = writer
        self._mode_resolver = mode_resolver or ModeResolver()

    def initialize_base_environment(self, config: Config) -> None:
        w = self._writer
        w.set(ENV_PASSWORD, w.get(ENV_PASSWORD) or DEFAULT_PASSWORD)
        w.set(ENV_OS_VERSION, config.os_version or DEFAULT_OS_VERSION)
        w.set(ENV_OSD_VERSION, config.osd_version or DEFAULT_OSD_VERSION)
        w.set(ENV_OSD_PORT, w.get(ENV_PORT) or DEFAULT_OSD_PORT)
        w.set(ENV_IMPOSTER_VERSION, IMPOSTER_VERSION)
        # host path, not the container alias: Compose resolves mounts on the host
        w.set(ENV_SRC, config.plugins_root or "")

    def set_version_derived_environment(self, osd_version: str, env_paths: EnvironmentPaths) -> None:
        w = self._writer
        major = parse_major_number(osd_version)
        if major == NOT_A_NUMBER:
            logger.warning("OSD version %r has no numeric major component.", osd_version)
        w.set(ENV_OSD_MAJOR_NUMBER, major)
        w.set(ENV_COMPOSE_PROJECT_NAME, compose_project_name(osd_version))
        w.set(ENV_WAZUH_STACK, w.get(ENV_WAZUH_STACK) or "")

        development_version = self._read_manifest_version(env_paths.package_json_path)
        if development_version is not None:
            w.set(ENV_WAZUH_VERSION_DEVELOPMENT, development_version)

        # development stacks always target the OSD 2.x line
        w.set(ENV_OSD_MAJOR, OSD_MAJOR_2X)

    def _read_manifest_version(self, path: str) -> str | None:
        manifest = Path(path)
        if not manifest.exists():
            logger.debug("Package manifest %s not found; skipping development version.", path)
            return None
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(msg_invalid_manifest(path, str(e)), details={"path": path}) from e

        version = data.get("version") if isinstance(data, Mapping) else None
        return str(version) if version is not None else None

    def configure_mode_and_security(self, config: Config) -> str:
        """
        Select configuration files and resolve the Compose profile.

        Returns the profile string, with an agents suffix for server-local
        (e.g. "server-local-rpm").
        """
        w = self._writer
        osd_major = OSD_MAJOR_2X
        w.set(ENV_WAZUH_DASHBOARD_CONF, f"./config/{osd_major}/osd/opensearch_dashboards.yml")
        w.set(ENV_SEC_CONFIG_FILE, f"./config/{osd_major}/os/config.yml")
        w.set(ENV_SEC_CONFIG_PATH, SECURITY_CONFIG_PATHS[osd_major])

        if config.enable_saml or config.mode == Profile.SAML:
            w.set(ENV_WAZUH_DASHBOARD_CONF, f"./config/{osd_major}/osd/opensearch_dashboards_saml.yml")
            w.set(ENV_SEC_CONFIG_FILE, f"./config/{osd_major}/os/config-saml.yml")

        resolution = self._mode_resolver.finalize(config)

        if resolution.state is ModeState.SERVER:
            w.set(ENV_WAZUH_STACK, resolution.version or "")
            return Profile.SERVER.value

        if resolution.state is ModeState.SERVER_LOCAL:
            w.set(ENV_IMAGE_TAG, resolution.version or "")
            if config.agents_up:
                return f"{Profile.SERVER_LOCAL}-{AgentsUp(config.agents_up)}"
            return Profile.SERVER_LOCAL.value

        if resolution.state is ModeState.SAML:
            return Profile.SAML.value

        return Profile.STANDARD.value

    def configure_optional_features(self, config: Config) -> None:
        if config.use_indexer_from_package and config.indexer_package_tag:
            self._writer.set(ENV_IMAGE_INDEXER_PACKAGE_TAG, config.indexer_package_tag)
        if config.use_dashboard_from_source and config.dashboard_base:
            self._writer.set(ENV_WAZUH_DASHBOARD_BASE, config.dashboard_base)

    def export_repositories(self, repositories: Mapping[str, str]) -> None:
        for var_name, path in repositories.items():
            self._writer.set(var_name, path)
