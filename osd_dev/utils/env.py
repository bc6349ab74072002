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

import re

from osd_dev.core.constants import REPOSITORY_ENV_PREFIX, SECURITY_PLUGIN_ALIASES, SECURITY_PLUGIN_REPO_NAME

_NON_ALNUM = re.compile(r"[^A-Z0-9]+")


def canonical_repository_name(name: str) -> str:
    """Security plugin aliases collapse onto the one repository they name."""
    return SECURITY_PLUGIN_REPO_NAME if name in SECURITY_PLUGIN_ALIASES else name


def to_repository_env_var(name: str) -> str:
    """
    Environment variable carrying a repository's host path.

    e.g. "wazuh-core" -> "REPO_WAZUH_CORE"
    """
    upper = canonical_repository_name(name).upper()
    return REPOSITORY_ENV_PREFIX + _NON_ALNUM.sub("_", upper).strip("_")
