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

# Argument scanning
from osd_dev.resolve.arguments import DefaultArgumentParser, print_usage_and_exit, usage_text

# Mode reconciliation
from osd_dev.resolve.mode import ModeResolution, ModeResolver, ModeState

# Repository lookup
from osd_dev.resolve.repositories import RepositoryResolver, required_repositories

__all__ = [
    "DefaultArgumentParser",
    "ModeResolution",
    "ModeResolver",
    "ModeState",
    "RepositoryResolver",
    "print_usage_and_exit",
    "required_repositories",
    "usage_text",
]
