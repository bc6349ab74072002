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

from osd_dev.environment.configurator import EnvironmentConfigurator
from osd_dev.environment.writer import EnvironmentWriter, MappingEnvironmentWriter, ProcessEnvironmentWriter

__all__ = [
    "EnvironmentConfigurator",
    "EnvironmentWriter",
    "MappingEnvironmentWriter",
    "ProcessEnvironmentWriter",
]
