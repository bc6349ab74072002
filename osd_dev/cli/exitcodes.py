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

from osd_dev.core.errors import ConfigurationError, DevEnvError

EXIT_OK = 0
# -h/--help exits with this status as well
EXIT_VALIDATION_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2


def exit_code_for_error(error: DevEnvError) -> int:
    """
    Policy:
      - ConfigurationError (ambient setup is wrong) => EXIT_CONFIGURATION_ERROR
      - ValidationError (fix the invocation)        => EXIT_VALIDATION_ERROR
    """
    if isinstance(error, ConfigurationError):
        return EXIT_CONFIGURATION_ERROR
    return EXIT_VALIDATION_ERROR
