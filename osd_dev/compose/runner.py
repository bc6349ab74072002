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
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from osd_dev.core.constants import Action

logger = logging.getLogger(__name__)

# Exit status used by shells when a command cannot be found
EXIT_COMMAND_NOT_FOUND = 127

ACTION_ARGS: Mapping[Action, tuple[str, ...]] = {
    Action.UP: ("up", "-d"),
    Action.DOWN: ("down", "-v"),
    Action.STOP: ("stop",),
    Action.START: ("start",),
}


@dataclass(frozen=True, slots=True)
class DockerComposeRunner:
    """
    Invokes ``docker compose`` for one action and profile.

    Compose itself is an external program; the resolved environment is
    handed over as the child process environment.
    """

    compose_file: str
    executable: Sequence[str] = ("docker", "compose")

    def build_command(self, action: Action, profile: str) -> list[str]:
        return [
            *self.executable,
            "-f",
            self.compose_file,
            "--profile",
            profile,
            *ACTION_ARGS[Action(action)],
        ]

    def run(self, action: Action, profile: str, env: Mapping[str, str]) -> int:
        cmd = self.build_command(action, profile)
        logger.info("Running: %s", shlex.join(cmd))
        try:
            result = subprocess.run(cmd, env=dict(env), check=False)
        except FileNotFoundError:
            logger.error("'%s' was not found on PATH.", self.executable[0])
            return EXIT_COMMAND_NOT_FOUND
        return result.returncode
