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
Host <-> container path translation.

The CLI runs inside the orchestration container, while Compose mounts are
expressed in host paths. A host path is visible to us only if it lives under
one of the mounted host roots; translation is plain prefix substitution.
"""

import posixpath
from pathlib import Path

from osd_dev.core.config import EnvironmentPaths
from osd_dev.core.errors import ConfigurationError, ValidationError
from osd_dev.core.messages import msg_no_mounted_roots, msg_path_not_found, msg_path_not_under_mount


def strip_trailing_slash(path: str) -> str:
    """Remove trailing slashes, keeping a bare ``/`` intact."""
    if not path:
        return path
    stripped = path.rstrip("/")
    return stripped or "/"


def _mounts(env_paths: EnvironmentPaths) -> list[tuple[str, str]]:
    mounts: list[tuple[str, str]] = []
    if env_paths.current_repo_host_root:
        mounts.append(
            (
                strip_trailing_slash(env_paths.current_repo_host_root),
                strip_trailing_slash(env_paths.current_repo_container_root),
            )
        )
    if env_paths.sibling_repo_host_root:
        mounts.append(
            (
                strip_trailing_slash(env_paths.sibling_repo_host_root),
                strip_trailing_slash(env_paths.sibling_repo_container_root),
            )
        )
    # most specific mount first: the current repo usually sits inside the sibling root
    mounts.sort(key=lambda m: len(m[0]), reverse=True)
    return mounts


def to_container_path(host_path: str, env_paths: EnvironmentPaths) -> str:
    """
    Translate a host path into the container path it is mounted at.

    Returns an empty string when the path is not under any mounted host root.
    """
    if not host_path or not host_path.startswith("/"):
        return ""
    path = strip_trailing_slash(host_path)

    for host_root, container_root in _mounts(env_paths):
        if path == host_root:
            return container_root
        prefix = host_root if host_root.endswith("/") else host_root + "/"
        if path.startswith(prefix):
            rest = path[len(prefix) :]
            return f"{container_root.rstrip('/')}/{rest}"
    return ""


def ensure_accessible_host_path(path: str, label: str, env_paths: EnvironmentPaths) -> str:
    """
    Check that a host path is mounted and exists inside the container.

    Returns the container path. ``label`` names the offending input in the
    error message.
    """
    if not _mounts(env_paths):
        raise ConfigurationError(msg_no_mounted_roots(label))

    container_path = to_container_path(path, env_paths)
    if not container_path:
        raise ValidationError(msg_path_not_under_mount(label, path), details={"path": path})

    if not Path(container_path).exists():
        raise ValidationError(
            msg_path_not_found(label, path, container_path),
            details={"path": path, "container_path": container_path},
        )
    return container_path


def join_host_path(root: str, *parts: str) -> str:
    """Join and normalize a host path (no filesystem access)."""
    return strip_trailing_slash(posixpath.normpath(posixpath.join(root, *parts)))
