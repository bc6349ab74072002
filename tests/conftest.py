import json
from dataclasses import dataclass
from pathlib import Path

import pytest
from osd_dev.core.config import EnvironmentPaths

CURRENT_HOST = "/host/wazuh-dashboard-plugins"
SIBLING_HOST = "/host/src"


@dataclass
class Mounts:
    """
    Fake host layout: host roots are mapped onto directories under tmp_path,
    the same way the dev container mounts them.
    """

    env_paths: EnvironmentPaths
    current: Path  # container side of CURRENT_HOST
    siblings: Path  # container side of SIBLING_HOST

    def environ(self) -> dict[str, str]:
        return {
            "CURRENT_REPO_HOST_ROOT": CURRENT_HOST,
            "SIBLING_REPO_HOST_ROOT": SIBLING_HOST,
            "CURRENT_REPO_CONTAINER_ROOT": str(self.current),
            "SIBLING_REPO_CONTAINER_ROOT": str(self.siblings),
            "PACKAGE_JSON_PATH": self.env_paths.package_json_path,
        }


def make_repo(path: Path, version: str = "5.0.0") -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "package.json").write_text(json.dumps({"name": path.name, "version": version}), encoding="utf-8")
    return path


@pytest.fixture
def mounts(tmp_path: Path) -> Mounts:
    current = tmp_path / "current"
    siblings = tmp_path / "siblings"
    (current / "plugins").mkdir(parents=True)
    siblings.mkdir()
    env_paths = EnvironmentPaths(
        current_repo_host_root=CURRENT_HOST,
        sibling_repo_host_root=SIBLING_HOST,
        current_repo_container_root=str(current),
        sibling_repo_container_root=str(siblings),
        package_json_path=str(current / "plugins" / "main" / "package.json"),
    )
    return Mounts(env_paths=env_paths, current=current, siblings=siblings)
