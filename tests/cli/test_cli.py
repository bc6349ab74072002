"""Tests for the osd-dev CLI entry point."""

import subprocess
from unittest.mock import patch

import pytest
from conftest import CURRENT_HOST, SIBLING_HOST, make_repo
from osd_dev.cli.exitcodes import EXIT_CONFIGURATION_ERROR, EXIT_OK, EXIT_VALIDATION_ERROR, exit_code_for_error
from osd_dev.cli.main import main, resolve_run
from osd_dev.core.errors import ConfigurationError, ValidationError


@pytest.fixture
def workspace(mounts):
    """Mounted layout with the built-in plugins checked out."""
    for name in ("main", "wazuh-core", "wazuh-check-updates"):
        make_repo(mounts.current / "plugins" / name, version="5.0.0")
    return mounts


def ok_run():
    return patch(
        "osd_dev.compose.runner.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0),
    )


class TestResolveRun:
    def test_server_mode(self, workspace):
        run = resolve_run(["up", "--server", "4.12.0"], workspace.environ())

        assert run.action == "up"
        assert run.profile == "server"
        assert run.exported["WAZUH_STACK"] == "4.12.0"
        assert run.exported["SRC"] == f"{CURRENT_HOST}/plugins"
        assert run.exported["REPO_MAIN"] == f"{CURRENT_HOST}/plugins/main"
        assert run.exported["WAZUH_VERSION_DEVELOPMENT"] == "5.0.0"
        assert run.exported["COMPOSE_PROJECT_NAME"] == "os-dev-2191"

    def test_saml_mode(self, workspace):
        run = resolve_run(["up", "--saml"], workspace.environ())
        assert run.profile == "saml"
        assert run.exported["WAZUH_DASHBOARD_CONF"].endswith("opensearch_dashboards_saml.yml")
        assert run.exported["SEC_CONFIG_FILE"].endswith("config-saml.yml")

    def test_server_local_with_agents(self, workspace):
        run = resolve_run(["up", "--server-local", "dev", "-a", "none"], workspace.environ())
        assert run.profile == "server-local-without"
        assert run.exported["IMAGE_TAG"] == "dev"

    def test_extra_repository_is_exported(self, workspace):
        make_repo(workspace.siblings / "wazuh-security-dashboards-plugin")
        run = resolve_run(["up", "--repo", "security"], workspace.environ())
        assert run.exported["REPO_WAZUH_SECURITY_DASHBOARDS_PLUGIN"] == f"{SIBLING_HOST}/wazuh-security-dashboards-plugin"

    def test_ambient_environment_is_kept_but_not_exported(self, workspace):
        environ = {**workspace.environ(), "PATH": "/usr/bin"}
        run = resolve_run(["up"], environ)
        assert run.environment["PATH"] == "/usr/bin"
        assert "PATH" not in run.exported
        assert run.profile == "standard"

    def test_action_is_required(self, workspace):
        with pytest.raises(ValidationError, match="An action is required"):
            resolve_run(["--saml"], workspace.environ())


class TestMain:
    def test_runs_compose_with_resolved_environment(self, workspace):
        with ok_run() as run:
            code = main(["up", "--server", "4.12.0"], environ=workspace.environ())

        assert code == EXIT_OK
        cmd = run.call_args.args[0]
        assert cmd[:2] == ["docker", "compose"]
        assert cmd[cmd.index("--profile") + 1] == "server"
        assert run.call_args.kwargs["env"]["WAZUH_STACK"] == "4.12.0"

    def test_conflicting_server_flags_never_reach_compose(self, workspace, capsys):
        with ok_run() as run:
            code = main(["up", "--server", "1.0", "--server-local", "tag"], environ=workspace.environ())

        assert code == EXIT_VALIDATION_ERROR
        run.assert_not_called()
        assert "osd-dev: error:" in capsys.readouterr().err

    def test_missing_ambient_environment(self, capsys):
        with ok_run() as run:
            code = main(["up", "--base"], environ={})

        assert code == EXIT_CONFIGURATION_ERROR
        run.assert_not_called()
        assert "SIBLING_REPO_HOST_ROOT" in capsys.readouterr().err

    def test_missing_plugin_checkout(self, mounts, capsys):
        with ok_run() as run:
            code = main(["up"], environ=mounts.environ())

        assert code == EXIT_VALIDATION_ERROR
        run.assert_not_called()
        assert "Could not find repository 'main'" in capsys.readouterr().err

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"], environ={})
        assert exc.value.code == 1
        assert "Flags" in capsys.readouterr().out


def test_exit_code_policy():
    assert exit_code_for_error(ValidationError("x")) == EXIT_VALIDATION_ERROR
    assert exit_code_for_error(ConfigurationError("x")) == EXIT_CONFIGURATION_ERROR
