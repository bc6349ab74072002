import json

import pytest
from osd_dev.core.config import Config, EnvironmentPaths
from osd_dev.core.constants import AgentsUp
from osd_dev.core.errors import ConfigurationError, ValidationError
from osd_dev.environment.configurator import EnvironmentConfigurator, compose_project_name, parse_major_number
from osd_dev.environment.writer import MappingEnvironmentWriter, ProcessEnvironmentWriter


def make_config(**fields) -> Config:
    config = Config()
    for name, value in fields.items():
        setattr(config, name, value)
    return config


def configurator(seed=None) -> tuple[EnvironmentConfigurator, MappingEnvironmentWriter]:
    writer = MappingEnvironmentWriter(seed)
    return EnvironmentConfigurator(writer), writer


# ----------------------------
# initialize_base_environment
# ----------------------------


def test_base_environment_defaults():
    conf, writer = configurator()
    conf.initialize_base_environment(make_config(plugins_root="/host/wdp/plugins"))

    assert writer.written == {
        "PASSWORD": "admin",
        "OS_VERSION": "2.19.1",
        "OSD_VERSION": "2.19.1",
        "OSD_PORT": "5601",
        "IMPOSTER_VERSION": "3.44.1",
        "SRC": "/host/wdp/plugins",
    }


def test_base_environment_keeps_preset_values():
    conf, writer = configurator({"PASSWORD": "s3cret", "PORT": "5602"})
    conf.initialize_base_environment(make_config(os_version="2.18.0", osd_version="2.18.0"))

    assert writer.get("PASSWORD") == "s3cret"
    assert writer.get("OSD_PORT") == "5602"
    assert writer.get("OS_VERSION") == "2.18.0"
    assert writer.get("SRC") == ""


# ----------------------------
# set_version_derived_environment
# ----------------------------


@pytest.mark.parametrize(
    "version, expected",
    [("2.19.1", "2"), ("10.0", "10"), ("3", "3"), ("2x.1", "2"), ("latest", "NaN"), ("", "NaN"), (".1", "NaN")],
)
def test_parse_major_number(version, expected):
    assert parse_major_number(version) == expected


def test_compose_project_name():
    assert compose_project_name("2.19.1") == "os-dev-2191"


def test_version_derived_environment(tmp_path):
    manifest = tmp_path / "package.json"
    manifest.write_text(json.dumps({"name": "wazuh", "version": "5.0.0"}), encoding="utf-8")
    conf, writer = configurator({"WAZUH_STACK": "4.12.0"})

    conf.set_version_derived_environment("2.19.1", EnvironmentPaths(package_json_path=str(manifest)))

    assert writer.get("OSD_MAJOR_NUMBER") == "2"
    assert writer.get("COMPOSE_PROJECT_NAME") == "os-dev-2191"
    assert writer.get("WAZUH_STACK") == "4.12.0"
    assert writer.get("WAZUH_VERSION_DEVELOPMENT") == "5.0.0"
    assert writer.get("OSD_MAJOR") == "2.x"


def test_major_track_is_pinned_and_nan_is_written(tmp_path, caplog):
    conf, writer = configurator()
    conf.set_version_derived_environment("next", EnvironmentPaths(package_json_path=str(tmp_path / "none.json")))

    assert writer.get("OSD_MAJOR_NUMBER") == "NaN"
    assert writer.get("OSD_MAJOR") == "2.x"
    assert writer.get("WAZUH_STACK") == ""
    assert writer.get("WAZUH_VERSION_DEVELOPMENT") is None
    assert "no numeric major component" in caplog.text


def test_invalid_manifest_is_configuration_error(tmp_path):
    manifest = tmp_path / "package.json"
    manifest.write_text("{not json", encoding="utf-8")
    conf, _ = configurator()
    with pytest.raises(ConfigurationError, match="package manifest"):
        conf.set_version_derived_environment("2.19.1", EnvironmentPaths(package_json_path=str(manifest)))


# ----------------------------
# configure_mode_and_security
# ----------------------------


def test_standard_profile():
    conf, writer = configurator()
    assert conf.configure_mode_and_security(Config()) == "standard"
    assert writer.get("WAZUH_DASHBOARD_CONF") == "./config/2.x/osd/opensearch_dashboards.yml"
    assert writer.get("SEC_CONFIG_FILE") == "./config/2.x/os/config.yml"
    assert writer.get("SEC_CONFIG_PATH") == "/usr/share/opensearch/config/opensearch-security"


def test_saml_profile_uses_saml_config_files():
    conf, writer = configurator()
    assert conf.configure_mode_and_security(make_config(enable_saml=True, mode="saml")) == "saml"
    assert writer.get("WAZUH_DASHBOARD_CONF") == "./config/2.x/osd/opensearch_dashboards_saml.yml"
    assert writer.get("SEC_CONFIG_FILE") == "./config/2.x/os/config-saml.yml"


def test_server_profile_exports_stack_version():
    conf, writer = configurator()
    assert conf.configure_mode_and_security(make_config(mode="server", mode_version="4.12.0")) == "server"
    assert writer.get("WAZUH_STACK") == "4.12.0"


def test_server_profile_without_version():
    conf, writer = configurator()
    with pytest.raises(ValidationError):
        conf.configure_mode_and_security(make_config(mode="server", mode_version=""))
    assert writer.get("WAZUH_STACK") is None


def test_saml_with_server_keeps_saml_files():
    conf, writer = configurator()
    profile = conf.configure_mode_and_security(make_config(enable_saml=True, mode="server", mode_version="4.12.0"))
    assert profile == "server"
    assert writer.get("SEC_CONFIG_FILE") == "./config/2.x/os/config-saml.yml"


@pytest.mark.parametrize("agents_up, expected", [(None, "server-local"), (AgentsUp.RPM, "server-local-rpm")])
def test_server_local_profile(agents_up, expected):
    conf, writer = configurator()
    config = make_config(mode="server-local", mode_version="dev-tag", agents_up=agents_up)
    assert conf.configure_mode_and_security(config) == expected
    assert writer.get("IMAGE_TAG") == "dev-tag"


def test_server_local_without_tag():
    conf, _ = configurator()
    with pytest.raises(ValidationError):
        conf.configure_mode_and_security(make_config(mode="server-local"))


def test_composite_mode_token_is_rejected():
    conf, _ = configurator()
    with pytest.raises(ValidationError, match="--agents-up"):
        conf.configure_mode_and_security(make_config(mode="server-local-rpm", mode_version="tag"))


# ----------------------------
# optional features / repositories
# ----------------------------


def test_optional_features():
    conf, writer = configurator()
    conf.configure_optional_features(
        make_config(
            use_indexer_from_package=True,
            indexer_package_tag="4.12.0-rc1",
            use_dashboard_from_source=True,
            dashboard_base="/host/src/wazuh-dashboard",
        )
    )
    assert writer.written == {
        "IMAGE_INDEXER_PACKAGE_TAG": "4.12.0-rc1",
        "WAZUH_DASHBOARD_BASE": "/host/src/wazuh-dashboard",
    }


def test_optional_features_off():
    conf, writer = configurator()
    conf.configure_optional_features(make_config(use_indexer_from_package=True))
    assert writer.written == {}


def test_export_repositories_and_process_writer():
    environ = {"PATH": "/usr/bin"}
    conf = EnvironmentConfigurator(ProcessEnvironmentWriter(environ))
    conf.export_repositories({"REPO_MAIN": "/host/wdp/plugins/main"})
    assert environ == {"PATH": "/usr/bin", "REPO_MAIN": "/host/wdp/plugins/main"}


def test_mapping_writer_does_not_touch_seed():
    seed = {"PASSWORD": "x"}
    writer = MappingEnvironmentWriter(seed)
    writer.set("PASSWORD", "y")
    assert seed == {"PASSWORD": "x"}
    assert writer.to_dict() == {"PASSWORD": "y"}
