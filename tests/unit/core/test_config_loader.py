"""Tests for project configuration loading."""

from pathlib import Path

import pytest

from cfn_deploy.api.exceptions import ConfigError
from cfn_deploy.core import deploy_defaults, find_config_file, load_config


class TestFindConfigFile:
    def test_found(self, tmp_path: Path) -> None:
        config = tmp_path / ".cfn-deploy.yaml"
        config.write_text("deploy: {}\n")
        assert find_config_file(tmp_path) == config

    def test_absent(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None


class TestLoadConfig:
    def test_expands_environment_variables(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEPLOY_BUCKET", "artifacts")
        config = tmp_path / "config.yaml"
        config.write_text("deploy:\n  bucket: ${DEPLOY_BUCKET}\n")

        assert load_config(config) == {"deploy": {"bucket": "artifacts"}}

    def test_empty_file(self, tmp_path: Path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("")
        assert load_config(config) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("deploy: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(config)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("- one\n- two\n")
        with pytest.raises(ConfigError):
            load_config(config)


class TestDeployDefaults:
    def test_maps_keys_to_options(self) -> None:
        defaults = deploy_defaults({
            "deploy": {
                "stack_name": "my-stack",
                "main": "Main.json",
                "bucket": "artifacts",
                "bucket_folder": "cfn",
                "timeout": 60,
            }
        })
        assert defaults == {
            "stackname": "my-stack",
            "main_template": "Main.json",
            "bucket": "artifacts",
            "bucketfolder": "cfn",
            "timeout": 60,
        }

    def test_mappings_become_pair_strings(self) -> None:
        defaults = deploy_defaults({
            "deploy": {
                "parameters": {"Env": "prod", "Size": "small"},
                "tags": "Team=infra",
            }
        })
        assert defaults["params"] == "Env=prod,Size=small"
        assert defaults["tags"] == "Team=infra"

    def test_no_deploy_section(self) -> None:
        assert deploy_defaults({}) == {}

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError):
            deploy_defaults({"deploy": {"stackk": "typo"}})

    def test_bad_params_type(self) -> None:
        with pytest.raises(ConfigError):
            deploy_defaults({"deploy": {"params": ["Env=prod"]}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError):
            deploy_defaults({"deploy": "my-stack"})
