"""
Configuration loader unit tests.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json

import pytest

from proctor.core.config import DEFAULT_TEMPLATE, ConfigLoader, ProctorConfig
from proctor.core.errors import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    def write(data):
        path = tmp_path / "proctor.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)

    return write


@pytest.mark.unit
class TestLayering:
    def test_defaults(self):
        config = ConfigLoader.load_config(environ={})

        assert config.box_name == "cloudfoundry/bosh-lite"
        assert config.region == "us-east-1"
        assert config.atlas_url == "https://app.vagrantup.com"
        assert config.bucket == ""

    def test_file_overrides_defaults(self, config_file):
        path = config_file({"region": "eu-west-1", "bucket": "file-bucket"})

        config = ConfigLoader.load_config(config_file=path, environ={})

        assert config.region == "eu-west-1"
        assert config.bucket == "file-bucket"
        assert config.box_name == "cloudfoundry/bosh-lite"

    def test_env_overrides_file(self, config_file):
        path = config_file({"region": "eu-west-1", "bucket": "file-bucket"})

        config = ConfigLoader.load_config(
            config_file=path, environ={"PROCTOR_REGION": "ap-south-1"}
        )

        assert config.region == "ap-south-1"
        assert config.bucket == "file-bucket"

    def test_cli_overrides_env_and_skips_none(self):
        config = ConfigLoader.load_config(
            overrides={"region": "us-west-2", "bucket": None},
            environ={"PROCTOR_REGION": "ap-south-1", "PROCTOR_BUCKET": "env-bucket"},
        )

        assert config.region == "us-west-2"
        assert config.bucket == "env-bucket"

    def test_config_file_from_env(self, config_file):
        path = config_file({"box_name": "acme/training"})

        config = ConfigLoader.load_config(environ={"PROCTOR_CONFIG_FILE": path})

        assert config.box_name == "acme/training"

    def test_unknown_env_keys_ignored(self):
        config = ConfigLoader.load_config(environ={"PROCTOR_FLAVOUR": "x"})

        assert not hasattr(config, "flavour")


@pytest.mark.unit
class TestErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="config file not found"):
            ConfigLoader.load_config(config_file=str(tmp_path / "nope.json"), environ={})

    def test_invalid_json(self, config_file):
        with pytest.raises(ConfigurationError, match="invalid JSON"):
            ConfigLoader.load_config(config_file=config_file("{not json"), environ={})

    def test_non_object_json(self, config_file):
        with pytest.raises(ConfigurationError, match="must contain a JSON object"):
            ConfigLoader.load_config(config_file=config_file("[1, 2]"), environ={})


@pytest.mark.unit
class TestProctorConfig:
    def make(self, **kwargs):
        values = {"box_name": "b", "region": "us-east-1", "atlas_url": "https://a"}
        values.update(kwargs)
        return ProctorConfig(**values)

    def test_require_bucket(self):
        assert self.make(bucket="keys").require_bucket() == "keys"

        with pytest.raises(ConfigurationError, match="no S3 bucket configured"):
            self.make().require_bucket()

    def test_default_template_is_packaged(self):
        template = json.loads(self.make().load_template())

        assert DEFAULT_TEMPLATE.exists()
        assert set(template["Parameters"]) >= {"AMI", "KeyName", "InstanceCount"}

    def test_custom_template(self, tmp_path):
        path = tmp_path / "stack.json"
        path.write_text('{"Resources": {}}')

        assert self.make(template_file=str(path)).load_template() == '{"Resources": {}}'

    def test_missing_template(self, tmp_path):
        with pytest.raises(ConfigurationError, match="could not read stack template"):
            self.make(template_file=str(tmp_path / "missing.json")).load_template()
