"""Tests for layered configuration loading."""

import json

import pytest

from spot_reconciler.config.manager import ConfigurationManager
from spot_reconciler.config.schemas import AppConfig, PollerConfig
from spot_reconciler.domain.base.exceptions import ConfigurationError

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in (
        "SPOT_RECONCILER_REGIONS", "SPOT_RECONCILER_BATCH_SIZE", "SPOT_RECONCILER_POLL_INTERVAL",
        "SPOT_RECONCILER_STORAGE", "SPOT_RECONCILER_STATE_FILE", "SPOT_RECONCILER_WORKDIR",
        "SPOT_RECONCILER_LOGDIR", "AWS_ENDPOINT_URL", "AWS_PROFILE", "LOG_LEVEL", "LOG_DESTINATION",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SPOT_RECONCILER_CONFDIR", str(tmp_path / "no-such-dir"))

def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)

class TestConfigurationManager:
    """Test configuration sources and their precedence."""

    def test_defaults(self):
        config = ConfigurationManager().app_config

        assert isinstance(config, AppConfig)
        assert config.provider.regions == ["us-east-1"]
        assert config.poller.batch_size == 100
        assert config.poller.poll_interval_seconds == 25
        assert config.storage.strategy == "json"
        assert config.storage.json_strategy.path == "./spot_requests.json"
        assert config.provider.endpoint_url is None

    def test_file_overrides_defaults(self, tmp_path):
        path = write_config(tmp_path, {
            "provider": {"regions": ["us-west-2", "eu-west-1"]},
            "poller": {"batch_size": 50},
        })

        config = ConfigurationManager(path).app_config

        assert config.provider.regions == ["us-west-2", "eu-west-1"]
        assert config.poller.batch_size == 50
        assert config.poller.poll_interval_seconds == 25

    def test_default_file_in_confdir_is_loaded(self, tmp_path, monkeypatch):
        confdir = tmp_path / "conf"
        confdir.mkdir()
        (confdir / "spot_reconciler.json").write_text(json.dumps({"poller": {"batch_size": 10}}))
        monkeypatch.setenv("SPOT_RECONCILER_CONFDIR", str(confdir))

        assert ConfigurationManager().app_config.poller.batch_size == 10

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, {"poller": {"batch_size": 50}})
        monkeypatch.setenv("SPOT_RECONCILER_BATCH_SIZE", "20")
        monkeypatch.setenv("SPOT_RECONCILER_REGIONS", "us-east-1, ap-south-1")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = ConfigurationManager(path).app_config

        assert config.poller.batch_size == 20
        assert config.provider.regions == ["us-east-1", "ap-south-1"]
        assert config.logging.level.value == "DEBUG"

    def test_placeholders_are_interpolated(self, monkeypatch):
        monkeypatch.setenv("SPOT_RECONCILER_WORKDIR", "/var/lib/spot")

        config = ConfigurationManager().app_config

        assert config.storage.json_strategy.path == "/var/lib/spot/spot_requests.json"

    def test_update_config_invalidates_cached_config(self):
        manager = ConfigurationManager()
        assert manager.app_config.poller.batch_size == 100

        manager.update_config({"poller": {"batch_size": 5}})

        assert manager.app_config.poller.batch_size == 5

    def test_reload_picks_up_file_changes(self, tmp_path):
        path = write_config(tmp_path, {"poller": {"batch_size": 50}})
        manager = ConfigurationManager(path)
        assert manager.app_config.poller.batch_size == 50

        write_config(tmp_path, {"poller": {"batch_size": 10}, "provider": {"regions": ["eu-west-1"]}})
        manager.reload()

        assert manager.app_config.poller.batch_size == 10
        assert manager.app_config.provider.regions == ["eu-west-1"]

    def test_missing_explicit_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(tmp_path / "missing.json"))

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{broken")

        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(path))

    @pytest.mark.parametrize("override", [
        {"poller": {"batch_size": 0}},
        {"poller": {"batch_size": 5000}},
        {"provider": {"regions": []}},
        {"provider": {"regions": ["us-east-1", "us-east-1"]}},
        {"storage": {"strategy": "dynamodb"}},
    ])
    def test_invalid_values_raise_configuration_error(self, tmp_path, override):
        manager = ConfigurationManager(write_config(tmp_path, override))

        with pytest.raises(ConfigurationError) as exc:
            manager.app_config
        assert exc.value.missing_fields

class TestPollerConfig:
    """Test poller schema validation."""

    def test_max_workers_must_be_positive(self):
        with pytest.raises(ValueError):
            PollerConfig(max_workers=0)

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            PollerConfig(poll_interval_seconds=-1)
