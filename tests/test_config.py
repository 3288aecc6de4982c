# tests/test_config.py
import logging
import logging.handlers
import os

import pytest
import yaml

from chainview.config.settings import CONFIG_ENV_VAR, Settings
from chainview.exceptions import ConfigError
from chainview.monitoring.logging_config import LogConfig


class TestSettings:
    def test_creates_default_config(self, temp_dir):
        path = os.path.join(temp_dir, "config", "chainview.yaml")
        settings = Settings(path)

        assert os.path.exists(path)
        assert settings.get("listing.block_height_floor") == 1_200_000
        assert settings.get("listing.recent_window") == 3600
        assert settings.get("listing.limit") == 20
        assert settings.get("monitor.refresh_interval") == 300

    def test_partial_file_is_merged_with_defaults(self, temp_dir):
        path = os.path.join(temp_dir, "chainview.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({"listing": {"limit": 5}, "database": {"path": "/tmp/x.db"}}, f)

        settings = Settings(path)
        assert settings.get("listing.limit") == 5
        assert settings.get("listing.block_height_floor") == 1_200_000
        assert settings.get("database.path") == "/tmp/x.db"

    def test_get_missing_key(self, temp_dir):
        settings = Settings(os.path.join(temp_dir, "chainview.yaml"))
        assert settings.get("nope.missing", "fallback") == "fallback"
        assert settings.get("listing.limit.deeper") is None

    def test_environment_variable(self, temp_dir, monkeypatch):
        path = os.path.join(temp_dir, "from_env.yaml")
        monkeypatch.setenv(CONFIG_ENV_VAR, path)
        assert Settings().config_path == path

    def test_invalid_file(self, temp_dir):
        path = os.path.join(temp_dir, "broken.yaml")
        with open(path, "w") as f:
            f.write("- just\n- a list\n")
        with pytest.raises(ConfigError):
            Settings(path)


class TestLogConfig:
    def test_setup_logging(self, temp_dir):
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            LogConfig(log_dir=os.path.join(temp_dir, "logs"), level="WARNING").setup_logging()
            added = [h for h in root.handlers if h not in before]
            assert len(added) == 2
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in added)
            assert os.listdir(os.path.join(temp_dir, "logs"))
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
