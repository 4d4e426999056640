"""Tests for environment-driven settings."""

from pathlib import Path

from stockroom.infrastructure.config import DEFAULT_DATA_DIR, Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.log_level == "WARNING"

    def test_from_environment(self, tmp_path):
        settings = Settings.from_env({
            "STOCKROOM_DATA_DIR": str(tmp_path),
            "STOCKROOM_LOG_LEVEL": "debug",
        })
        assert settings.data_dir == tmp_path
        assert settings.log_level == "DEBUG"
        assert settings.activity_path == tmp_path / "activity_log.json"
        assert settings.inventory_path == tmp_path / "inventory.json"
        assert settings.users_path == tmp_path / "users.json"

    def test_override_wins(self, tmp_path):
        settings = Settings.from_env({"STOCKROOM_DATA_DIR": "/srv/stockroom"})
        settings = settings.override(data_dir=tmp_path, log_level="info")
        assert settings.data_dir == tmp_path
        assert settings.log_level == "INFO"

    def test_override_none_keeps_values(self):
        settings = Settings(data_dir=Path("/srv/stockroom"))
        assert settings.override() == settings
