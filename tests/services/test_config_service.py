"""Tests for ConfigService."""

import json

import pytest

from clarity_list.models import AppConfig
from clarity_list.services.config_service import ConfigService, get_config_service


class TestLoadSave:
    def test_first_load_writes_defaults(self, tmp_config, tmp_path):
        config = tmp_config.load_config()

        assert config == AppConfig()
        saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
        assert saved["schedule"]["daily_capacity_minutes"] == 480

    def test_loads_existing_file(self, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"schedule": {"daily_capacity_minutes": 300}}), encoding="utf-8"
        )
        assert ConfigService().config.schedule.daily_capacity_minutes == 300

    def test_invalid_file_raises(self, tmp_path):
        (tmp_path / "config.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            ConfigService().load_config()

    def test_storage_path_defaults_to_data_dir(self, tmp_config, tmp_path):
        assert tmp_config.storage_path == tmp_path / "storage.json"

    def test_storage_path_override(self, tmp_config, tmp_path):
        tmp_config.set("storage.path", str(tmp_path / "elsewhere.json"))
        assert tmp_config.storage_path == tmp_path / "elsewhere.json"


class TestGetSet:
    def test_get_nested_value(self, tmp_config):
        assert tmp_config.get("estimation.model") == "gpt-4o-mini"
        assert tmp_config.get("estimation.nope") is None

    def test_set_persists(self, tmp_config):
        tmp_config.set("estimation.backend", "offline")
        assert ConfigService().config.estimation.backend == "offline"

    def test_set_unknown_key_raises(self, tmp_config):
        with pytest.raises(KeyError):
            tmp_config.set("estimation.colour", "blue")

    def test_set_invalid_value_raises(self, tmp_config):
        with pytest.raises(ValueError):
            tmp_config.set("estimation.backend", "magic")
        assert tmp_config.config.estimation.backend == "auto"

    def test_logging_level_validated(self, tmp_config):
        tmp_config.set("logging.level", "WARNING")
        assert ConfigService().config.logging.level == "WARNING"
        with pytest.raises(ValueError):
            tmp_config.set("logging.level", "LOUD")

    def test_has_key(self):
        assert ConfigService.has_key("schedule.daily_capacity_minutes")
        assert ConfigService.has_key("schedule")
        assert not ConfigService.has_key("schedule.daily_capacity_minutes.extra")
        assert not ConfigService.has_key("nothing")


class TestReset:
    def test_reset_single_key(self, tmp_config):
        tmp_config.set("schedule.daily_capacity_minutes", 200)
        tmp_config.set("estimation.backend", "offline")

        tmp_config.reset("schedule.daily_capacity_minutes")

        assert tmp_config.config.schedule.daily_capacity_minutes == 480
        assert tmp_config.config.estimation.backend == "offline"

    def test_reset_all(self, tmp_config):
        tmp_config.set("output.format", "table")
        tmp_config.reset()
        assert tmp_config.config == AppConfig()


def test_get_config_service_is_cached():
    assert get_config_service() is get_config_service()
