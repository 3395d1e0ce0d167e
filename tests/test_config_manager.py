"""
Tests for settings, the Configuration value and the previous answer cache.
"""

import json

import pytest

from Calculator import config_manager
from Calculator import error as E
from Calculator.config_manager import Configuration


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


class TestConfiguration:

    def test_defaults(self):
        configuration = Configuration()
        assert configuration.fix == 10
        assert configuration.base == 10
        assert configuration.radian_mode is False

    def test_invalid_values(self):
        with pytest.raises(E.ConfigurationError):
            Configuration(fix=-1)
        with pytest.raises(E.ConfigurationError):
            Configuration(fix=True)
        with pytest.raises(E.ConfigurationError):
            Configuration(base=37)
        with pytest.raises(E.ConfigurationError):
            Configuration(base="16")

    def test_from_settings_ignores_unknown_keys(self):
        configuration = Configuration.from_settings({"fix": 4, "colour": "red"})
        assert configuration.fix == 4
        assert configuration.base == 10

    def test_replace_keeps_unset_values(self):
        configuration = Configuration(fix=4, radian_mode=True).replace(base=16, fix=None)
        assert configuration.fix == 4
        assert configuration.base == 16
        assert configuration.radian_mode is True

    def test_settings_round_trip(self):
        configuration = Configuration(fix=3, base=2, darkmode=True)
        assert Configuration.from_settings(configuration.to_settings()).to_settings() == \
            configuration.to_settings()


class TestSettingsFile:

    def test_missing_file(self, config_file):
        assert config_manager.load_setting_value("all") == {}
        assert config_manager.load_configuration().fix == 10

    def test_save_and_load(self, config_file):
        config_manager.save_setting({"fix": 2, "base": 16})
        assert json.loads(config_file.read_text(encoding="utf-8")) == {"fix": 2, "base": 16}
        assert config_manager.load_setting_value("fix") == 2
        assert config_manager.load_setting_value("radian_mode") is False
        configuration = config_manager.load_configuration()
        assert configuration.fix == 2
        assert configuration.base == 16

    def test_overrides_survive_a_reload(self, config_file):
        config_manager.save_setting({"fix": 2, "base": 16, "darkmode": True})
        overrides = {"fix": 4, "base": None, "radian_mode": True}
        configuration = config_manager.load_configuration(overrides)
        assert configuration.fix == 4
        assert configuration.base == 16
        assert configuration.radian_mode is True
        assert configuration.darkmode is True

    def test_broken_file(self, config_file):
        config_file.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("all") == {}

    def test_invalid_value_in_file(self, config_file):
        config_manager.save_setting({"base": 99})
        with pytest.raises(E.ConfigurationError):
            config_manager.load_configuration()

    def test_descriptions_cover_every_setting(self):
        descriptions = config_manager.load_setting_description("all")
        assert set(descriptions) == set(config_manager.DEFAULT_SETTINGS)


class TestPreviousAnswer:

    def test_missing_cache(self, tmp_path):
        assert config_manager.load_previous_answer(tmp_path) is None

    def test_save_and_load(self, tmp_path):
        assert config_manager.save_previous_answer(3.3496, tmp_path / "cache")
        assert config_manager.load_previous_answer(tmp_path / "cache") == 3.3496

    def test_garbage_in_cache(self, tmp_path):
        (tmp_path / config_manager.previous_ans_file).write_text("abc", encoding="utf-8")
        assert config_manager.load_previous_answer(tmp_path) is None
