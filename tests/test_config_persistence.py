"""Tests for Config loading and persistence behavior.

Verifies that:
1. Config() without a path uses defaults and never writes a file
2. Values from an ini file override defaults, missing keys fall back
3. Config.save() preserves unrelated sections/keys and creates a backup
"""

import os
import math
import logging
import configparser

from common.config import Config


class TestConfigDefaults:
    """Test built-in defaults."""

    def test_scrubber_defaults(self, config):
        assert config.seconds_per_turn == 12.0
        assert config.dead_zone_degrees == 6.0
        assert math.isclose(config.dead_zone_radians, math.pi / 30)
        assert config.accessibility_step_seconds == 1.0
        assert config.knob_inset == 12.0

    def test_recording_and_general_defaults(self, config):
        assert config.sample_rate == 44100
        assert config.channels == 1
        assert config.monitoring_enabled is False
        assert config.log_level == logging.INFO

    def test_save_without_path_writes_nothing(self, config, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config.save()
        assert os.listdir(tmp_path) == []

    def test_missing_file_uses_defaults(self, tmp_path):
        path = tmp_path / "missing.ini"
        config = Config(str(path))
        assert config.seconds_per_turn == 12.0
        assert not path.exists()


class TestConfigLoading:
    """Test reading values from an ini file."""

    def test_file_values_override_defaults(self, config_file):
        path = config_file(
            "[Scrubber]\n"
            "seconds_per_turn = 30\n"
            "dead_zone_degrees = 3.5\n"
            "\n"
            "[Recording]\n"
            "monitoring_enabled = true\n"
            "\n"
            "[General]\n"
            "log_level = debug\n"
        )
        config = Config(path)

        assert config.seconds_per_turn == 30.0
        assert config.dead_zone_degrees == 3.5
        assert math.isclose(config.dead_zone_radians, math.radians(3.5))
        assert config.monitoring_enabled is True
        assert config.log_level == logging.DEBUG

    def test_missing_keys_fall_back(self, config_file):
        config = Config(config_file("[Scrubber]\nseconds_per_turn = 6\n"))

        assert config.seconds_per_turn == 6.0
        assert config.accessibility_step_seconds == 1.0
        assert config.sample_rate == 44100

    def test_malformed_values_fall_back_to_defaults(self, config_file, caplog):
        path = config_file(
            "[Scrubber]\n"
            "seconds_per_turn = abc\n"
            "knob_inset = 8\n"
            "\n"
            "[Recording]\n"
            "sample_rate = 44.1k\n"
            "monitoring_enabled = maybe\n"
        )

        with caplog.at_level(logging.WARNING, logger="common.config"):
            config = Config(path)

        assert config.seconds_per_turn == 12.0
        assert config.knob_inset == 8.0
        assert config.sample_rate == 44100
        assert config.monitoring_enabled is False
        assert "Scrubber.seconds_per_turn" in caplog.text

    def test_unknown_log_level_defaults_to_info(self, config_file):
        config = Config(config_file("[General]\nlog_level = LOUD\n"))
        assert config.log_level == logging.INFO


class TestConfigPersistence:
    """Test that Config.save() preserves unrelated data."""

    def test_save_preserves_unrelated_sections(self, config_file):
        path = config_file(
            "[Scrubber]\n"
            "seconds_per_turn = 12.0\n"
            "\n"
            "[CustomSection]\n"
            "custom_key = custom_value\n"
        )
        config = Config(path)
        config.seconds_per_turn = 24.0
        config.save()

        saved = configparser.ConfigParser()
        saved.read(path, encoding="utf-8")
        assert saved.getfloat("Scrubber", "seconds_per_turn") == 24.0
        assert saved.get("CustomSection", "custom_key") == "custom_value"
        assert saved.get("General", "log_level") == "INFO"

    def test_save_creates_backup(self, config_file):
        path = config_file("[Scrubber]\nseconds_per_turn = 12.0\n")
        config = Config(path)
        config.seconds_per_turn = 8.0
        config.save()

        backup = configparser.ConfigParser()
        backup.read(path + ".bak", encoding="utf-8")
        assert backup.getfloat("Scrubber", "seconds_per_turn") == 12.0

    def test_save_creates_new_file(self, tmp_path):
        path = tmp_path / "nested" / "config.ini"
        config = Config(str(path))
        config.monitoring_enabled = True
        config.save()

        reloaded = Config(str(path))
        assert reloaded.monitoring_enabled is True
        assert not (tmp_path / "nested" / "config.ini.bak").exists()
