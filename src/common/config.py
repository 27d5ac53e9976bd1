import os
import math
import shutil
import configparser
import logging
from PySide6.QtCore import QObject

logger = logging.getLogger(__name__)


class Config(QObject):
    def __init__(self, custom_config_path: str | None = None):
        """Initialize Config from defaults and an optional ini file.

        Args:
            custom_config_path: Optional path to a config file.
                               If None, only built-in defaults are used and
                               nothing is ever written to disk.
        """
        super().__init__()

        self.config_path = custom_config_path
        self._config = configparser.ConfigParser()

        if self.config_path and os.path.exists(self.config_path):
            logger.debug(f"Loading existing config from: {self.config_path}")
            self._config.read(self.config_path, encoding="utf-8-sig")
        elif self.config_path:
            logger.info(f"Config file not found, using defaults: {self.config_path}")
            self._set_defaults()
        else:
            self._set_defaults()

        # Initialize properties from config values (using fallbacks for missing keys)
        self._initialize_properties()

    def _get_defaults(self):
        """Get default configuration values as a dictionary structure."""
        return {
            "Scrubber": {
                "seconds_per_turn": 12.0,
                # pi / 30
                "dead_zone_degrees": 6.0,
                "accessibility_step_seconds": 1.0,
                "knob_inset": 12.0,
            },
            "Recording": {
                "sample_rate": 44100,
                "channels": 1,
                "monitoring_enabled": False,
            },
            "General": {"log_level": "INFO"},
        }

    def _set_defaults(self):
        """Set default configuration values in the ConfigParser object."""
        defaults = self._get_defaults()

        for section, values in defaults.items():
            self._config[section] = {}
            for key, value in values.items():
                # Convert all values to strings for ConfigParser
                if isinstance(value, bool):
                    self._config[section][key] = "true" if value else "false"
                else:
                    self._config[section][key] = str(value)

    def _initialize_properties(self):
        """Initialize class properties from config values with fallbacks."""
        defaults = self._get_defaults()

        self._init_scrubber(defaults)
        self._init_recording(defaults)
        self._init_general(defaults)

        logger.debug("Configuration loaded: %s", self.config_path or "<defaults>")

    def _read(self, getter, section: str, key: str, fallback):
        """Read a typed value, falling back to the default when it cannot be parsed."""
        try:
            return getter(section, key, fallback=fallback)
        except ValueError as e:
            logger.warning(f"Invalid value for {section}.{key}, using default {fallback!r}: {e}")
            return fallback

    def _init_scrubber(self, defaults: dict):
        """Initialize Scrubber section properties."""
        s = defaults["Scrubber"]
        getfloat = self._config.getfloat
        self.seconds_per_turn = self._read(getfloat, "Scrubber", "seconds_per_turn", s["seconds_per_turn"])
        self.dead_zone_degrees = self._read(getfloat, "Scrubber", "dead_zone_degrees", s["dead_zone_degrees"])
        self.accessibility_step_seconds = self._read(
            getfloat, "Scrubber", "accessibility_step_seconds", s["accessibility_step_seconds"]
        )
        self.knob_inset = self._read(getfloat, "Scrubber", "knob_inset", s["knob_inset"])

    def _init_recording(self, defaults: dict):
        """Initialize Recording section properties."""
        r = defaults["Recording"]
        self.sample_rate = self._read(self._config.getint, "Recording", "sample_rate", r["sample_rate"])
        self.channels = self._read(self._config.getint, "Recording", "channels", r["channels"])
        self.monitoring_enabled = self._read(
            self._config.getboolean, "Recording", "monitoring_enabled", r["monitoring_enabled"]
        )

    def _init_general(self, defaults: dict):
        """Initialize General section properties."""
        g = defaults["General"]
        self.log_level_str = self._config.get("General", "log_level", fallback=g["log_level"])
        self.log_level = self._get_log_level(self.log_level_str)

    @property
    def dead_zone_radians(self) -> float:
        return math.radians(self.dead_zone_degrees)

    def _get_log_level(self, level_str):
        """Convert string log level to logging level constant"""
        levels = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return levels.get(level_str.upper(), logging.INFO)  # Default to INFO if invalid

    def _update_scrubber_section(self, config: configparser.ConfigParser):
        """Update Scrubber section in config."""
        if not config.has_section("Scrubber"):
            config.add_section("Scrubber")

        config["Scrubber"]["seconds_per_turn"] = str(self.seconds_per_turn)
        config["Scrubber"]["dead_zone_degrees"] = str(self.dead_zone_degrees)
        config["Scrubber"]["accessibility_step_seconds"] = str(self.accessibility_step_seconds)
        config["Scrubber"]["knob_inset"] = str(self.knob_inset)

    def _update_recording_section(self, config: configparser.ConfigParser):
        """Update Recording section in config."""
        if not config.has_section("Recording"):
            config.add_section("Recording")

        config["Recording"]["sample_rate"] = str(self.sample_rate)
        config["Recording"]["channels"] = str(self.channels)
        config["Recording"]["monitoring_enabled"] = "true" if self.monitoring_enabled else "false"

    def _update_general_section(self, config: configparser.ConfigParser):
        """Update General section in config."""
        if not config.has_section("General"):
            config.add_section("General")

        config["General"]["log_level"] = self.log_level_str

    def _create_backup(self):
        """Copy the current config file to <path>.bak before it is overwritten."""
        if not os.path.exists(self.config_path):
            return
        backup_path = self.config_path + ".bak"
        try:
            shutil.copy2(self.config_path, backup_path)
            logger.debug(f"Config backup created: {backup_path}")
        except OSError as e:
            logger.warning(f"Failed to create config backup: {e}")

    def save(self):
        """Save current configuration to file with minimal mutation.

        Re-reads the existing config file, updates ONLY managed keys,
        creates a backup, and preserves all unrelated sections/keys.
        Does nothing when the config was created without a path.
        """
        if not self.config_path:
            logger.debug("Config.save() skipped: no config path")
            return

        current = configparser.ConfigParser()
        if os.path.exists(self.config_path):
            current.read(self.config_path, encoding="utf-8-sig")
            logger.debug(f"Re-read existing config from {self.config_path}")

        self._create_backup()

        self._update_scrubber_section(current)
        self._update_recording_section(current)
        self._update_general_section(current)

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as configfile:
            current.write(configfile)
        logger.info(f"Config saved to {self.config_path}")

    def log_config_location(self):
        """Log the configuration file location (call after logging is set up)"""
        logger.info(f"Configuration loaded from: {self.config_path or '<defaults>'}")
