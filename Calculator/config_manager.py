# config_manager.py
"""""
Settings for the calculator.

- config.json holds the user settings, ui_strings.json one description per setting
- Configuration is the explicit, read-only value handed to the engine
- The previous answer is cached in a small text file between sessions
"""""

import json
import logging
import os
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"

cache_dir = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache")) / "postfix-calculator"
previous_ans_file = "previous_ans.txt"

DEFAULT_SETTINGS = {
    "fix": 10,
    "base": 10,
    "radian_mode": False,
    "darkmode": False,
    "shift_to_copy": True,
    "after_paste_enter": False,
}


class Configuration:
    """Settings the pipeline and the front ends read; built once at startup."""

    def __init__(self, fix=10, base=10, radian_mode=False, darkmode=False,
                 shift_to_copy=True, after_paste_enter=False):
        if isinstance(fix, bool) or not isinstance(fix, int) or fix < 0:
            raise E.ConfigurationError(f"Invalid number of decimal places: {fix}", code="5000")
        if isinstance(base, bool) or not isinstance(base, int) or not 2 <= base <= 36:
            raise E.ConfigurationError("Base too large! Accepted ranges: 2 - 36", code="5001")
        self.fix = fix
        self.base = base
        self.radian_mode = bool(radian_mode)
        self.darkmode = bool(darkmode)
        self.shift_to_copy = bool(shift_to_copy)
        self.after_paste_enter = bool(after_paste_enter)

    @classmethod
    def from_settings(cls, settings_dict):
        """Build from a config.json dict; missing keys fall back to the defaults."""
        merged = dict(DEFAULT_SETTINGS)
        for key, value in settings_dict.items():
            if key not in DEFAULT_SETTINGS:
                logger.warning("Ignoring unknown setting %r", key)
                continue
            merged[key] = value
        return cls(**merged)

    def to_settings(self):
        return {key: getattr(self, key) for key in DEFAULT_SETTINGS}

    def replace(self, **changes):
        settings = self.to_settings()
        for key, value in changes.items():
            if value is not None:
                settings[key] = value
        return Configuration(**settings)

    def __repr__(self):
        return f"Configuration(fix={self.fix}, base={self.base}, radian_mode={self.radian_mode})"


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value, 0))


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, key_value)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        logger.error("Could not write %s: %s", config_json, e)
        return {}


def load_configuration(overrides=None):
    """Configuration from config.json, or the defaults when the file is missing.

    overrides (e.g. command line flags) win over the file; None values are skipped.
    """
    configuration = Configuration.from_settings(load_setting_value("all"))
    if overrides:
        configuration = configuration.replace(**overrides)
    return configuration


def load_previous_answer(directory=None):
    """The cached previous answer, or None when there is none."""
    path = Path(directory or cache_dir) / previous_ans_file
    try:
        return float(path.read_text(encoding='utf-8').strip())
    except (OSError, ValueError):
        return None


def save_previous_answer(ans, directory=None):
    """Cache ans for the next session; a failed write is logged, not raised."""
    folder = Path(directory or cache_dir)
    try:
        folder.mkdir(parents=True, exist_ok=True)
        (folder / previous_ans_file).write_text(f"{ans!r}\n", encoding='utf-8')
        return True
    except OSError as e:
        logger.error("Error while writing previous answer to %s: %s", folder, e)
        return False
