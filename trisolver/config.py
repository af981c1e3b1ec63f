"""
TriSolver — Local JSON settings.

Settings are persisted in ``<project>/data/trisolver.json``.  Unknown keys
and invalid values are dropped on load so the app always starts from a
usable configuration.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data")
_DATA_FILE = os.path.join(_DATA_DIR, "trisolver.json")

# ── Default settings ────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "theme": "dark",
    "decimals": 4,              # display rounding only
    "method": "cramers",        # "cramers", "gaussian", "inversion", "vectors"
    "graph_view": "lines",      # "lines", "vectors"
    "show_graph": True,
    "log_level": "INFO",
}

DECIMALS_MIN, DECIMALS_MAX = 0, 12

_CHOICES = {
    "theme": {"dark", "light"},
    "method": {"cramers", "gaussian", "inversion", "vectors"},
    "graph_view": {"lines", "vectors"},
    "log_level": {"DEBUG", "INFO", "WARNING", "ERROR"},
}


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _is_valid(key: str, value) -> bool:
    if key in _CHOICES:
        return value in _CHOICES[key]
    if key == "decimals":
        return (isinstance(value, int) and not isinstance(value, bool)
                and DECIMALS_MIN <= value <= DECIMALS_MAX)
    if key == "show_graph":
        return isinstance(value, bool)
    return False


def _clean(settings: dict) -> dict:
    merged = dict(DEFAULT_SETTINGS)
    for key, value in settings.items():
        if key not in DEFAULT_SETTINGS:
            continue
        if _is_valid(key, value):
            merged[key] = value
        else:
            logger.warning("Ignoring invalid setting %s=%r", key, value)
    return merged


def _load_file() -> dict:
    _ensure_dir()
    if os.path.exists(_DATA_FILE):
        try:
            with open(_DATA_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                return data
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read settings file %s: %s", _DATA_FILE, e)
    return {}


def _save_file(data: dict) -> None:
    _ensure_dir()
    with open(_DATA_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# ── Public API ───────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return stored settings merged over ``DEFAULT_SETTINGS``."""
    return _clean(_load_file())


def save_settings(settings: dict) -> dict:
    """Validate and persist *settings*; returns what was stored."""
    cleaned = _clean(settings)
    _save_file(cleaned)
    return cleaned


def reset_settings() -> dict:
    """Restore the defaults on disk."""
    return save_settings(dict(DEFAULT_SETTINGS))
