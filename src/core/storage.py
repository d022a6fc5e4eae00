"""
core/storage.py — File I/O helpers for the endpoint picker.

Handles reading/writing:
  - Key-value store  (data/store.json)     affinities, custom endpoints
  - Settings         (data/settings.json)  the applied apiUrl

All path constants are imported from core.config so this module has no
hard-coded filesystem assumptions.  Readers never raise: a missing or corrupt
file yields the default value.  Writers propagate ``OSError``.
"""

import json
from typing import Any

from core.config import DEFAULT_API_URL, SETTINGS_FILE, STORE_FILE
from core.logger import LOGGER

log = LOGGER.getChild("storage")

__all__ = [
    "kv_get", "kv_set", "kv_delete",
    "load_settings", "save_settings",
]


# ── Key-value store ────────────────────────────────────────────────────────────


def _load_store() -> dict:
    try:
        data = json.loads(STORE_FILE.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _save_store(data: dict) -> None:
    STORE_FILE.parent.mkdir(parents=True, exist_ok=True)
    STORE_FILE.write_text(json.dumps(data, indent=2), encoding="utf-8")


def kv_get(key: str, default: Any = None) -> Any:
    """Return the raw value stored under *key*, or *default*."""
    return _load_store().get(key, default)


def kv_set(key: str, value: Any) -> None:
    """Store *value* under *key*, keeping every other key intact."""
    data = _load_store()
    data[key] = value
    _save_store(data)
    log.debug("stored %r in %s", key, STORE_FILE)


def kv_delete(key: str) -> None:
    data = _load_store()
    if data.pop(key, None) is not None:
        _save_store(data)


# ── Settings ───────────────────────────────────────────────────────────────────


def load_settings() -> dict:
    """Return persisted settings; ``apiUrl`` always present."""
    try:
        settings = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
    except Exception:
        settings = {}
    if not isinstance(settings, dict):
        settings = {}
    if not isinstance(settings.get("apiUrl"), str) or not settings["apiUrl"]:
        settings["apiUrl"] = DEFAULT_API_URL
    return settings


def save_settings(update: dict) -> dict:
    """Merge *update* into the persisted settings and return the result."""
    settings = {**load_settings(), **update}
    SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_FILE.write_text(json.dumps(settings, indent=2), encoding="utf-8")
    log.debug("settings saved: apiUrl=%s", settings.get("apiUrl"))
    return settings
