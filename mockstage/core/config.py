# mockstage/core/config.py
from __future__ import annotations
from typing import Any
from PySide6.QtCore import QSettings
from app_config import apply_qsettings_org, DEFAULTS


class Settings:
    """
    Thin wrapper over QSettings with defaults and simple dict-like get/set.
    Keys are "group/name", e.g. "paths/last_media_dir".
    """
    def __init__(self, qsettings: QSettings | None = None):
        if qsettings is None:
            apply_qsettings_org()
            qsettings = QSettings()
        self._qs = qsettings

        # Prime defaults if key not present
        for group, values in DEFAULTS.items():
            for k, v in values.items():
                key = f"{group}/{k}"
                if not self._qs.contains(key):
                    self._qs.setValue(key, v)

    def get(self, key: str, default: Any = None) -> Any:
        val = self._qs.value(key, default)
        return val if val is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        val = self.get(key, default)
        if isinstance(val, str):
            return val.strip().lower() in ("1", "true", "yes", "on")
        return bool(val)

    def set(self, key: str, value: Any) -> None:
        self._qs.setValue(key, value)
        self._qs.sync()


def get_settings() -> Settings:
    return Settings()
