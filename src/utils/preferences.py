"""Persistent storage for UI preferences"""

import json
import locale
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from utils.helpers import FALLBACK_LOCALE, normalize_locale

logger = logging.getLogger(__name__)

LANGUAGE_KEY = "user-language"


def device_language() -> Optional[str]:
    """Language code of the host locale, if one is set"""
    try:
        tag = locale.getlocale()[0]
    except ValueError:
        return None
    return normalize_locale(tag) if tag else None


def detect_language(
    saved: Optional[str],
    device: Optional[str],
    supported: List[str],
) -> str:
    """
    Choose the UI language at startup

    Args:
        saved: Language the user picked in an earlier session
        device: Language of the device
        supported: Languages the app ships translations for

    Returns:
        The saved language, else the device language when supported, else "en"
    """
    if saved:
        return saved
    if device and normalize_locale(device) in supported:
        return normalize_locale(device)
    return FALLBACK_LOCALE


class PreferenceStore:
    """Small JSON file holding preferences across restarts"""

    def __init__(self, path: str):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read preferences from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any):
        data = self._load()
        data[key] = value
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Could not save preferences to {self.path}: {e}")

    def get_language(self) -> Optional[str]:
        return self.get(LANGUAGE_KEY)

    def save_language(self, language: str):
        self.set(LANGUAGE_KEY, language)
