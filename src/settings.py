"""Simple cross-platform settings storage for ScriptCheck.

Stores a small JSON settings file in a per-user application data location
and exposes helpers to load/save settings plus typed accessors for the
values the app uses (comparison font, uploads directory, log level).

Environment variables (optionally from a .env file) override the stored
values: SCRIPTCHECK_FONT, SCRIPTCHECK_UPLOAD_DIR, SCRIPTCHECK_LOG_LEVEL.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from core.fonts import DEFAULT_FONT, get_font, is_known_font

load_dotenv()

logger = logging.getLogger(__name__)

_APP_NAME = "ScriptCheck"
_SETTINGS_FILE = "settings.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _get_user_data_dir() -> Path:
    """Return a platform-appropriate per-user data directory for the app."""
    system = platform.system()
    home = Path.home()
    if system == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / _APP_NAME
        return home / f".{_APP_NAME}"
    if system == "Darwin":
        return home / "Library" / "Application Support" / _APP_NAME
    # Linux / other: honor XDG_DATA_HOME if set
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / _APP_NAME
    return home / ".local" / "share" / _APP_NAME


def ensure_settings_dir() -> Path:
    d = _get_user_data_dir()
    d.mkdir(parents=True, exist_ok=True)
    if os.name == "posix":
        try:
            d.chmod(0o700)
        except OSError:
            pass
    return d


def settings_path() -> Path:
    return ensure_settings_dir() / _SETTINGS_FILE


def load_settings() -> Dict[str, Any]:
    p = settings_path()
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", p, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: Dict[str, Any]) -> None:
    p = settings_path()
    # atomic write: write to temp then replace
    tmp = p.with_suffix(".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        if os.name == "posix":
            try:
                tmp.chmod(0o600)
            except OSError:
                pass
        os.replace(str(tmp), str(p))
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass


def get_setting(key: str, default: Optional[Any] = None) -> Any:
    s = load_settings()
    return s.get(key, default)


def set_setting(key: str, value: Any) -> None:
    s = load_settings()
    s[key] = value
    save_settings(s)


def reset_settings() -> None:
    save_settings({})


# ---------------------------------------------------------------------
# COMPARISON FONT
# ---------------------------------------------------------------------
def get_font_preference() -> str:
    """Return the saved font key, falling back to Times New Roman.

    SCRIPTCHECK_FONT wins over the settings file. Unknown keys (e.g. from a
    hand-edited file) are ignored.
    """
    for candidate in (os.getenv("SCRIPTCHECK_FONT"), get_setting("font")):
        if candidate is None or candidate == "":
            continue
        if isinstance(candidate, str) and is_known_font(candidate):
            return get_font(candidate).key
        logger.warning("Ignoring unknown font preference %r", candidate)
    return DEFAULT_FONT


def set_font_preference(key: str) -> str:
    """Persist a font choice; raises ValueError for unknown fonts."""
    font = get_font(key)
    set_setting("font", font.key)
    return font.key


# ---------------------------------------------------------------------
# UPLOADS
# ---------------------------------------------------------------------
def get_upload_dir() -> Path:
    """Where ingested samples are copied.

    Order of preference:
    - SCRIPTCHECK_UPLOAD_DIR
    - user setting 'upload_dir'
    - platform app-data <app>/uploads
    """
    val = os.getenv("SCRIPTCHECK_UPLOAD_DIR") or get_setting("upload_dir")
    if val and not isinstance(val, str):
        logger.warning("Ignoring non-string upload_dir setting %r", val)
        val = None
    if val:
        return Path(val).expanduser().resolve()
    return (_get_user_data_dir() / "uploads").resolve()


def set_upload_dir(path: str) -> None:
    if not path:
        return
    set_setting("upload_dir", str(Path(path).expanduser().resolve()))


# ---------------------------------------------------------------------
# LOGGING
# ---------------------------------------------------------------------
def get_log_level() -> str:
    val = (os.getenv("SCRIPTCHECK_LOG_LEVEL") or get_setting("log_level") or "WARNING")
    val = str(val).upper()
    return val if val in _LOG_LEVELS else "WARNING"
