"""
Persistent settings for BF6 Voice Switcher.

Stored as ``settings.json`` in the per-user data directory (the same place
the log file goes). Precedence, lowest first: defaults, settings file,
environment (``BF6VS_BACKUP_DIR``, ``BF6VS_GAME_DATA_DIR``), explicit
command-line overrides applied by the caller.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from steam_library import BF6_APP_ID

SETTINGS_FILENAME = "settings.json"
BACKUP_DIR_NAME = "voice_backups"
ENV_BACKUP_DIR = "BF6VS_BACKUP_DIR"
ENV_GAME_DATA_DIR = "BF6VS_GAME_DATA_DIR"

_log = logging.getLogger(__name__)


def app_data_dir() -> Path:
    return Path(os.environ.get("APPDATA", "~")).expanduser() / "BF6VoiceSwitcher"


def settings_path() -> Path:
    return app_data_dir() / SETTINGS_FILENAME


def default_backup_dir() -> Path:
    """``voice_backups`` beside the frozen exe, or beside the sources in a checkout."""
    if getattr(sys, "frozen", False):
        base = Path(sys.executable).parent
    else:
        base = Path(__file__).parent
    return base / BACKUP_DIR_NAME


def _normalize_path(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    return v.replace("\\", "/")


class SwitcherSettings(BaseModel):
    backup_dir: str | None = None
    game_data_dir: str | None = None
    extra_steam_roots: list[str] = Field(default_factory=list)
    app_id: str = BF6_APP_ID

    @field_validator("backup_dir", "game_data_dir")
    @classmethod
    def _normalize(cls, v: str | None) -> str | None:
        return _normalize_path(v)

    @field_validator("extra_steam_roots")
    @classmethod
    def _normalize_roots(cls, v: list[str]) -> list[str]:
        return [p for p in (_normalize_path(item) for item in v) if p]

    @field_validator("app_id")
    @classmethod
    def _check_app_id(cls, v: str) -> str:
        v = v.strip()
        if not v.isdigit():
            raise ValueError(f"app_id must be numeric, got {v!r}")
        return v

    def resolved_backup_dir(self) -> Path:
        return Path(self.backup_dir) if self.backup_dir else default_backup_dir()


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> SwitcherSettings:
    path = path or settings_path()
    environ = os.environ if environ is None else environ

    settings = SwitcherSettings()
    if path.exists():
        try:
            settings = SwitcherSettings.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            _log.warning("Could not load settings from %s, using defaults: %s", path, exc)

    overrides: dict[str, str] = {}
    if environ.get(ENV_BACKUP_DIR):
        overrides["backup_dir"] = environ[ENV_BACKUP_DIR]
    if environ.get(ENV_GAME_DATA_DIR):
        overrides["game_data_dir"] = environ[ENV_GAME_DATA_DIR]
    return apply_overrides(settings, **overrides)


def apply_overrides(settings: SwitcherSettings, **overrides: str | None) -> SwitcherSettings:
    """Return a copy of *settings* with the non-empty *overrides* validated in."""
    changes = {key: value for key, value in overrides.items() if value}
    if not changes:
        return settings
    return SwitcherSettings.model_validate({**settings.model_dump(), **changes})


def save_settings(settings: SwitcherSettings, path: Path | None = None) -> bool:
    path = path or settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        return True
    except OSError as exc:
        _log.error("Could not save settings to %s: %s", path, exc)
        return False
