"""
Build-id gate for activation.

A snapshot captured under one game build must not be linked into another:
the toc files index the audio banks by offset, and a stale pair crashes or
silences the game. There is no override.
"""

from __future__ import annotations

from dataclasses import dataclass

from backup_schema import BackupRecord
from steam_library import GameInstallation


@dataclass(frozen=True)
class VersionCheck:
    ok: bool
    backup_build_id: str
    installed_build_id: str | None

    @property
    def is_mismatch(self) -> bool:
        return not self.ok


def check_version(backup: BackupRecord, install: GameInstallation | None) -> VersionCheck:
    """Unknown snapshot version or undetected install always pass."""
    installed = install.build_id if install is not None else None
    if not backup.build_id or installed is None:
        return VersionCheck(True, backup.build_id, installed)
    return VersionCheck(backup.build_id == installed, backup.build_id, installed)
