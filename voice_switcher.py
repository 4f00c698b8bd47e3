"""
BF6 Voice Switcher - Core Logic

Keeps one snapshot per voice language and switches the game between them by
linking a snapshot's folders into the game's data tree.

Workflow:
    1. detect_installation() to find the game and its current build id
    2. capture(code) while the game has that language installed
    3. activate(code) / deactivate(code) to switch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from activation import ActivationEngine
from backup_schema import BackupRecord
from backup_store import BackupStore
from languages import launch_parameter
from link_points import FilesystemProbe, LinkProvider
from results import OperationResult
from steam_library import BF6_APP_ID, GameInstallation, default_steam_roots, detect_installation
from version_guard import VersionCheck

_log = logging.getLogger(__name__)


@dataclass
class EnvironmentStatus:
    game_data_dir: Path | None
    game_data_dir_exists: bool
    backup_dir_exists: bool
    installation_detected: bool
    build_id: str | None
    backed_up_codes: list[str] = field(default_factory=list)


class VoiceSwitcher:
    def __init__(
        self,
        backup_dir: str | Path,
        game_data_dir: str | Path | None = None,
        steam_roots: Iterable[str | Path] | None = None,
        app_id: str = BF6_APP_ID,
        links: LinkProvider | None = None,
        probe: FilesystemProbe | None = None,
        log_callback: Optional[Callable[[str], None]] = None,
    ):
        self._log_cb = log_callback or _log.info
        self.store = BackupStore(backup_dir, probe=probe, log_callback=self._log_cb)
        self.engine = ActivationEngine(self.store, links=links, log_callback=self._log_cb)
        self.steam_roots = list(steam_roots) if steam_roots is not None else default_steam_roots()
        self.app_id = app_id
        self._game_data_override = Path(game_data_dir) if game_data_dir else None

        self.installation: GameInstallation | None = None

    @property
    def backup_dir(self) -> Path:
        return self.store.backup_root

    @property
    def game_data_dir(self) -> Path | None:
        """Manual override if set, else the detected install's voice root."""
        if self._game_data_override is not None:
            return self._game_data_override
        if self.installation is not None:
            return self.installation.voice_root
        return None

    def set_game_data_dir(self, path: str | Path | None):
        self._game_data_override = Path(path) if path else None

    def log(self, msg: str):
        self._log_cb(msg)

    # ── Detection ─────────────────────────────────────────────────────

    def detect_installation(self) -> GameInstallation | None:
        self.installation = detect_installation(self.steam_roots, self.app_id)
        if self.installation is not None:
            self.log(f"Game detected, build: {self.installation.build_id}")
        else:
            self.log("Steam installation not detected")
        return self.installation

    # ── Backups ───────────────────────────────────────────────────────

    def list_backups(self) -> list[BackupRecord]:
        return self.store.list_backups()

    def _require_data_dir(self) -> Path | OperationResult:
        root = self.game_data_dir
        if root is None:
            return OperationResult.failure("not_found", "Select the game's voice folder first")
        return root

    def capture(self, code: str) -> OperationResult:
        root = self._require_data_dir()
        if isinstance(root, OperationResult):
            return root
        return self.store.capture(root, code, self.installation)

    def remove_backup(self, code: str) -> OperationResult:
        return self.store.remove_backup(code)

    # ── Switching ─────────────────────────────────────────────────────

    def check_version(self, code: str) -> VersionCheck | None:
        return self.engine.preview_version(code, self.installation)

    def activate(self, code: str) -> OperationResult:
        root = self._require_data_dir()
        if isinstance(root, OperationResult):
            return root
        return self.engine.activate(root, code, self.installation)

    def deactivate(self, code: str) -> OperationResult:
        root = self._require_data_dir()
        if isinstance(root, OperationResult):
            return root
        return self.engine.deactivate(root, code)

    @staticmethod
    def launch_parameter(code: str) -> str:
        return launch_parameter(code)

    # ── Validation ────────────────────────────────────────────────────

    def get_environment_status(self) -> EnvironmentStatus:
        root = self.game_data_dir
        return EnvironmentStatus(
            game_data_dir=root,
            game_data_dir_exists=root is not None and root.exists(),
            backup_dir_exists=self.backup_dir.is_dir(),
            installation_detected=self.installation is not None,
            build_id=self.installation.build_id if self.installation else None,
            backed_up_codes=[rec.lang_code for rec in self.list_backups()],
        )

    def validate_paths(self) -> list[str]:
        issues = []
        root = self.game_data_dir
        if root is None:
            issues.append("Game voice folder is not set and no installation was detected")
        elif not root.exists():
            issues.append(f"Game voice folder does not exist: {root}")
        if self.installation is None:
            issues.append("Steam installation not detected; version checks are disabled")
        return issues
