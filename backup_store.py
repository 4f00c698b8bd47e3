"""
BF6 Voice Switcher - snapshot store.

One directory per language code under the backup root, holding a copy of
every voice folder and toc file found for that language plus a
``backup_info.txt`` manifest. A new capture replaces the old snapshot
wholesale; nothing is merged.

Copies are not atomic: if a copy fails half way the files already written
stay on disk and no manifest is written, so the snapshot lists with an
unknown build id until it is captured again or removed.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePath
from typing import Callable, Optional

from asset_locator import locate
from backup_schema import BACKUP_INFO_FILENAME, BackupRecord, parse_backup_info, render_backup_info
from languages import LANGUAGE_CODES, display_name, is_known_code
from link_points import FilesystemProbe, LocalFilesystem
from results import OperationResult
from steam_library import GameInstallation

_log = logging.getLogger(__name__)


class BackupStore:
    def __init__(
        self,
        backup_root: str | Path,
        probe: FilesystemProbe | None = None,
        log_callback: Optional[Callable[[str], None]] = None,
    ):
        self.backup_root = Path(backup_root)
        self.probe = probe or LocalFilesystem()
        self._log_cb = log_callback or _log.info

    def log(self, msg: str):
        self._log_cb(msg)

    def snapshot_dir(self, code: str) -> Path:
        return self.backup_root / code

    # ── Listing ───────────────────────────────────────────────────────

    def _read_record(self, code: str) -> BackupRecord:
        info_path = self.snapshot_dir(code) / BACKUP_INFO_FILENAME
        try:
            return parse_backup_info(info_path.read_text(encoding="utf-8"), code)
        except FileNotFoundError:
            _log.debug("No %s in snapshot '%s'", BACKUP_INFO_FILENAME, code)
        except (OSError, ValueError) as exc:
            _log.warning("Could not read manifest for snapshot '%s': %s", code, exc)
        return BackupRecord(lang_code=code)

    def list_backups(self) -> list[BackupRecord]:
        if not self.backup_root.is_dir():
            return []
        return [
            self._read_record(code)
            for code in LANGUAGE_CODES
            if self.snapshot_dir(code).is_dir()
        ]

    def get_backup(self, code: str) -> BackupRecord | None:
        if not is_known_code(code) or not self.snapshot_dir(code).is_dir():
            return None
        return self._read_record(code)

    # ── Capture ───────────────────────────────────────────────────────

    def _overlaps_snapshot(self, root: Path, paths: list[PurePath], target: Path) -> PurePath | None:
        """Return the first source path that lives inside *target*, if any."""
        if not target.exists():
            return None
        target_real = target.resolve()
        for rel in paths:
            if (root / rel).resolve().is_relative_to(target_real):
                return rel
        return None

    def capture(
        self,
        root: str | Path,
        code: str,
        installation: GameInstallation | None = None,
    ) -> OperationResult:
        root = Path(root)
        lang_name = display_name(code)

        if not is_known_code(code):
            return OperationResult.failure("not_found", f"Unknown language code: {code!r}")
        if not self.probe.exists(root):
            return OperationResult.failure("not_found", f"Voice folder does not exist: {root}")

        self.log(f"Backing up {lang_name} voice files from {root}...")
        assets = locate(root, code, self.probe)
        folders = assets.sorted_folders()
        toc_files = assets.sorted_toc_files()

        if assets.is_empty:
            return OperationResult.failure("not_found", f"No voice files found: {code} or vo{code}")
        if not folders:
            return OperationResult.failure(
                "incomplete",
                f"{lang_name} backup is incomplete: {len(toc_files)} toc file(s) but no "
                "voice folder found. Backup cancelled.",
            )

        target = self.snapshot_dir(code)
        clash = self._overlaps_snapshot(root, folders + toc_files, target)
        if clash is not None:
            return OperationResult.failure(
                "io_failure",
                f"{clash.as_posix()} lives inside the existing {lang_name} backup; "
                f"deactivate {lang_name} before capturing it again.",
            )

        if target.exists():
            try:
                shutil.rmtree(target)
            except OSError as exc:
                return OperationResult.failure(
                    "io_failure", f"Could not delete old backup: {exc}", detail=str(exc)
                )

        copied_folders = 0
        copied_files = 0
        try:
            target.mkdir(parents=True, exist_ok=True)
            for rel in folders:
                dst = target / rel
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copytree(root / rel, dst, dirs_exist_ok=True)
                copied_folders += 1
                self.log(f"  Copied folder: {rel.as_posix()}")

            for rel in toc_files:
                dst = target / rel
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(root / rel, dst)
                copied_files += 1
                self.log(f"  Copied: {rel.as_posix()}")
        except OSError as exc:
            return OperationResult.failure(
                "io_failure",
                f"Backup of {lang_name} failed: {exc}",
                folders=copied_folders,
                files=copied_files,
                detail=str(exc),
            )

        build_id = installation.build_id if installation is not None else ""
        record = BackupRecord(
            lang_code=code,
            build_id=build_id,
            folders=[p.as_posix() for p in folders],
            toc_files=[p.as_posix() for p in toc_files],
        )
        try:
            (target / BACKUP_INFO_FILENAME).write_text(render_backup_info(record), encoding="utf-8")
        except OSError as exc:
            return OperationResult.failure(
                "io_failure",
                f"Files copied but the backup manifest could not be written: {exc}",
                folders=copied_folders,
                files=copied_files,
                detail=str(exc),
            )

        self.log(f"  Backup of {lang_name} complete")
        return OperationResult.success(
            f"{lang_name} backup complete ({copied_folders} folder(s), "
            f"{copied_files} toc file(s), build: {build_id or 'unknown'})",
            folders=copied_folders,
            files=copied_files,
        )

    # ── Removal ───────────────────────────────────────────────────────

    def remove_backup(self, code: str) -> OperationResult:
        if not is_known_code(code):
            return OperationResult.failure("not_found", f"Unknown language code: {code!r}")
        target = self.snapshot_dir(code)
        lang_name = display_name(code)
        if not target.exists():
            return OperationResult.success(f"No {lang_name} backup to remove")
        try:
            shutil.rmtree(target)
        except OSError as exc:
            return OperationResult.failure(
                "io_failure", f"Could not delete {lang_name} backup: {exc}", detail=str(exc)
            )
        self.log(f"Removed {lang_name} backup at {target}")
        return OperationResult.success(f"{lang_name} backup removed")
