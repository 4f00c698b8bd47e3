"""
BF6 Voice Switcher - activation engine.

Activating a language makes its snapshot live inside the game's data tree:
every voice folder becomes a directory link into the snapshot and every toc
file is copied over. Toc files are copied rather than linked because they are
small, tied to one game build, and the game may rewrite them.

Deactivation is the inverse and only ever removes links. An ordinary folder
that happens to carry a language's name is real game content and is left
alone.

Neither direction rolls back: the first failure stops the operation and
whatever was already linked, copied or removed stays that way.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional

from asset_locator import locate
from backup_store import BackupStore
from languages import display_name, is_known_code, launch_parameter
from link_points import LinkError, LinkProvider, default_link_provider
from results import OperationResult
from steam_library import GameInstallation
from version_guard import VersionCheck, check_version

_log = logging.getLogger(__name__)


class ActivationEngine:
    def __init__(
        self,
        store: BackupStore,
        links: LinkProvider | None = None,
        log_callback: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.links = links or default_link_provider()
        self._log_cb = log_callback or _log.info

    def log(self, msg: str):
        self._log_cb(msg)

    def preview_version(self, code: str, installation: GameInstallation | None) -> VersionCheck | None:
        """Version check for *code*'s snapshot without touching disk, or None if no snapshot."""
        record = self.store.get_backup(code)
        if record is None:
            return None
        return check_version(record, installation)

    # ── Activate ──────────────────────────────────────────────────────

    def activate(
        self,
        root: str | Path,
        code: str,
        installation: GameInstallation | None = None,
    ) -> OperationResult:
        root = Path(root)
        lang_name = display_name(code)

        record = self.store.get_backup(code)
        if record is None:
            return OperationResult.failure("not_found", f"No {lang_name} backup available")

        check = check_version(record, installation)
        if check.is_mismatch:
            result = OperationResult.failure(
                "version_mismatch",
                f"Version mismatch! Backup: {check.backup_build_id}, current: "
                f"{check.installed_build_id}\nDelete the game's voice files and redo every step.",
            )
            result.backup_build_id = check.backup_build_id
            result.installed_build_id = check.installed_build_id
            return result

        if not self.store.probe.exists(root):
            return OperationResult.failure("not_found", f"Game voice folder does not exist: {root}")

        snapshot = self.store.snapshot_dir(code).resolve()
        assets = locate(snapshot, code, self.store.probe)
        self.log(f"Activating {lang_name} from {snapshot}...")

        linked = 0
        copied = 0
        for rel in assets.sorted_folders():
            src = snapshot / rel
            dst = root / rel
            try:
                if self.links.is_link(dst):
                    self.links.remove_link(dst)
                    self.log(f"  Removed previous link: {rel.as_posix()}")
                dst.parent.mkdir(parents=True, exist_ok=True)
                self.links.create_link(src, dst)
            except LinkError as exc:
                return OperationResult.failure(
                    "link_failure",
                    f"Could not link {rel.as_posix()}: {exc}",
                    folders=linked,
                    files=copied,
                    detail=str(exc),
                )
            except OSError as exc:
                return OperationResult.failure(
                    "io_failure",
                    f"Could not create folder for {rel.as_posix()}: {exc}",
                    folders=linked,
                    files=copied,
                    detail=str(exc),
                )
            linked += 1
            self.log(f"  Linked: {rel.as_posix()}")

        for rel in assets.sorted_toc_files():
            dst = root / rel
            try:
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(snapshot / rel, dst)
            except OSError as exc:
                return OperationResult.failure(
                    "io_failure",
                    f"Could not restore {rel.as_posix()}: {exc}",
                    folders=linked,
                    files=copied,
                    detail=str(exc),
                )
            copied += 1
            self.log(f"  Copied: {rel.as_posix()}")

        if linked == 0 and copied == 0:
            return OperationResult.failure(
                "nothing_to_restore", f"The {lang_name} backup contains no voice files"
            )

        return OperationResult.success(
            f"Voice linked as {lang_name}! ({linked} link(s), {copied} toc file(s))\n"
            f"Add the launch option: {launch_parameter(code)}",
            folders=linked,
            files=copied,
        )

    # ── Deactivate ────────────────────────────────────────────────────

    def deactivate(self, root: str | Path, code: str) -> OperationResult:
        root = Path(root)
        lang_name = display_name(code)

        if not is_known_code(code):
            return OperationResult.failure("not_found", f"Unknown language code: {code!r}")
        if not self.store.probe.exists(root):
            return OperationResult.failure("not_found", f"Voice folder does not exist: {root}")

        assets = locate(root, code, self.store.probe)
        if assets.is_empty:
            return OperationResult.failure("not_found", f"No voice files found: {code} or vo{code}")

        self.log(f"Removing {lang_name} voice files from {root}...")
        removed_links = 0
        removed_files = 0
        for rel in assets.sorted_folders():
            path = root / rel
            if not self.links.is_link(path):
                self.log(f"  Kept ordinary folder: {rel.as_posix()}")
                continue
            try:
                self.links.remove_link(path)
            except OSError as exc:
                return OperationResult.failure(
                    "io_failure",
                    f"Could not remove {rel.as_posix()}: {exc}",
                    folders=removed_links,
                    files=removed_files,
                    detail=str(exc),
                )
            removed_links += 1
            self.log(f"  Removed link: {rel.as_posix()}")

        for rel in assets.sorted_toc_files():
            try:
                (root / rel).unlink()
            except OSError as exc:
                return OperationResult.failure(
                    "io_failure",
                    f"Could not remove {rel.as_posix()}: {exc}",
                    folders=removed_links,
                    files=removed_files,
                    detail=str(exc),
                )
            removed_files += 1
            self.log(f"  Removed: {rel.as_posix()}")

        return OperationResult.success(
            f"{lang_name} voice files removed ({removed_links} folder link(s), "
            f"{removed_files} toc file(s))",
            folders=removed_links,
            files=removed_files,
        )
