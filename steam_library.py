"""
Steam library discovery for BF6 Voice Switcher.

Detection is best-effort: every missing file, unreadable descriptor or
incomplete manifest simply moves on to the next candidate. Total failure
returns None ("no installation detected"), never an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from vdf_text import line_has_key, extract_quoted_value, normalize_vdf_path, read_keys

_log = logging.getLogger(__name__)

BF6_APP_ID = "2807960"
STEAM_MARKER_EXE = "steam.exe"
LIBRARY_FOLDERS_VDF = Path("steamapps") / "libraryfolders.vdf"
VOICE_DATA_SUBPATH = Path("Data") / "Win32"

DEFAULT_STEAM_ROOTS = (
    r"C:\Program Files (x86)\Steam",
    r"C:\Program Files\Steam",
    r"D:\Steam",
    r"E:\Steam",
    r"D:\Program Files (x86)\Steam",
    r"E:\Program Files (x86)\Steam",
)


@dataclass(frozen=True)
class GameInstallation:
    """A detected install. Recomputed on demand, never persisted."""

    game_path: Path
    build_id: str

    @property
    def voice_root(self) -> Path:
        return self.game_path / VOICE_DATA_SUBPATH


def default_steam_roots(extra: Iterable[str | Path] = ()) -> list[Path]:
    roots = [Path(p) for p in DEFAULT_STEAM_ROOTS]
    for p in extra:
        path = Path(p)
        if path not in roots:
            roots.append(path)
    return roots


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        _log.debug("Could not read %s: %s", path, exc)
        return None


def get_library_folders(steam_root: Path) -> list[Path]:
    """All library roots known to *steam_root*, the root itself first."""
    folders = [steam_root]
    content = _read_text(steam_root / LIBRARY_FOLDERS_VDF)
    if content is None:
        return folders

    for line in content.splitlines():
        if not line_has_key(line, "path"):
            continue
        value = extract_quoted_value(line)
        if not value:
            continue
        path = Path(normalize_vdf_path(value))
        if path.exists() and path not in folders:
            folders.append(path)
    return folders


def parse_app_manifest(path: Path) -> tuple[str, str] | None:
    """Return ``(installdir, buildid)`` or None if either is missing/empty."""
    content = _read_text(path)
    if content is None:
        return None
    values = read_keys(content, ("installdir", "buildid"))
    install_dir = values.get("installdir", "")
    build_id = values.get("buildid", "")
    if install_dir and build_id:
        return install_dir, build_id
    return None


def find_installation_in_root(steam_root: Path, app_id: str = BF6_APP_ID) -> GameInstallation | None:
    for lib_path in get_library_folders(steam_root):
        manifest_path = lib_path / "steamapps" / f"appmanifest_{app_id}.acf"
        if not manifest_path.exists():
            continue
        parsed = parse_app_manifest(manifest_path)
        if parsed is None:
            _log.debug("Manifest %s is incomplete, skipping", manifest_path)
            continue
        install_dir, build_id = parsed
        return GameInstallation(
            game_path=lib_path / "steamapps" / "common" / install_dir,
            build_id=build_id,
        )
    return None


def detect_installation(
    candidates: Iterable[str | Path] | None = None,
    app_id: str = BF6_APP_ID,
) -> GameInstallation | None:
    """Probe *candidates* (defaults to the conventional Steam roots) in order."""
    roots = default_steam_roots() if candidates is None else [Path(p) for p in candidates]
    for steam_root in roots:
        if not (steam_root / STEAM_MARKER_EXE).exists():
            continue
        info = find_installation_in_root(steam_root, app_id)
        if info is not None:
            _log.info("Detected installation at %s (build %s)", info.game_path, info.build_id)
            return info
    _log.info("No installation detected among %d candidate root(s)", len(roots))
    return None
