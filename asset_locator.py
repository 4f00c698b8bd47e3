"""
Voice asset discovery.

A language ``xx`` is stored by the game as folders named ``xx`` or ``voxx``
(the audio banks) plus small index files ``xx.toc`` / ``voxx.toc`` scattered
through the data tree. ``locate`` walks a tree depth-first and returns both
sets relative to the scanned root.

Rules:
  * a link point is never descended into; it is reported only if its own
    name is a voice folder name (an activated language)
  * a matching ordinary directory is reported and not descended into
  * any other ordinary directory is walked
  * files are reported when their name is a toc name
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from link_points import FilesystemProbe, LocalFilesystem

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetSet:
    """Result of one scan. An empty set means "scanned, found nothing"."""

    folders: frozenset[PurePath] = field(default_factory=frozenset)
    toc_files: frozenset[PurePath] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.folders and not self.toc_files

    def sorted_folders(self) -> list[PurePath]:
        return sorted(self.folders, key=lambda p: p.as_posix())

    def sorted_toc_files(self) -> list[PurePath]:
        return sorted(self.toc_files, key=lambda p: p.as_posix())


def voice_folder_names(code: str) -> tuple[str, str]:
    return code, f"vo{code}"


def toc_file_names(code: str) -> tuple[str, str]:
    return f"{code}.toc", f"vo{code}.toc"


def locate(root: Path, code: str, probe: FilesystemProbe | None = None) -> AssetSet:
    probe = probe or LocalFilesystem()
    root = Path(root)
    folder_names = voice_folder_names(code)
    toc_names = toc_file_names(code)
    folders: set[PurePath] = set()
    toc_files: set[PurePath] = set()

    stack = [root]
    while stack:
        current = stack.pop()
        try:
            entries = list(probe.iterdir(current))
        except OSError as exc:
            _log.warning("Skipping unreadable directory %s: %s", current, exc)
            continue

        for entry in entries:
            name = entry.name
            if probe.is_link(entry):
                if name in folder_names:
                    folders.add(entry.relative_to(root))
            elif probe.is_dir(entry):
                if name in folder_names:
                    folders.add(entry.relative_to(root))
                else:
                    stack.append(entry)
            elif name in toc_names:
                toc_files.add(entry.relative_to(root))

    _log.debug(
        "Scanned %s for '%s': %d folder(s), %d toc file(s)",
        root, code, len(folders), len(toc_files),
    )
    return AssetSet(folders=frozenset(folders), toc_files=frozenset(toc_files))
