"""
Directory links ("link points") for BF6 Voice Switcher.

Activated voice folders are directory links into the backup store rather than
copies, so the multi-gigabyte banks exist on disk exactly once. On Windows the
link is an NTFS junction (``mklink /J``, no admin rights needed); elsewhere a
directory symlink stands in. Either way the probe must be able to tell a link
apart from an ordinary directory, because scanning never descends into links
and deactivation only ever removes links.
"""

from __future__ import annotations

import logging
import os
import stat
import subprocess
from pathlib import Path
from typing import Iterator, Protocol

_log = logging.getLogger(__name__)

CREATE_NO_WINDOW = 0x08000000
_REPARSE_POINT = getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0x400)


class LinkError(OSError):
    """Creating or removing a directory link failed."""


def is_link_point(path: Path) -> bool:
    """True for symlinks and for junctions / other reparse points."""
    try:
        st = os.lstat(path)
    except OSError:
        return False
    if stat.S_ISLNK(st.st_mode):
        return True
    attrs = getattr(st, "st_file_attributes", 0)
    return bool(attrs & _REPARSE_POINT)


class FilesystemProbe(Protocol):
    def exists(self, path: Path) -> bool: ...

    def iterdir(self, path: Path) -> Iterator[Path]: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_link(self, path: Path) -> bool: ...


class LinkProvider(Protocol):
    def create_link(self, target: Path, link_path: Path) -> None: ...

    def remove_link(self, link_path: Path) -> None: ...

    def is_link(self, path: Path) -> bool: ...


class LocalFilesystem:
    """FilesystemProbe backed by the real disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def iterdir(self, path: Path) -> Iterator[Path]:
        return path.iterdir()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_link(self, path: Path) -> bool:
        return is_link_point(path)


class SymlinkLinkProvider:
    """Directory symlinks via ``os.symlink``."""

    def create_link(self, target: Path, link_path: Path) -> None:
        try:
            os.symlink(target, link_path, target_is_directory=True)
        except OSError as exc:
            raise LinkError(f"Could not link {link_path} -> {target}: {exc}") from exc
        _log.debug("Linked %s -> %s", link_path, target)

    def remove_link(self, link_path: Path) -> None:
        if not is_link_point(link_path):
            raise LinkError(f"Not a link point: {link_path}")
        try:
            if os.name == "nt":
                os.rmdir(link_path)
            else:
                os.unlink(link_path)
        except OSError as exc:
            raise LinkError(f"Could not remove link {link_path}: {exc}") from exc

    def is_link(self, path: Path) -> bool:
        return is_link_point(path)


class JunctionLinkProvider:
    """NTFS junctions through ``cmd /C mklink /J``."""

    def create_link(self, target: Path, link_path: Path) -> None:
        try:
            proc = subprocess.run(
                ["cmd", "/C", "mklink", "/J", str(link_path), str(target)],
                capture_output=True,
                text=True,
                creationflags=CREATE_NO_WINDOW,
            )
        except OSError as exc:
            raise LinkError(f"Could not run mklink: {exc}") from exc
        if proc.returncode != 0:
            output = (proc.stderr or proc.stdout or "").strip()
            raise LinkError(f"mklink /J failed for {link_path}: {output or f'exit code {proc.returncode}'}")
        _log.debug("Junction %s -> %s", link_path, target)

    def remove_link(self, link_path: Path) -> None:
        if not is_link_point(link_path):
            raise LinkError(f"Not a link point: {link_path}")
        # rmdir on a junction drops the reparse point and leaves the target alone
        try:
            os.rmdir(link_path)
        except OSError as exc:
            raise LinkError(f"Could not remove junction {link_path}: {exc}") from exc

    def is_link(self, path: Path) -> bool:
        return is_link_point(path)


def default_link_provider() -> LinkProvider:
    if os.name == "nt":
        return JunctionLinkProvider()
    return SymlinkLinkProvider()
