"""
Shared fixtures and helpers for the BF6 Voice Switcher test suite.
"""

from pathlib import Path

import pytest

from activation import ActivationEngine
from backup_store import BackupStore
from link_points import SymlinkLinkProvider


def write_file(path: Path, data: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")
    return path


def make_voice_tree(root: Path, code: str = "en") -> Path:
    """Lay out a small game data tree with one language installed.

    root/
      sound/vo<code>/bank.dat
      sound/vo<code>.toc
      ui/<code>/strings.dat
      other/readme.txt
    """
    write_file(root / "sound" / f"vo{code}" / "bank.dat", f"bank-{code}")
    write_file(root / "sound" / f"vo{code}.toc", f"toc-{code}")
    write_file(root / "ui" / code / "strings.dat", f"strings-{code}")
    write_file(root / "other" / "readme.txt", "unrelated")
    return root


@pytest.fixture
def dirs(tmp_path):
    """Return (game_data_dir, backup_dir) as fresh tmp_path subdirectories."""
    game = tmp_path / "game" / "Data" / "Win32"
    backups = tmp_path / "voice_backups"
    game.mkdir(parents=True)
    return game, backups


@pytest.fixture
def links():
    return SymlinkLinkProvider()


@pytest.fixture
def store(dirs):
    _, backups = dirs
    return BackupStore(backups, log_callback=lambda _: None)


@pytest.fixture
def engine(store, links):
    return ActivationEngine(store, links=links, log_callback=lambda _: None)
