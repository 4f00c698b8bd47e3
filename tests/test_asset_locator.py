"""
Tests for voice asset discovery.
"""

import os

from asset_locator import locate, toc_file_names, voice_folder_names
from tests.conftest import make_voice_tree, write_file


def posix(paths):
    return {p.as_posix() for p in paths}


def test_names_for_code():
    assert voice_folder_names("de") == ("de", "vode")
    assert toc_file_names("de") == ("de.toc", "vode.toc")


def test_locate_finds_folders_and_toc_files(tmp_path):
    make_voice_tree(tmp_path, "en")

    assets = locate(tmp_path, "en")

    assert posix(assets.folders) == {"sound/voen", "ui/en"}
    assert posix(assets.toc_files) == {"sound/voen.toc"}
    assert not assets.is_empty


def test_locate_ignores_other_languages(tmp_path):
    make_voice_tree(tmp_path, "en")
    make_voice_tree(tmp_path, "ja")

    assets = locate(tmp_path, "ja")

    assert posix(assets.folders) == {"sound/voja", "ui/ja"}
    assert posix(assets.toc_files) == {"sound/voja.toc"}


def test_locate_does_not_descend_into_matched_folder(tmp_path):
    write_file(tmp_path / "en" / "nested" / "en" / "x.dat")
    write_file(tmp_path / "en" / "en.toc")

    assets = locate(tmp_path, "en")

    assert posix(assets.folders) == {"en"}
    assert assets.toc_files == frozenset()


def test_locate_empty_result(tmp_path):
    write_file(tmp_path / "data" / "file.bin")

    assets = locate(tmp_path, "ko")

    assert assets.is_empty
    assert assets.folders == frozenset()


def test_locate_toc_name_must_be_a_file(tmp_path):
    (tmp_path / "en.toc").mkdir()
    assert locate(tmp_path, "en").is_empty


def test_locate_never_descends_through_link(tmp_path):
    external = tmp_path / "external"
    write_file(external / "en" / "bank.dat")
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(external, root / "a", target_is_directory=True)

    assets = locate(root, "en")

    assert assets.is_empty


def test_locate_reports_link_named_like_language(tmp_path):
    snapshot = tmp_path / "snapshot" / "voen"
    write_file(snapshot / "bank.dat")
    root = tmp_path / "root"
    (root / "sound").mkdir(parents=True)
    os.symlink(snapshot, root / "sound" / "voen", target_is_directory=True)

    assets = locate(root, "en")

    assert posix(assets.folders) == {"sound/voen"}


def test_locate_reports_dangling_link(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(tmp_path / "gone", root / "en", target_is_directory=True)

    assert posix(locate(root, "en").folders) == {"en"}
