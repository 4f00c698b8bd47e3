"""
End-to-end tests for the VoiceSwitcher facade.
"""

import shutil

from link_points import SymlinkLinkProvider, is_link_point
from voice_switcher import VoiceSwitcher
from tests.conftest import make_voice_tree, write_file


# ── helpers ──────────────────────────────────────────────────────────────────

def make_steam(tmp_path, build_id="100"):
    """Fake Steam root with the game installed; returns (steam_root, voice_root)."""
    steam = tmp_path / "Steam"
    write_file(steam / "steam.exe", "stub")
    write_file(
        steam / "steamapps" / "appmanifest_2807960.acf",
        f'"AppState"\n{{\n\t"installdir"\t\t"Battlefield 6"\n\t"buildid"\t\t"{build_id}"\n}}\n',
    )
    voice_root = steam / "steamapps" / "common" / "Battlefield 6" / "Data" / "Win32"
    voice_root.mkdir(parents=True)
    return steam, voice_root


def make_switcher(tmp_path, steam_roots, **kwargs):
    return VoiceSwitcher(
        tmp_path / "voice_backups",
        steam_roots=steam_roots,
        links=SymlinkLinkProvider(),
        log_callback=lambda _: None,
        **kwargs,
    )


def set_build(steam, build_id):
    write_file(
        steam / "steamapps" / "appmanifest_2807960.acf",
        f'"AppState"\n{{\n\t"installdir"\t\t"Battlefield 6"\n\t"buildid"\t\t"{build_id}"\n}}\n',
    )


# ── tests ────────────────────────────────────────────────────────────────────

def test_full_switch_cycle(tmp_path):
    steam, voice_root = make_steam(tmp_path)
    make_voice_tree(voice_root, "en")
    switcher = make_switcher(tmp_path, [steam])

    info = switcher.detect_installation()
    assert info.build_id == "100"
    assert switcher.game_data_dir == voice_root

    assert switcher.capture("en").ok
    [record] = switcher.list_backups()
    assert (record.lang_code, record.build_id) == ("en", "100")

    shutil.rmtree(voice_root / "sound" / "voen")
    shutil.rmtree(voice_root / "ui" / "en")
    (voice_root / "sound" / "voen.toc").unlink()

    result = switcher.activate("en")
    assert result.ok, result.message
    assert is_link_point(voice_root / "sound" / "voen")

    result = switcher.deactivate("en")
    assert result.ok, result.message
    assert not (voice_root / "sound" / "voen").exists()

    assert switcher.remove_backup("en").ok
    assert switcher.list_backups() == []


def test_game_update_blocks_activation(tmp_path):
    steam, voice_root = make_steam(tmp_path, build_id="100")
    make_voice_tree(voice_root, "en")
    switcher = make_switcher(tmp_path, [steam])
    switcher.detect_installation()
    assert switcher.capture("en").ok
    shutil.rmtree(voice_root / "ui" / "en")
    shutil.rmtree(voice_root / "sound" / "voen")

    set_build(steam, "200")
    switcher.detect_installation()

    assert switcher.check_version("en").is_mismatch
    result = switcher.activate("en")
    assert result.kind == "version_mismatch"
    assert not (voice_root / "ui" / "en").exists()


def test_no_installation_and_no_override(tmp_path):
    switcher = make_switcher(tmp_path, [tmp_path / "nowhere"])

    assert switcher.detect_installation() is None
    assert switcher.game_data_dir is None
    assert switcher.capture("en").kind == "not_found"
    assert switcher.activate("en").kind == "not_found"
    assert switcher.deactivate("en").kind == "not_found"
    assert len(switcher.validate_paths()) == 2


def test_manual_game_data_dir_override(tmp_path):
    steam, voice_root = make_steam(tmp_path)
    manual = tmp_path / "manual"
    make_voice_tree(manual, "ko")
    switcher = make_switcher(tmp_path, [steam], game_data_dir=manual)
    switcher.detect_installation()

    assert switcher.game_data_dir == manual
    assert switcher.capture("ko").ok
    assert switcher.list_backups()[0].build_id == "100"

    switcher.set_game_data_dir(None)
    assert switcher.game_data_dir == voice_root


def test_environment_status(tmp_path):
    steam, voice_root = make_steam(tmp_path, build_id="77")
    make_voice_tree(voice_root, "fr")
    switcher = make_switcher(tmp_path, [steam])

    status = switcher.get_environment_status()
    assert not status.installation_detected
    assert not status.backup_dir_exists

    switcher.detect_installation()
    switcher.capture("fr")
    status = switcher.get_environment_status()

    assert status.installation_detected
    assert status.build_id == "77"
    assert status.game_data_dir_exists
    assert status.backup_dir_exists
    assert status.backed_up_codes == ["fr"]
    assert switcher.validate_paths() == []


def test_launch_parameter():
    assert VoiceSwitcher.launch_parameter("ja") == "+miles_language japanese"
