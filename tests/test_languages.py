import dataclasses

import pytest

from languages import LANGUAGE_CODES, LANGUAGES, display_name, get_language, is_known_code, launch_parameter


def test_catalogue_has_eight_unique_codes():
    assert len(LANGUAGE_CODES) == 8
    assert set(LANGUAGE_CODES) == set(LANGUAGES)
    assert all(LANGUAGES[code].code == code for code in LANGUAGE_CODES)


def test_catalogue_is_immutable():
    with pytest.raises(TypeError):
        LANGUAGES["xx"] = LANGUAGES["en"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        LANGUAGES["en"].name = "Klingon"


def test_lookup_helpers():
    assert is_known_code("cn")
    assert not is_known_code("zz")
    assert get_language("ru").miles_lang == "russian"
    assert get_language("zz") is None
    assert display_name("ko") == "Korean"
    assert display_name("zz") == "zz"


def test_launch_parameter():
    assert launch_parameter("de") == "+miles_language german"
    assert launch_parameter("zz") == ""
