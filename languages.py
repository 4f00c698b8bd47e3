"""
Language catalogue for BF6 Voice Switcher.

The game ships voice-over in eight languages. Each entry maps the short code
used in asset folder names (``en``, ``voen``, ``en.toc`` ...) to a display name
and the token the engine expects in its ``+miles_language`` launch option.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class LanguageDescriptor:
    code: str
    name: str
    miles_lang: str


LANGUAGE_CODES = ("en", "ja", "cn", "de", "fr", "es", "ru", "ko")

LANGUAGES = MappingProxyType(
    {
        "en": LanguageDescriptor("en", "English", "english"),
        "ja": LanguageDescriptor("ja", "Japanese", "japanese"),
        "cn": LanguageDescriptor("cn", "Chinese", "chinese"),
        "de": LanguageDescriptor("de", "German", "german"),
        "fr": LanguageDescriptor("fr", "French", "french"),
        "es": LanguageDescriptor("es", "Spanish", "spanish"),
        "ru": LanguageDescriptor("ru", "Russian", "russian"),
        "ko": LanguageDescriptor("ko", "Korean", "korean"),
    }
)


def is_known_code(code: str) -> bool:
    return code in LANGUAGES


def get_language(code: str) -> LanguageDescriptor | None:
    return LANGUAGES.get(code)


def display_name(code: str) -> str:
    """Human-readable name for *code*, falling back to the code itself."""
    lang = LANGUAGES.get(code)
    return lang.name if lang else code


def launch_parameter(code: str) -> str:
    """Launch option that makes the engine load *code*'s voice bank.

    Returns an empty string for an unknown code.
    """
    lang = LANGUAGES.get(code)
    if lang is None:
        return ""
    return f"+miles_language {lang.miles_lang}"
