"""
Minimal reader for Steam's line-oriented VDF/ACF text.

Only the flat ``"key"    "value"`` shape is understood: a line is split on
double quotes and the fourth segment is the value. Nesting, escapes other than
doubled backslashes, and multi-line values are ignored -- the switcher only
needs library paths, the install directory and the build id.
"""

from __future__ import annotations

import os


def line_has_key(line: str, key: str) -> bool:
    return f'"{key}"' in line


def extract_quoted_value(line: str) -> str | None:
    """Return the value of a ``"key" "value"`` line, or None if malformed."""
    parts = line.split('"')
    if len(parts) >= 4:
        return parts[3]
    return None


def read_keys(text: str, keys: tuple[str, ...]) -> dict[str, str]:
    """Collect the last value seen for each of *keys* in *text*.

    Keys whose lines are malformed map to an empty string, matching how the
    client treats a present-but-unreadable entry.
    """
    found: dict[str, str] = {}
    for line in text.splitlines():
        for key in keys:
            if line_has_key(line, key):
                found[key] = extract_quoted_value(line) or ""
                break
    return found


def normalize_vdf_path(raw: str) -> str:
    r"""Collapse the escaped separators Steam writes (``D:\\SteamLibrary``)."""
    value = raw.replace("\\\\", "\\")
    if os.sep != "\\":
        value = value.replace("\\", os.sep)
    return value
