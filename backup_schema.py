"""
Snapshot manifest for BF6 Voice Switcher.

Each snapshot directory under the backup root carries a ``backup_info.txt``
written after a successful capture:

    build_id=21974322
    lang_code=en
    folders=sound/voen;sound/ui/en
    toc_files=sound/voen.toc

Paths are relative to the scanned data root and stored with ``/``
separators. ``lang_code`` is informational only: the snapshot directory's
name is authoritative and always overrides it on read.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

BACKUP_INFO_FILENAME = "backup_info.txt"
_LIST_SEPARATOR = ";"

_log = logging.getLogger(__name__)


def _normalize_rel(value: str) -> str:
    return value.replace("\\", "/").strip("/")


class BackupRecord(BaseModel):
    """One captured language. ``build_id`` empty means "unknown version"."""

    lang_code: str
    build_id: str = ""
    folders: list[str] = Field(default_factory=list)
    toc_files: list[str] = Field(default_factory=list)

    @field_validator("build_id")
    @classmethod
    def _strip_build_id(cls, v: str) -> str:
        return v.strip()

    @field_validator("folders", "toc_files")
    @classmethod
    def _normalize_paths(cls, v: list[str]) -> list[str]:
        return [_normalize_rel(p) for p in v if p.strip()]


def render_backup_info(record: BackupRecord) -> str:
    return (
        f"build_id={record.build_id}\n"
        f"lang_code={record.lang_code}\n"
        f"folders={_LIST_SEPARATOR.join(record.folders)}\n"
        f"toc_files={_LIST_SEPARATOR.join(record.toc_files)}\n"
    )


def parse_backup_info(text: str, lang_code: str) -> BackupRecord:
    """Parse manifest *text* for the snapshot named *lang_code*.

    Unknown keys and lines without ``=`` are ignored. Raises
    ``pydantic.ValidationError`` only if the values cannot form a record.
    """
    values: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        values[key.strip()] = value.strip()

    stored_code = values.get("lang_code")
    if stored_code and stored_code != lang_code:
        _log.warning(
            "Manifest for '%s' claims lang_code=%r; using the directory name",
            lang_code, stored_code,
        )

    def split(key: str) -> list[str]:
        raw = values.get(key, "")
        return raw.split(_LIST_SEPARATOR) if raw else []

    return BackupRecord(
        lang_code=lang_code,
        build_id=values.get("build_id", ""),
        folders=split("folders"),
        toc_files=split("toc_files"),
    )
