"""
Outcome type shared by every core operation.

Operations never raise for expected failures; they return an
``OperationResult`` that a presentation layer can show as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal[
    "not_found",
    "incomplete",
    "version_mismatch",
    "io_failure",
    "link_failure",
    "nothing_to_restore",
]


@dataclass(frozen=True)
class Counts:
    folders: int = 0
    files: int = 0


@dataclass
class OperationResult:
    ok: bool
    message: str
    kind: ErrorKind | None = None
    folders: int = 0
    files: int = 0
    detail: str = ""
    backup_build_id: str | None = None
    installed_build_id: str | None = None

    @property
    def counts(self) -> Counts:
        return Counts(self.folders, self.files)

    @classmethod
    def success(cls, message: str, folders: int = 0, files: int = 0) -> OperationResult:
        return cls(ok=True, message=message, folders=folders, files=files)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        folders: int = 0,
        files: int = 0,
        detail: str = "",
    ) -> OperationResult:
        return cls(ok=False, message=message, kind=kind, folders=folders, files=files, detail=detail)
