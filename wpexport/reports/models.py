"""Plain data passed into and out of the work package PDF export."""

from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple


IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp")

DEFAULT_COLUMNS = ("id", "subject", "type", "status", "assignee")


@dataclass(frozen=True)
class ExportOptions:
    with_descriptions: bool = False
    with_attachments: bool = False


@dataclass(frozen=True)
class Attachment:
    filename: str
    path: str
    content_type: str = ""

    @property
    def is_image(self) -> bool:
        if self.content_type:
            return self.content_type.lower().startswith("image/")
        return os.path.splitext(self.filename)[1].lower() in IMAGE_EXTENSIONS


@dataclass
class WorkPackage:
    id: int
    subject: str
    type: str = ""
    status: str = ""
    priority: str = ""
    assignee: Optional[str] = None
    author: Optional[str] = None
    start_date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    done_ratio: Optional[int] = None
    description: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    def value_of(self, column: str) -> str:
        """Display string for an overview/detail column."""
        value = getattr(self, column, None)
        if value is None:
            return ""
        if column == "done_ratio":
            return f"{int(value)}%"
        if isinstance(value, dt.date):
            return value.isoformat()
        return str(value)


@dataclass(frozen=True)
class ExportQuery:
    """Saved (or unsaved) query together with its ordered results."""

    work_packages: Sequence[WorkPackage]
    name: Optional[str] = None
    is_new: bool = False
    project: Optional[str] = None
    columns: Tuple[str, ...] = DEFAULT_COLUMNS


@dataclass(frozen=True)
class ExportContext:
    """Who exports, in which language, on which day."""

    user_name: Optional[str] = None
    language: str = "en"
    today: dt.date = field(default_factory=dt.date.today)


@dataclass(frozen=True)
class RecordMeta:
    level_path: Tuple[int, ...]
    level: int = 0

    @property
    def number(self) -> str:
        return ".".join(str(n) for n in self.level_path)


def build_meta_infos_map(work_packages: Sequence[WorkPackage]) -> Dict[int, RecordMeta]:
    # Flat ordinals only; hierarchy levels are not derived.
    return {wp.id: RecordMeta(level_path=(index + 1,), level=0) for index, wp in enumerate(work_packages)}


class ErrorKind(str, Enum):
    LAYOUT_OVERFLOW = "layout_overflow"
    MERGE_FAILURE = "merge_failure"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export call: a finished PDF path or a localized error."""

    ok: bool
    path: Optional[str] = None
    page_count: int = 0
    filename: str = ""
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, path: str, page_count: int, filename: str = "") -> "ExportResult":
        return cls(ok=True, path=path, page_count=int(page_count), filename=filename)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ExportResult":
        return cls(ok=False, error_kind=kind, message=message)
