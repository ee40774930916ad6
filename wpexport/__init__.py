"""Work package list export to PDF with batched rendering and merge."""

from .reports.models import (
    Attachment,
    ErrorKind,
    ExportContext,
    ExportOptions,
    ExportQuery,
    ExportResult,
    WorkPackage,
)
from .reports.work_package_list import WorkPackageListToPdf

__all__ = [
    "Attachment",
    "ErrorKind",
    "ExportContext",
    "ExportOptions",
    "ExportQuery",
    "ExportResult",
    "WorkPackage",
    "WorkPackageListToPdf",
]
