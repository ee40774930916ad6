"""Exceptions raised below the export entry point."""

from __future__ import annotations


class ReportExportError(RuntimeError):
    """Raised when report export cannot continue."""


class LayoutOverflow(ReportExportError):
    """Raised when content cannot fit the page, e.g. too many table columns."""


class MergeFailure(ReportExportError):
    """Raised when batch PDFs cannot be read, imported or written as one file."""
