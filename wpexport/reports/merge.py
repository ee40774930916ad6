"""Concatenation of batch PDFs into one document."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from typing import Optional, Sequence

from pypdf import PdfReader, PdfWriter

from ..core.audit import audit_span
from .batching import discard_files
from .errors import MergeFailure


def _slug(value: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        return "pdf_export"
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", raw).strip("._") or "pdf_export"


def merge_batched_pdfs(
    batch_files: Sequence[str],
    filename: str = "pdf_export",
    tmp_dir: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Merge batch PDFs in order and return the path of the combined file.

    A single file is returned as is. With several files every page is
    appended to a new document; the batch files are consumed (deleted)
    either way. Link annotations that point into other pages are not
    carried across batch boundaries.
    """
    log = logger or logging.getLogger(__name__)
    if not batch_files:
        raise MergeFailure("No batch PDFs to merge.")
    if len(batch_files) == 1:
        return batch_files[0]

    fd, merged_path = tempfile.mkstemp(prefix=f"{_slug(filename)}_", suffix=".pdf", dir=tmp_dir)
    os.close(fd)
    try:
        with audit_span("PDF_MERGE", logger=log, batches=len(batch_files)):
            writer = PdfWriter()
            for path in batch_files:
                reader = PdfReader(path)
                for page in reader.pages:
                    writer.add_page(page)
            writer.compress_identical_objects()
            with open(merged_path, "wb") as f:
                writer.write(f)
    except Exception as exc:
        discard_files([merged_path], log)
        raise MergeFailure(f"Failed to merge {len(batch_files)} batch PDFs: {exc}") from exc
    finally:
        discard_files(batch_files, log)

    log.debug("Merged %s batch PDFs into %s", len(batch_files), merged_path)
    return merged_path
