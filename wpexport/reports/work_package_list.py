"""Exporter for work package lists.

It can optionally export a work package details list with
- title
- attribute table
- description with optional embedded images

When exporting with embedded images the memory consumption can quickly
grow beyond limits. Therefore multiple smaller PDFs are rendered and
finally merged into one file.
"""

from __future__ import annotations

import logging
import os
import tempfile
import time
import uuid
from typing import Dict, Optional, Sequence, Tuple

from ..core.audit import bound_audit_fields, emit_audit
from ..core.config.export import ExportSettings
from ..core.perf import PerfTracer
from .attachments import AttachmentEmbedder
from .batching import BatchState, discard_files, plan_batches, run_batches
from .canvas import DocumentCanvas
from .content import ContentWriter
from .decorations import PageDecorator
from .errors import LayoutOverflow, MergeFailure
from .layout import page_setup
from .locales import translate
from .merge import merge_batched_pdfs
from .models import (
    ErrorKind,
    ExportContext,
    ExportOptions,
    ExportQuery,
    ExportResult,
    RecordMeta,
    WorkPackage,
    build_meta_infos_map,
)


class WorkPackageListToPdf:
    key = "pdf"

    def __init__(
        self,
        query: ExportQuery,
        options: Optional[ExportOptions] = None,
        context: Optional[ExportContext] = None,
        *,
        settings: Optional[ExportSettings] = None,
        writer: Optional[ContentWriter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.query = query
        self.options = options or ExportOptions()
        self.context = context or ExportContext()
        self.settings = settings or ExportSettings.from_env()
        self.log = logger or logging.getLogger(__name__)
        self.writer = writer or ContentWriter(self.query, self.options, self.context)
        self.tracer = PerfTracer(logger=self.log, threshold_s=self.settings.slow_batch_s)

    @property
    def title(self) -> str:
        return self.writer.filename

    def export(self) -> ExportResult:
        """Render the query's work packages; never raises, returns one result."""
        with bound_audit_fields(export_id=uuid.uuid4().hex[:12]):
            return self._export()

    def _export(self) -> ExportResult:
        t_start = time.perf_counter()
        emit_audit(
            "EXPORT_WORK_PACKAGES_PDF_START",
            logger=self.log,
            work_packages=len(self.query.work_packages),
            with_descriptions=int(bool(self.options.with_descriptions)),
            with_attachments=int(bool(self.options.with_attachments)),
            batch_size=int(self.settings.batch_size),
        )
        try:
            path, pages = self.render_work_packages(list(self.query.work_packages))
        except LayoutOverflow as exc:
            self.log.warning("PDF export does not fit the page layout: %s", exc)
            return self._failure(ErrorKind.LAYOUT_OVERFLOW, "error_pdf_export_too_many_columns")
        except MergeFailure as exc:
            self.log.error("Failed to merge PDF export batches: %s", exc)
            return self._failure(ErrorKind.MERGE_FAILURE, "error_pdf_failed_to_export")
        except Exception:
            self.log.exception("Failed to generate PDF export.")
            return self._failure(ErrorKind.UNEXPECTED, "error_pdf_failed_to_export")

        emit_audit(
            "EXPORT_WORK_PACKAGES_PDF_OK",
            logger=self.log,
            output_pdf=path,
            pages=int(pages),
            elapsed_ms=round((time.perf_counter() - t_start) * 1000.0, 3),
        )
        self.log.info("Work package PDF exported: %s (pages=%s) %s", path, pages, self.tracer.summary())
        return ExportResult.success(path, pages, filename=self.title)

    def _failure(self, kind: ErrorKind, message_key: str) -> ExportResult:
        emit_audit("EXPORT_WORK_PACKAGES_PDF_FAILED", logger=self.log, kind=kind.value)
        return ExportResult.failure(kind, translate(message_key, self.context.language))

    def setup_page(self) -> DocumentCanvas:
        return DocumentCanvas(page_setup(self.options.with_descriptions), title=self.writer.heading)

    def render_work_packages(self, work_packages: Sequence[WorkPackage]) -> Tuple[str, int]:
        meta_map = build_meta_infos_map(work_packages)
        plan = plan_batches(len(work_packages), self.options, self.settings.batch_size)

        def _render_pass(batch_index: int, batch: Sequence[WorkPackage], state: BatchState) -> Tuple[str, int]:
            canvas = self.setup_page()
            if state.iteration == 0:
                # Title and overview cover the full list and open the first document only.
                self.writer.write_title(canvas)
                self.writer.write_overview(canvas, work_packages)
            name = f"pdf_batch_{batch_index}" if plan.batched else "pdf_export"
            return self.render_pdf(canvas, batch, meta_map, state, name)

        state = run_batches(plan, work_packages, _render_pass, logger=self.log)
        if not plan.batched:
            return state.files[0], state.page_count

        self.log.info("Merging %s PDF batches (%s pages)", len(state.files), state.page_count)
        merged = merge_batched_pdfs(state.files, self.writer.heading, tmp_dir=self.settings.tmp_dir, logger=self.log)
        return merged, state.page_count

    def render_pdf(
        self,
        canvas: DocumentCanvas,
        work_packages: Sequence[WorkPackage],
        meta_map: Dict[int, RecordMeta],
        state: BatchState,
        name: str,
    ) -> Tuple[str, int]:
        """Write details of one batch, render it to a temp file and return (path, pages)."""
        embedder = AttachmentEmbedder(
            max_px=self.settings.image_max_px,
            tmp_dir=self.settings.tmp_dir,
            logger=self.log,
        )
        fd, path = tempfile.mkstemp(prefix=f"{name}_", suffix=".pdf", dir=self.settings.tmp_dir)
        os.close(fd)
        t0 = self.tracer.start()
        try:
            if self.options.with_descriptions:
                self.writer.write_details(canvas, work_packages, meta_map, embedder)
            decorator = PageDecorator(
                self.writer.heading,
                self.context,
                page_offset=state.page_count,
                logo_path=self.settings.logo_path,
            )
            pages = canvas.render_file(path, decorator)
        except BaseException:
            discard_files([path], self.log)
            raise
        finally:
            embedder.delete_all_resized_images()

        self.tracer.log_if_slow("PDF_BATCH_RENDER", t0, extra=f"batch={name} work_packages={len(work_packages)}")
        emit_audit(
            "PDF_BATCH_RENDERED",
            logger=self.log,
            batch=name,
            work_packages=len(work_packages),
            pages=int(pages),
            page_offset=int(state.page_count),
        )
        return path, pages
