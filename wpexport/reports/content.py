"""Writes title, overview table and detail sections onto a document canvas."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Spacer

from . import layout
from .attachments import AttachmentEmbedder
from .canvas import DocumentCanvas
from .details import DetailRenderer
from .locales import translate
from .models import ExportContext, ExportOptions, ExportQuery, RecordMeta, WorkPackage
from .tables import OverviewTableRenderer


class ContentWriter:
    def __init__(
        self,
        query: ExportQuery,
        options: ExportOptions,
        context: ExportContext,
        tables: Optional[OverviewTableRenderer] = None,
    ):
        self.query = query
        self.options = options
        self.context = context
        self.tables = tables or OverviewTableRenderer(context.language)
        self.heading_style = ParagraphStyle(
            "PageHeading",
            fontName=layout.HEADING_FONT,
            fontSize=layout.PAGE_HEADING_FONT_SIZE,
            leading=layout.PAGE_HEADING_FONT_SIZE + 4.0,
        )

    @property
    def heading(self) -> str:
        if self.query.is_new or not self.query.name:
            title = translate("label_work_package_plural", self.context.language)
        else:
            title = self.query.name
        if self.query.project:
            return f"{self.query.project} - {title}"
        return title

    @property
    def filename(self) -> str:
        return f"{self.heading}.pdf"

    def write_title(self, canvas: DocumentCanvas) -> None:
        canvas.title = self.heading
        canvas.add(Paragraph(escape(self.heading), self.heading_style), Spacer(1, layout.TITLE_SPACING_PT))

    def write_overview(self, canvas: DocumentCanvas, work_packages: Sequence[WorkPackage]) -> None:
        frame = canvas.setup.frame
        canvas.add(
            self.tables.build(self.query.columns, work_packages, frame.width),
            Spacer(1, layout.BLOCK_SPACING_PT),
        )

    def write_details(
        self,
        canvas: DocumentCanvas,
        work_packages: Sequence[WorkPackage],
        meta_map: Mapping[int, RecordMeta],
        embedder: Optional[AttachmentEmbedder] = None,
    ) -> None:
        renderer = DetailRenderer(
            language=self.context.language,
            embedder=embedder if self.options.with_attachments else None,
        )
        frame = canvas.setup.frame
        renderer.write(canvas.story, work_packages, meta_map, frame.width, frame.height)
