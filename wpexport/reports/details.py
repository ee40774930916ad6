"""Per work package detail sections."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import CondPageBreak, Flowable, KeepTogether, Paragraph, Spacer

from . import layout
from .attachments import AttachmentEmbedder
from .locales import translate
from .models import RecordMeta, WorkPackage
from .tables import build_attribute_table


DETAIL_COLUMNS = ("type", "status", "priority", "assignee", "author", "start_date", "due_date", "done_ratio")


def _paragraphs(text: str) -> List[str]:
    blocks = [b.strip() for b in str(text or "").replace("\r\n", "\n").split("\n\n")]
    return [b for b in blocks if b]


class DetailRenderer:
    def __init__(
        self,
        language: str = "en",
        embedder: Optional[AttachmentEmbedder] = None,
        columns: Sequence[str] = DETAIL_COLUMNS,
    ):
        self.language = language
        self.embedder = embedder
        self.columns = tuple(columns)
        self.heading_style = ParagraphStyle(
            "DetailHeading",
            fontName=layout.HEADING_FONT,
            fontSize=layout.DETAIL_HEADING_FONT_SIZE,
            leading=layout.DETAIL_HEADING_FONT_SIZE + 3.0,
            textColor=colors.HexColor("#1f2933"),
            spaceAfter=4.0,
        )
        self.label_style = ParagraphStyle(
            "DetailLabel",
            fontName=layout.HEADING_FONT,
            fontSize=layout.BODY_FONT_SIZE,
            leading=layout.BODY_FONT_SIZE + 3.0,
            textColor=colors.HexColor("#3f4b5a"),
            spaceBefore=4.0,
        )
        self.body_style = ParagraphStyle(
            "DetailBody",
            fontName=layout.BODY_FONT,
            fontSize=layout.BODY_FONT_SIZE,
            leading=layout.BODY_FONT_SIZE + 3.0,
            textColor=colors.HexColor("#2b3a4a"),
            spaceAfter=3.0,
        )

    def heading(self, wp: WorkPackage, meta: Optional[RecordMeta]) -> str:
        number = f"{meta.number}. " if meta is not None else ""
        return f"{number}{wp.subject} #{wp.id}"

    def flowables(self, wp: WorkPackage, meta: Optional[RecordMeta], width: float, height: float) -> List[Flowable]:
        out: List[Flowable] = [
            CondPageBreak(height * 0.2),
            KeepTogether(
                [
                    Paragraph(escape(self.heading(wp, meta)), self.heading_style),
                    build_attribute_table(wp, self.columns, width, self.language),
                ]
            ),
        ]

        description = _paragraphs(wp.description)
        if description:
            out.append(Paragraph(escape(translate("label_description", self.language)), self.label_style))
            for block in description:
                out.append(Paragraph(escape(block).replace("\n", "<br/>"), self.body_style))

        if self.embedder is not None:
            images = []
            for attachment in wp.attachments:
                img = self.embedder.flowable(attachment, max_width=width, max_height=height * 0.6)
                if img is not None:
                    images.extend([img, Spacer(1, layout.IMAGE_SPACING_PT)])
            if images:
                out.append(Paragraph(escape(translate("label_attachments", self.language)), self.label_style))
                out.extend(images)

        out.append(Spacer(1, layout.BLOCK_SPACING_PT))
        return out

    def write(
        self,
        story: List[Flowable],
        work_packages: Sequence[WorkPackage],
        meta_map: Mapping[int, RecordMeta],
        width: float,
        height: float,
    ) -> None:
        for wp in work_packages:
            story.extend(self.flowables(wp, meta_map.get(wp.id), width, height))
