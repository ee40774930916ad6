"""Overview table and attribute table builders."""

from __future__ import annotations

from typing import List, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from . import layout
from .errors import LayoutOverflow
from .locales import column_caption
from .models import WorkPackage


HEADER_BG = "#dfe8f5"
HEADER_FG = "#1f2933"
GRID_COLOR = "#cfd6df"
STRIPE_BG = "#f8fafc"


def _cell_style(name: str, bold: bool = False) -> ParagraphStyle:
    return ParagraphStyle(
        name,
        fontName=layout.HEADING_FONT if bold else layout.BODY_FONT,
        fontSize=layout.TABLE_FONT_SIZE,
        leading=layout.TABLE_FONT_SIZE + 2.0,
        textColor=colors.HexColor(HEADER_FG if bold else "#111111"),
    )


def max_columns(available_width: float) -> int:
    return max(1, int(float(available_width) // layout.MIN_COLUMN_WIDTH_PT))


def _base_style(row_count: int) -> List[tuple]:
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(HEADER_BG)),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor(GRID_COLOR)),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 1.5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1.5),
        ("LEFTPADDING", (0, 0), (-1, -1), 2.0),
        ("RIGHTPADDING", (0, 0), (-1, -1), 2.0),
    ]
    for r in range(1, row_count):
        if r % 2 == 0:
            style.append(("BACKGROUND", (0, r), (-1, r), colors.HexColor(STRIPE_BG)))
    return style


class OverviewTableRenderer:
    """One header row of column captions plus one row per work package."""

    def __init__(self, language: str = "en"):
        self.language = language
        self.header_style = _cell_style("OverviewHeader", bold=True)
        self.cell_style = _cell_style("OverviewCell")

    def check_fits(self, columns: Sequence[str], available_width: float) -> None:
        if not columns:
            raise LayoutOverflow("Overview table has no columns.")
        if len(columns) > max_columns(available_width):
            raise LayoutOverflow(
                f"{len(columns)} columns do not fit {available_width:.0f}pt "
                f"(at most {max_columns(available_width)})."
            )

    def build(self, columns: Sequence[str], work_packages: Sequence[WorkPackage], available_width: float) -> Table:
        self.check_fits(columns, available_width)
        data = [[Paragraph(escape(column_caption(c, self.language)), self.header_style) for c in columns]]
        for wp in work_packages:
            data.append([Paragraph(escape(wp.value_of(c)), self.cell_style) for c in columns])

        col_width = float(available_width) / len(columns)
        table = Table(data, colWidths=[col_width] * len(columns), repeatRows=1, hAlign="LEFT")
        table.setStyle(TableStyle(_base_style(len(data))))
        return table


def attribute_pairs(
    wp: WorkPackage, columns: Sequence[str], language: str = "en"
) -> List[Tuple[str, str, str, str]]:
    """Fold label/value pairs into rows of two pairs each."""
    items = [(column_caption(c, language), wp.value_of(c)) for c in columns if c not in ("subject", "description")]
    rows: List[Tuple[str, str, str, str]] = []
    for i in range(0, len(items), 2):
        lk, lv = items[i]
        rk, rv = items[i + 1] if i + 1 < len(items) else ("", "")
        rows.append((lk, lv, rk, rv))
    return rows


def build_attribute_table(
    wp: WorkPackage, columns: Sequence[str], width: float, language: str = "en"
) -> Table:
    lbl_style = _cell_style("AttributeLabel", bold=True)
    val_style = _cell_style("AttributeValue")
    data = []
    for lk, lv, rk, rv in attribute_pairs(wp, columns, language):
        data.append(
            [
                Paragraph(escape(f"{lk}:") if lk else "", lbl_style),
                Paragraph(escape(lv), val_style),
                Paragraph(escape(f"{rk}:") if rk else "", lbl_style),
                Paragraph(escape(rv), val_style),
            ]
        )
    if not data:
        data.append([Paragraph("", lbl_style)] * 4)

    c1 = float(width) * 0.18
    c2 = float(width) * 0.32
    c3 = float(width) * 0.18
    c4 = float(width) - c1 - c2 - c3
    tbl = Table(data, colWidths=[c1, c2, c3, c4], hAlign="LEFT")
    tbl.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f5f8fc")),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#d3dbe5")),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), 3.0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 3.0),
                ("TOPPADDING", (0, 0), (-1, -1), 1.5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 1.5),
            ]
        )
    )
    return tbl
