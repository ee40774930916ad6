"""Page geometry and typography for work package PDF exports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.pagesizes import landscape, portrait
from reportlab.lib.units import inch

# 7.25in x 10.5in
EXECUTIVE = (7.25 * inch, 10.5 * inch)
PAGE_SIZE = EXECUTIVE

# Margins and decoration offsets (points).
PAGE_TOP_MARGIN = 60.0
PAGE_BOTTOM_MARGIN = 60.0
PAGE_SIDE_MARGIN = 36.0
PAGE_HEADER_TOP = 20.0
PAGE_FOOTER_TOP = 30.0
LOGO_HEIGHT = 20.0
# SimpleDocTemplate frames pad each side by 6pt.
FRAME_PADDING = 6.0

# Typography.
HEADING_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"
PAGE_HEADING_FONT_SIZE = 14
DETAIL_HEADING_FONT_SIZE = 11
BODY_FONT_SIZE = 9
TABLE_FONT_SIZE = 7.5
DECORATION_FONT_SIZE = 8

# Spacing (points).
TITLE_SPACING_PT = 10.0
BLOCK_SPACING_PT = 8.0
IMAGE_SPACING_PT = 6.0

# A column narrower than this cannot hold a readable caption.
MIN_COLUMN_WIDTH_PT = 42.0


@dataclass(frozen=True)
class SafeBox:
    left: float
    bottom: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def top(self) -> float:
        return self.bottom + self.height


@dataclass(frozen=True)
class PageSetup:
    page_size: Tuple[float, float]
    orientation: str
    top_margin: float = PAGE_TOP_MARGIN
    bottom_margin: float = PAGE_BOTTOM_MARGIN
    side_margin: float = PAGE_SIDE_MARGIN

    @property
    def body(self) -> SafeBox:
        page_w, page_h = self.page_size
        return SafeBox(
            left=self.side_margin,
            bottom=self.bottom_margin,
            width=page_w - 2.0 * self.side_margin,
            height=page_h - self.top_margin - self.bottom_margin,
        )

    @property
    def frame(self) -> SafeBox:
        """Body minus the platypus frame padding: the space flowables may use."""
        body = self.body
        return SafeBox(
            left=body.left + FRAME_PADDING,
            bottom=body.bottom + FRAME_PADDING,
            width=body.width - 2.0 * FRAME_PADDING,
            height=body.height - 2.0 * FRAME_PADDING,
        )


def page_setup(with_descriptions: bool) -> PageSetup:
    """Portrait when detail sections follow the table, landscape to favor table width otherwise."""
    if with_descriptions:
        return PageSetup(page_size=portrait(PAGE_SIZE), orientation="portrait")
    return PageSetup(page_size=landscape(PAGE_SIZE), orientation="landscape")
