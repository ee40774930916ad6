"""Logo, header and footer drawn on every page of a render pass."""

from __future__ import annotations

from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from . import layout
from .layout import PageSetup
from .locales import format_date
from .models import ExportContext


class PageDecorator:
    """Draws page decorations; page numbers continue across batches via page_offset."""

    def __init__(
        self,
        heading: str,
        context: ExportContext,
        page_offset: int = 0,
        logo_path: Optional[str] = None,
    ):
        self.heading = heading
        self.context = context
        self.page_offset = int(page_offset)
        self.date_string = format_date(context.today, context.language)
        self._logo = ImageReader(logo_path) if logo_path else None

    def page_label(self, page_number: int) -> str:
        return str(int(page_number) + self.page_offset)

    def __call__(self, canv: Canvas, setup: PageSetup) -> None:
        canv.saveState()
        try:
            self.write_logo(canv, setup)
            self.write_header(canv, setup)
            self.write_footer(canv, setup)
        finally:
            canv.restoreState()

    def write_logo(self, canv: Canvas, setup: PageSetup) -> None:
        if self._logo is None:
            return
        iw, ih = self._logo.getSize()
        if iw <= 0 or ih <= 0:
            return
        scale = min(layout.LOGO_HEIGHT / float(ih), 1.0)
        body = setup.body
        canv.drawImage(
            self._logo,
            body.left,
            body.top + layout.PAGE_HEADER_TOP,
            width=iw * scale,
            height=ih * scale,
            mask="auto",
        )

    def write_header(self, canv: Canvas, setup: PageSetup) -> None:
        if not self.context.user_name:
            return
        body = setup.body
        canv.setFont(layout.BODY_FONT, layout.DECORATION_FONT_SIZE)
        canv.drawRightString(body.right, body.top + layout.LOGO_HEIGHT, self.context.user_name)

    def write_footer(self, canv: Canvas, setup: PageSetup) -> None:
        body = setup.body
        y = body.bottom - layout.PAGE_FOOTER_TOP
        canv.setFont(layout.BODY_FONT, layout.DECORATION_FONT_SIZE)
        canv.drawString(body.left, y, self.date_string)
        canv.drawCentredString(body.left + body.width / 2.0, y, self.page_label(canv.getPageNumber()))
        canv.drawRightString(body.right, y, self.heading)
