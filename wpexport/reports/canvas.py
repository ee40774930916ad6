"""Fresh document canvas per render pass."""

from __future__ import annotations

from typing import Callable, List, Optional

from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Flowable, SimpleDocTemplate, Spacer
from reportlab.platypus.doctemplate import LayoutError

from .errors import LayoutOverflow, ReportExportError
from .layout import PageSetup


PageDecoration = Callable[[Canvas, PageSetup], None]


class DocumentCanvas:
    """Collects flowables for one PDF file and renders them once.

    Every batch gets its own instance, so nothing written for one batch
    can leak into the next.
    """

    def __init__(self, setup: PageSetup, title: str = ""):
        self.setup = setup
        self.title = title
        self.story: List[Flowable] = []
        self.page_count = 0
        self._rendered = False

    def add(self, *flowables: Flowable) -> None:
        self.story.extend(flowables)

    @property
    def is_empty(self) -> bool:
        return not self.story

    def render_file(self, path: str, decorate: Optional[PageDecoration] = None) -> int:
        """Build the PDF at path and return its page count."""
        if self._rendered:
            raise ReportExportError("Document canvas was already rendered.")
        self._rendered = True
        self.page_count = 0

        doc = SimpleDocTemplate(
            path,
            pagesize=self.setup.page_size,
            leftMargin=self.setup.side_margin,
            rightMargin=self.setup.side_margin,
            topMargin=self.setup.top_margin,
            bottomMargin=self.setup.bottom_margin,
            title=self.title,
        )

        def _on_page(canv: Canvas, _doc) -> None:
            self.page_count = max(self.page_count, canv.getPageNumber())
            if decorate is not None:
                decorate(canv, self.setup)

        story = list(self.story) or [Spacer(1, 1)]
        try:
            doc.build(story, onFirstPage=_on_page, onLaterPages=_on_page)
        except LayoutError as exc:
            raise LayoutOverflow(str(exc)) from exc
        return self.page_count
