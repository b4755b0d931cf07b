"""
Page geometry, line wrapping and the flow cursor for PDF export.

Text is flowed straight onto a ReportLab canvas. Every paragraph is
wrapped to physical lines first; the cursor then places one line at a
time and starts a new page when the next line would cross the bottom
margin. A line is never split across two pages.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

logger = logging.getLogger(__name__)


@dataclass
class PageSpec:
    """Page layout specification (points)"""
    width: float
    height: float
    top_margin: float
    right_margin: float
    bottom_margin: float
    left_margin: float

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def content_width(self) -> float:
        return self.width - self.left_margin - self.right_margin

    @property
    def content_top(self) -> float:
        return self.height - self.top_margin

    @classmethod
    def a4(cls) -> 'PageSpec':
        """A4 with 25mm side margins and 30mm top and bottom margins"""
        return cls(
            width=A4[0], height=A4[1],
            top_margin=30 * mm, right_margin=25 * mm,
            bottom_margin=30 * mm, left_margin=25 * mm
        )


def _break_word(word: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Split a run with no spaces (long URLs, CJK text) by character."""
    pieces = []
    chunk = ""
    for char in word:
        candidate = chunk + char
        if chunk and stringWidth(candidate, font_name, font_size) > max_width:
            pieces.append(chunk)
            chunk = char
        else:
            chunk = candidate
    if chunk:
        pieces.append(chunk)
    return pieces


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Wrap text to physical lines no wider than max_width.

    Breaks at spaces first and falls back to character breaks for words
    that do not fit on a line by themselves. Runs of whitespace collapse
    to one space. Empty text gives no lines.

    Examples:
        wrap_text("a long sentence", "Helvetica", 12, 60)
        -> ["a long", "sentence"]
    """
    lines: List[str] = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if stringWidth(candidate, font_name, font_size) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if stringWidth(word, font_name, font_size) <= max_width:
            current = word
        else:
            pieces = _break_word(word, font_name, font_size, max_width)
            lines.extend(pieces[:-1])
            current = pieces[-1]

    if current:
        lines.append(current)
    return lines


class FlowCursor:
    """
    Tracks the vertical position on the current page and the page count.

    Pages are opened with ``start_page`` and closed with ``finish_page``;
    ``page_count`` counts closed pages.

    Usage:
        cursor = FlowCursor(canvas, PageSpec.a4(), background, text_color)
        cursor.start_page()
        cursor.draw_line("Hello", "Helvetica", 12, leading=18)
        cursor.finish_page()
    """

    def __init__(
        self,
        canvas: Canvas,
        page: PageSpec,
        background: Color,
        text_color: Color,
        footer_font: Optional[Tuple[str, float]] = None,
    ):
        self.canvas = canvas
        self.page = page
        self.background = background
        self.text_color = text_color
        self.footer_font = footer_font

        self.y = page.content_top
        self.page_count = 0
        self._page_open = False
        self._numbered = False

    @property
    def page_number(self) -> int:
        """1-based number of the page being drawn"""
        return self.page_count + 1

    @property
    def at_page_top(self) -> bool:
        return self.y >= self.page.content_top

    def start_page(self, numbered: bool = True):
        """Close the open page (if any) and start a fresh one."""
        if self._page_open:
            self.finish_page()

        self.canvas.setFillColor(self.background)
        self.canvas.rect(0, 0, self.page.width, self.page.height, stroke=0, fill=1)
        self.canvas.setFillColor(self.text_color)

        self.y = self.page.content_top
        self._page_open = True
        self._numbered = numbered

    def finish_page(self):
        if not self._page_open:
            return

        if self._numbered and self.footer_font:
            font_name, font_size = self.footer_font
            self.canvas.setFont(font_name, font_size)
            self.canvas.setFillColor(self.text_color)
            self.canvas.drawCentredString(
                self.page.width / 2, self.page.bottom_margin / 2, str(self.page_number)
            )

        self.canvas.showPage()
        self.page_count += 1
        self._page_open = False

    def fits(self, height: float) -> bool:
        return self.y - height >= self.page.bottom_margin

    def ensure_room(self, height: float):
        """Continue on a new numbered page if ``height`` does not fit."""
        if not self.fits(height) and not self.at_page_top:
            logger.debug(f"Page {self.page_number} full, continuing on next page")
            self.start_page(numbered=True)

    def advance(self, gap: float):
        self.y -= gap

    def move_to(self, y: float):
        self.y = y

    def draw_line(
        self,
        text: str,
        font_name: str,
        font_size: float,
        leading: float,
        align: str = "left",
        indent: float = 0,
        color: Optional[Color] = None,
    ) -> float:
        """
        Draw one physical line and move below it.

        Returns:
            The baseline the line was drawn on
        """
        self.ensure_room(leading)

        baseline = self.y - font_size
        self.canvas.setFont(font_name, font_size)
        self.canvas.setFillColor(color or self.text_color)

        if align == "center":
            self.canvas.drawCentredString(self.page.width / 2, baseline, text)
        else:
            self.canvas.drawString(self.page.left_margin + indent, baseline, text)

        self.y -= leading
        return baseline

    def draw_rule(self, width: float, leading: float, color: Color):
        """Centered horizontal rule occupying one line."""
        self.ensure_room(leading)

        y = self.y - leading / 2
        x = (self.page.width - width) / 2
        self.canvas.setStrokeColor(color)
        self.canvas.setLineWidth(0.5)
        self.canvas.line(x, y, x + width, y)

        self.y -= leading
