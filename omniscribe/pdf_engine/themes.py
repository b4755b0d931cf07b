"""
Page themes and type sizes for PDF export.

A PdfStyle is everything the renderer needs to know about how the book
should look, built from the book's layout settings.
"""

from dataclasses import dataclass
from typing import Optional

from reportlab.lib.colors import Color, HexColor

from omniscribe.book import FontSize, LayoutSettings, Theme

from .fonts import FontManager, FontSet


@dataclass(frozen=True)
class PdfTheme:
    """Page colours"""
    background: Color
    text: Color
    muted: Color


THEMES = {
    Theme.CLASSIC: PdfTheme(
        background=HexColor('#fdfbf7'),
        text=HexColor('#2d2a2e'),
        muted=HexColor('#78716c'),
    ),
    Theme.MODERN: PdfTheme(
        background=HexColor('#ffffff'),
        text=HexColor('#0f172a'),
        muted=HexColor('#64748b'),
    ),
    Theme.SCIFI: PdfTheme(
        background=HexColor('#0f172a'),
        text=HexColor('#e2e8f0'),
        muted=HexColor('#94a3b8'),
    ),
}

# Body size in points
BODY_SIZES = {
    FontSize.SMALL: 10.0,
    FontSize.MEDIUM: 11.5,
    FontSize.LARGE: 13.0,
}

LEADING_RATIO = 1.6


@dataclass(frozen=True)
class PdfStyle:
    """Resolved fonts, sizes and colours for one render"""
    fonts: FontSet
    theme: PdfTheme
    body_size: float

    @property
    def leading(self) -> float:
        """Fixed line height for body text"""
        return round(self.body_size * LEADING_RATIO, 2)

    @property
    def title_size(self) -> float:
        return self.body_size * 2.6

    @property
    def chapter_title_size(self) -> float:
        return self.body_size * 2.2

    @property
    def section_title_size(self) -> float:
        return self.body_size * 1.4

    @property
    def label_size(self) -> float:
        return self.body_size * 1.1

    @property
    def footer_size(self) -> float:
        return self.body_size * 0.8

    def heading_size(self, level: int) -> float:
        """Size of an in-content heading line (levels 1-3)."""
        return self.body_size * {1: 1.5, 2: 1.3, 3: 1.15}.get(level, 1.15)


def build_style(layout: LayoutSettings, font_manager: FontManager, lang: Optional[str] = None) -> PdfStyle:
    """Resolve a book's layout settings to a PdfStyle."""
    return PdfStyle(
        fonts=font_manager.get_font_set(layout.font_family, lang),
        theme=THEMES.get(layout.theme, THEMES[Theme.CLASSIC]),
        body_size=BODY_SIZES.get(layout.font_size, BODY_SIZES[FontSize.MEDIUM]),
    )
