"""
PDF Engine - ReportLab-based PDF export for finished books.

Usage:
    from omniscribe.pdf_engine import PdfRenderer

    renderer = PdfRenderer()
    rendered = renderer.render(book)
    rendered.page_count  # >= 2 * chapters + 1

Features:
- Vector text flowed directly onto the page
- DejaVu fonts with Times/Helvetica fallback
- Built-in CID fonts for Chinese and Japanese
- Classic, modern and scifi page themes
"""

from .fonts import FontManager, FontSet
from .layout import PageSpec, FlowCursor, wrap_text
from .themes import PdfTheme, PdfStyle, THEMES, BODY_SIZES, build_style
from .renderer import PdfRenderer, RenderedPdf

__all__ = [
    # Main renderer
    'PdfRenderer',
    'RenderedPdf',

    # Layout
    'PageSpec',
    'FlowCursor',
    'wrap_text',

    # Fonts and themes
    'FontManager',
    'FontSet',
    'PdfTheme',
    'PdfStyle',
    'THEMES',
    'BODY_SIZES',
    'build_style',
]
