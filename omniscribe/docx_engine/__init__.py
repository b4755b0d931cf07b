"""
DOCX Engine - Word export for finished books.

Usage:
    from omniscribe.docx_engine import DocxRenderer

    renderer = DocxRenderer()
    result = renderer.export(book)
    result.save("downloads/")
"""

from .templates import FontSpec, ParagraphSpec, PageSetup, BookDocxTemplate
from .style_mapper import StyleMapper, RenderContext
from .renderer import DocxRenderer

__all__ = [
    # Main renderer
    'DocxRenderer',

    # Templates
    'BookDocxTemplate',
    'FontSpec',
    'ParagraphSpec',
    'PageSetup',

    # Styling
    'StyleMapper',
    'RenderContext',
]
