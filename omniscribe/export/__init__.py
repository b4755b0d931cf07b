"""
Export formats and the per-format exporters.

Usage:
    from omniscribe.export import ExportFormat, EpubExporter, build_markdown

    markdown = build_markdown(book)
    result = EpubExporter().export(book)

The async BookExporter lives in ``omniscribe.export.service`` (also
re-exported from the top-level ``omniscribe`` package).
"""

from .formats import ExportFormat, ExportResult, MIME_TYPES
from .config import ExportSettings, get_settings
from .text_exporter import build_markdown, build_plain_text, export_markdown, export_plain_text
from .epub_exporter import EpubExporter, nodes_to_html

__all__ = [
    # Formats
    'ExportFormat',
    'ExportResult',
    'MIME_TYPES',

    # Config
    'ExportSettings',
    'get_settings',

    # Text formats
    'build_markdown',
    'build_plain_text',
    'export_markdown',
    'export_plain_text',

    # EPUB
    'EpubExporter',
    'nodes_to_html',
]
