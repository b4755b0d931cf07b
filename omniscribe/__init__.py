"""
OmniScribe export - turns a finished book project into Markdown, plain
text, EPUB, DOCX or PDF.

Usage:
    from omniscribe import BookExporter, BookModel, ExportFormat

    book = BookModel.from_file("project.json")
    result = BookExporter().render(ExportFormat.EPUB, book)
    result.save("downloads/")
"""

from .book import BookModel
from .exceptions import ExportError, InvalidBookError, SerializationError, ExportInProgressError
from .export.formats import ExportFormat, ExportResult
from .export.service import BookExporter

__version__ = "1.0.0"

__all__ = [
    'BookExporter',
    'BookModel',
    'ExportFormat',
    'ExportResult',

    # Errors
    'ExportError',
    'InvalidBookError',
    'SerializationError',
    'ExportInProgressError',
]
