"""
Export service - one entry point for every export format.

Usage:
    exporter = BookExporter()

    # Synchronous
    result = exporter.render(ExportFormat.PDF, book)

    # From async code (binary formats run in a worker thread)
    result = await exporter.export(ExportFormat.EPUB, book)
    path = await exporter.export_to_file(ExportFormat.DOCX, book, "downloads/")
"""

import asyncio
import functools
import logging
from pathlib import Path
from typing import Optional, Union

from omniscribe.book import BookModel
from omniscribe.docx_engine import DocxRenderer
from omniscribe.exceptions import (
    ExportError, ExportInProgressError, InvalidBookError, SerializationError
)
from omniscribe.pdf_engine import PdfRenderer

from .config import ExportSettings, get_settings
from .epub_exporter import EpubExporter
from .formats import ExportFormat, ExportResult
from .text_exporter import export_markdown, export_plain_text

logger = logging.getLogger(__name__)


class BookExporter:
    """
    Dispatches a book to the exporter for the requested format.

    One export runs at a time per instance; a second request made while
    one is in flight is rejected with ExportInProgressError.
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or get_settings()
        self.epub_exporter = EpubExporter(self.settings)
        self.docx_renderer = DocxRenderer(settings=self.settings)
        self.pdf_renderer = PdfRenderer(settings=self.settings)
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """True while an export is running"""
        return self._lock.locked()

    def render(self, fmt: ExportFormat, book: BookModel) -> ExportResult:
        """
        Export the book synchronously.

        Raises:
            InvalidBookError: The book has no title
            SerializationError: The format's writer failed
        """
        if not book.settings.title.strip():
            raise InvalidBookError("Book has no title")

        try:
            result = self._dispatch(fmt, book)
        except ExportError:
            raise
        except Exception as e:
            logger.error(f"{fmt.name} export failed: {e}")
            raise SerializationError(fmt.name, str(e)) from e

        logger.info(
            f"Exported {fmt.name}: {result.filename} ({result.size} bytes"
            + (f", {result.page_count} pages)" if result.page_count is not None else ")")
        )
        return result

    def _dispatch(self, fmt: ExportFormat, book: BookModel) -> ExportResult:
        max_length = self.settings.filename_max_length

        if fmt == ExportFormat.MARKDOWN:
            return export_markdown(book, max_filename_length=max_length)
        if fmt == ExportFormat.TXT:
            return export_plain_text(book, max_filename_length=max_length)
        if fmt == ExportFormat.EPUB:
            return self.epub_exporter.export(book)
        if fmt == ExportFormat.DOCX:
            return self.docx_renderer.export(book)
        if fmt == ExportFormat.PDF:
            return self.pdf_renderer.export(book)
        raise ValueError(f"Unsupported export format: {fmt}")

    async def export(self, fmt: ExportFormat, book: BookModel) -> ExportResult:
        """
        Export the book without blocking the event loop.

        The book is snapshotted before any work starts, so later edits to
        the caller's model do not leak into the output.

        Raises:
            ExportInProgressError: Another export is still running
            SerializationError: The format's writer failed
        """
        if self._lock.locked():
            raise ExportInProgressError("An export is already in progress")

        async with self._lock:
            snapshot = book.snapshot()
            if not fmt.is_binary:
                return self.render(fmt, snapshot)

            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, functools.partial(self.render, fmt, snapshot))

    async def export_to_file(
        self,
        fmt: ExportFormat,
        book: BookModel,
        directory: Union[str, Path]
    ) -> Path:
        """Export and write ``{title}.{ext}`` into ``directory``."""
        result = await self.export(fmt, book)
        return result.save(directory)
