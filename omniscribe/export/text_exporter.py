"""
Markdown and plain-text exporters.

Both are straight string builds over the book model: Markdown passes
section content through untouched, plain text strips the markup.
"""

import logging
from typing import List

from omniscribe.book.models import BookModel
from omniscribe.i18n import AUTHOR_LABEL
from omniscribe.markup import strip_markup

from .formats import ExportFormat, ExportResult

logger = logging.getLogger(__name__)

CHAPTER_RULE = "─" * 40


def build_markdown(book: BookModel) -> str:
    """Render the book as Markdown."""
    parts: List[str] = [f"# {book.title}\n\n"]

    if book.author:
        parts.append(f"**{book.author}**\n\n---\n\n")

    for chapter in book.chapters:
        parts.append(f"## {chapter.title}\n\n")
        for section in chapter.written_sections():
            parts.append(f"### {section.title}\n\n{section.content}\n\n")

    return "".join(parts)


def build_plain_text(book: BookModel) -> str:
    """Render the book as plain text with ruled chapter headers."""
    title = book.title
    parts: List[str] = [f"{title}\n{'=' * len(title)}\n\n"]

    if book.author:
        parts.append(f"{AUTHOR_LABEL}: {book.author}\n\n")

    for chapter in book.chapters:
        parts.append(f"\n{CHAPTER_RULE}\n{chapter.title}\n{CHAPTER_RULE}\n\n")
        for section in chapter.written_sections():
            parts.append(f"{section.title}\n\n{strip_markup(section.content)}\n\n")

    return "".join(parts)


def export_markdown(book: BookModel, max_filename_length: int = 80) -> ExportResult:
    data = build_markdown(book).encode("utf-8")
    logger.info(f"Markdown export built: {len(data)} bytes")
    return ExportResult.for_book(
        ExportFormat.MARKDOWN, book.title, data, max_filename_length=max_filename_length
    )


def export_plain_text(book: BookModel, max_filename_length: int = 80) -> ExportResult:
    data = build_plain_text(book).encode("utf-8")
    logger.info(f"Plain-text export built: {len(data)} bytes")
    return ExportResult.for_book(
        ExportFormat.TXT, book.title, data, max_filename_length=max_filename_length
    )
