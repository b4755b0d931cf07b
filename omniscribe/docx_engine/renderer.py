"""
Main DOCX Renderer - Composes a Word document from a book model.
"""

import io
import logging
from typing import Optional

from docx import Document

from omniscribe.book import BookModel, Chapter, decode_cover_image
from omniscribe.export.config import ExportSettings, get_settings
from omniscribe.export.formats import ExportFormat, ExportResult
from omniscribe.i18n import resolve_language
from omniscribe.markup import parse_markup

from .style_mapper import StyleMapper, RenderContext
from .templates import BookDocxTemplate

logger = logging.getLogger(__name__)


class DocxRenderer:
    """
    Renders a book model to DOCX.

    Layout: title page (cover, title, author), then one block per
    chapter (Heading 1 chapter title, Heading 2 per written section,
    section content) each ending with a page break.

    Usage:
        renderer = DocxRenderer()
        data = renderer.render(book)

        result = renderer.export(book)
        result.save("downloads/")
    """

    def __init__(
        self,
        template: Optional[BookDocxTemplate] = None,
        settings: Optional[ExportSettings] = None
    ):
        self.template = template or BookDocxTemplate()
        self.settings = settings or get_settings()

    def export(self, book: BookModel) -> ExportResult:
        data = self.render(book)
        return ExportResult.for_book(
            ExportFormat.DOCX, book.title, data,
            max_filename_length=self.settings.filename_max_length,
        )

    def render(self, book: BookModel) -> bytes:
        """
        Render the book to DOCX bytes.

        Args:
            book: Book snapshot

        Returns:
            The Office Open XML package
        """
        docx = Document()
        style_mapper = StyleMapper(docx, self.template)

        self._setup_document(docx)
        self._set_core_properties(docx, book)

        self._render_title_page(docx, book, style_mapper)

        for index, chapter in enumerate(book.chapters):
            self._render_chapter(docx, chapter, style_mapper, index)

        buffer = io.BytesIO()
        docx.save(buffer)
        data = buffer.getvalue()

        logger.info(f"DOCX created: {len(book.chapters)} chapters, {len(data)} bytes")
        return data

    def _setup_document(self, docx: Document):
        """Configure document page setup"""
        page_setup = self.template.get_page_setup()

        for section in docx.sections:
            section.page_width = page_setup.width
            section.page_height = page_setup.height
            section.top_margin = page_setup.top_margin
            section.bottom_margin = page_setup.bottom_margin
            section.left_margin = page_setup.left_margin
            section.right_margin = page_setup.right_margin

    def _set_core_properties(self, docx: Document, book: BookModel):
        props = docx.core_properties
        props.title = book.title
        props.author = book.author or self.settings.fallback_creator
        props.comments = book.settings.topic
        props.language = resolve_language(book.settings.language, self.settings.default_language)

    def _render_title_page(
        self,
        docx: Document,
        book: BookModel,
        style_mapper: StyleMapper
    ):
        """Render the title page"""
        cover = decode_cover_image(book.cover_image)
        if cover:
            para = style_mapper.add_styled_paragraph("", 'cover')
            para.add_run().add_picture(cover.stream(), width=self.template.COVER_WIDTH)

        style_mapper.add_styled_paragraph(book.title, 'title')

        if book.author:
            style_mapper.add_styled_paragraph(book.author, 'author')

        # Page break after title
        docx.add_page_break()

    def _render_chapter(
        self,
        docx: Document,
        chapter: Chapter,
        style_mapper: StyleMapper,
        index: int
    ):
        """Render a single chapter"""
        context = RenderContext(chapter_number=index + 1, chapter_title=chapter.title)

        style_mapper.add_heading(chapter.title, 1)

        for section in chapter.written_sections():
            style_mapper.add_heading(section.title, 2)
            for node in parse_markup(section.content):
                style_mapper.render_node(node, context)

        docx.add_page_break()
        logger.debug(f"DOCX chapter {context.chapter_number} rendered: {chapter.title}")
