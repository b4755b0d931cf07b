"""
PDF Renderer using ReportLab.

Flows the book straight onto a canvas as vector text:

    title page -> table of contents -> per chapter (title page, content
    pages) -> back cover

Every chapter starts on a fresh page, so a book with N chapters has at
least 2N + 1 pages.
"""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from omniscribe.book import BookModel, Chapter, CoverImage, Section, decode_cover_image
from omniscribe.export.config import ExportSettings, get_settings
from omniscribe.export.formats import ExportFormat, ExportResult
from omniscribe.i18n import format_chapter_label, get_string, resolve_language
from omniscribe.markup import Node, NodeType, parse_markup, strip_markup

from .fonts import FontManager
from .layout import FlowCursor, PageSpec, wrap_text
from .themes import PdfStyle, build_style

logger = logging.getLogger(__name__)

QUOTE_INDENT = 18  # points
MIN_COVER_HEIGHT = 72  # points; below this the cover is left off the title page


@dataclass
class RenderedPdf:
    """PDF bytes plus the number of pages written"""
    data: bytes
    page_count: int


class PdfRenderer:
    """
    Renders a book model to PDF.

    Layout settings pick the font family (serif, sans, round), the body
    size (small, medium, large) and the page colours (classic, modern,
    scifi). Chinese and Japanese books switch to ReportLab's built-in
    CID fonts.

    Usage:
        renderer = PdfRenderer()
        rendered = renderer.render(book)
        print(rendered.page_count)

        result = renderer.export(book)
        result.save("downloads/")
    """

    def __init__(
        self,
        page_spec: Optional[PageSpec] = None,
        settings: Optional[ExportSettings] = None,
        font_manager: Optional[FontManager] = None
    ):
        self.page_spec = page_spec or PageSpec.a4()
        self.settings = settings or get_settings()
        self.font_manager = font_manager or FontManager(self.settings.font_search_paths)

    def export(self, book: BookModel) -> ExportResult:
        rendered = self.render(book)
        return ExportResult.for_book(
            ExportFormat.PDF, book.title, rendered.data,
            page_count=rendered.page_count,
            max_filename_length=self.settings.filename_max_length,
        )

    def render(self, book: BookModel) -> RenderedPdf:
        """
        Render the book to PDF bytes.

        Args:
            book: Book snapshot

        Returns:
            RenderedPdf with the document bytes and its page count
        """
        lang = resolve_language(book.settings.language, "en")
        style = build_style(book.layout_settings, self.font_manager, self._font_language(book, lang))

        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=self.page_spec.size)
        canvas.setTitle(book.title)
        canvas.setAuthor(book.author or self.settings.fallback_creator)
        canvas.setSubject(book.settings.topic)
        canvas.setCreator(self.settings.fallback_creator)

        footer_font = (style.fonts.regular, style.footer_size) if self.settings.pdf_page_numbers else None
        cursor = FlowCursor(
            canvas, self.page_spec,
            background=style.theme.background,
            text_color=style.theme.text,
            footer_font=footer_font,
        )

        self._render_title_page(cursor, book, style)

        if self.settings.pdf_include_toc and book.chapters:
            self._render_toc(cursor, book, style, lang)

        for index, chapter in enumerate(book.chapters):
            self._render_chapter(cursor, chapter, index, style, lang)

        if self.settings.pdf_include_back_cover and (book.settings.topic.strip() or book.author):
            self._render_back_cover(cursor, book, style)

        canvas.save()
        data = buffer.getvalue()

        logger.info(f"PDF created: {cursor.page_count} pages, {len(data)} bytes")
        return RenderedPdf(data=data, page_count=cursor.page_count)

    def _font_language(self, book: BookModel, lang: str) -> Optional[str]:
        """Language whose CID font is needed, if any."""
        if lang in FontManager.CJK_FONTS:
            return lang
        if book.has_cjk():
            return "zh"
        return None

    # ========== Pages ==========

    def _render_title_page(self, cursor: FlowCursor, book: BookModel, style: PdfStyle):
        page = self.page_spec
        cursor.start_page(numbered=False)
        cursor.move_to(page.height - page.height / 3)

        title_leading = style.title_size * 1.3
        self._draw_wrapped(
            cursor, book.title, style.fonts.bold, style.title_size, title_leading, align="center"
        )

        topic = book.settings.topic.strip()
        if topic:
            cursor.advance(style.leading)
            self._draw_wrapped(
                cursor, topic, style.fonts.italic, style.label_size, style.leading,
                align="center", color=style.theme.muted,
            )

        if book.author:
            cursor.advance(style.leading)
            self._draw_wrapped(
                cursor, book.author, style.fonts.bold, style.label_size, style.leading, align="center"
            )

        cover = decode_cover_image(book.cover_image)
        if cover:
            self._draw_cover(cursor, cover, style)

        cursor.finish_page()

    def _draw_cover(self, cursor: FlowCursor, cover: CoverImage, style: PdfStyle):
        """Fit the cover into the space left below the title block."""
        page = self.page_spec
        cursor.advance(style.leading * 2)

        max_height = cursor.y - page.bottom_margin
        max_width = page.content_width * 0.6
        if max_height < MIN_COVER_HEIGHT:
            logger.warning("No room for the cover image on the title page, skipping")
            return

        width = max_width
        height = width * cover.aspect_ratio
        if height > max_height:
            height = max_height
            width = height / cover.aspect_ratio

        x = (page.width - width) / 2
        cursor.canvas.drawImage(
            ImageReader(cover.stream()), x, cursor.y - height, width=width, height=height
        )
        cursor.advance(height)

    def _render_toc(self, cursor: FlowCursor, book: BookModel, style: PdfStyle, lang: str):
        cursor.start_page(numbered=False)

        heading_leading = style.chapter_title_size * 1.4
        cursor.draw_line(
            get_string("table_of_contents", lang),
            style.fonts.bold, style.chapter_title_size, heading_leading,
        )
        cursor.advance(style.leading)

        label_width = self.page_spec.content_width * 0.25
        title_width = self.page_spec.content_width - label_width
        for index, chapter in enumerate(book.chapters):
            lines = wrap_text(chapter.title, style.fonts.regular, style.label_size, title_width) or [""]
            for line_index, line in enumerate(lines):
                baseline = cursor.draw_line(line, style.fonts.regular, style.label_size, style.leading)
                if line_index == 0:
                    cursor.canvas.setFont(style.fonts.regular, style.body_size)
                    cursor.canvas.setFillColor(style.theme.muted)
                    cursor.canvas.drawRightString(
                        self.page_spec.width - self.page_spec.right_margin,
                        baseline,
                        format_chapter_label(index, lang),
                    )
            cursor.advance(style.leading * 0.4)

        cursor.finish_page()

    def _render_chapter(
        self,
        cursor: FlowCursor,
        chapter: Chapter,
        index: int,
        style: PdfStyle,
        lang: str
    ):
        page = self.page_spec

        # Chapter title page
        cursor.start_page(numbered=False)
        cursor.move_to(page.height - page.height / 3)
        cursor.draw_line(
            format_chapter_label(index, lang), style.fonts.regular, style.label_size,
            style.leading * 1.5, align="center", color=style.theme.muted,
        )
        self._draw_wrapped(
            cursor, chapter.title, style.fonts.bold, style.chapter_title_size,
            style.chapter_title_size * 1.3, align="center",
        )

        # Content, always at least one page
        cursor.start_page(numbered=True)
        for section in chapter.written_sections():
            self._render_section(cursor, section, style)
        cursor.finish_page()

        logger.debug(f"PDF chapter {index + 1} rendered, now at {cursor.page_count} pages")

    def _render_section(self, cursor: FlowCursor, section: Section, style: PdfStyle):
        if not cursor.at_page_top:
            cursor.advance(style.leading * 0.5)

        self._draw_wrapped(
            cursor, section.title, style.fonts.bold, style.section_title_size,
            style.section_title_size * 1.4,
        )
        cursor.advance(style.leading * 0.4)

        for node in parse_markup(section.content):
            self._render_node(cursor, node, style)

        # Gap after each section
        cursor.advance(style.leading)

    def _render_node(self, cursor: FlowCursor, node: Node, style: PdfStyle):
        width = self.page_spec.content_width

        if node.type == NodeType.HEADING:
            size = style.heading_size(node.level)
            cursor.advance(style.leading * 0.3)
            self._draw_wrapped(cursor, strip_markup(node.text), style.fonts.bold, size, size * 1.4)
        elif node.type == NodeType.PARAGRAPH:
            for line in node.lines:
                self._draw_wrapped(
                    cursor, strip_markup(line), style.fonts.regular, style.body_size, style.leading
                )
        elif node.type == NodeType.QUOTE:
            for line in node.lines:
                wrapped = wrap_text(
                    strip_markup(line), style.fonts.italic, style.body_size, width - QUOTE_INDENT
                )
                for physical in wrapped:
                    cursor.draw_line(
                        physical, style.fonts.italic, style.body_size, style.leading,
                        indent=QUOTE_INDENT, color=style.theme.muted,
                    )
        elif node.type == NodeType.RULE:
            cursor.draw_rule(width / 4, style.leading, style.theme.muted)
        elif node.type == NodeType.BLANK:
            cursor.advance(style.leading * 0.5)

    def _render_back_cover(self, cursor: FlowCursor, book: BookModel, style: PdfStyle):
        page = self.page_spec
        cursor.start_page(numbered=False)
        cursor.move_to(page.height / 2 + style.leading * 2)

        topic = book.settings.topic.strip()
        if topic:
            self._draw_wrapped(
                cursor, f"“{topic}”", style.fonts.italic, style.label_size,
                style.leading, align="center",
            )
            cursor.advance(style.leading)

        if book.author:
            self._draw_wrapped(
                cursor, book.author, style.fonts.bold, style.label_size, style.leading,
                align="center", color=style.theme.muted,
            )

        cursor.finish_page()

    # ========== Helpers ==========

    def _draw_wrapped(
        self,
        cursor: FlowCursor,
        text: str,
        font_name: str,
        font_size: float,
        leading: float,
        align: str = "left",
        color=None,
    ) -> List[str]:
        """Wrap text to the content width and draw it line by line."""
        lines = wrap_text(text, font_name, font_size, self.page_spec.content_width)
        for line in lines:
            cursor.draw_line(line, font_name, font_size, leading, align=align, color=color)
        return lines
