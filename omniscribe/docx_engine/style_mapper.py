"""
Style Mapper - Maps markup nodes to styled DOCX paragraphs.
"""

from dataclasses import dataclass
from typing import List
import logging

from docx.document import Document
from docx.text.paragraph import Paragraph
from docx.oxml.ns import qn

from omniscribe.markup import Node, NodeType, Paragraph as TextBlock, Quote, strip_inline
from .templates import BookDocxTemplate, ParagraphSpec, FontSpec

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """Context for rendering decisions"""
    chapter_number: int = 0
    chapter_title: str = ""


class StyleMapper:
    """
    Maps markup nodes to styled DOCX elements.

    Paragraph and quote nodes keep their source lines, and every line
    becomes its own DOCX paragraph.

    Usage:
        mapper = StyleMapper(document, template)
        for node in parse_markup(section.content):
            mapper.render_node(node, context)
    """

    def __init__(self, document: Document, template: BookDocxTemplate):
        self.doc = document
        self.template = template
        self.styles = template.get_styles()

    def render_node(self, node: Node, context: RenderContext) -> List[Paragraph]:
        """
        Render one markup node.

        Returns:
            The paragraphs created (empty for blank nodes)
        """
        if node.type == NodeType.HEADING:
            paragraphs = [self.add_heading(strip_inline(node.text), node.level)]
        elif node.type == NodeType.PARAGRAPH:
            paragraphs = self._render_paragraph(node)
        elif node.type == NodeType.QUOTE:
            paragraphs = self._render_quote(node)
        elif node.type == NodeType.RULE:
            paragraphs = [self._render_rule()]
        elif node.type == NodeType.BLANK:
            paragraphs = []
        else:
            logger.warning(f"Unknown node type: {node.type}")
            paragraphs = []

        return paragraphs

    def add_heading(self, text: str, level: int) -> Paragraph:
        """Add a Heading 1-3 paragraph using the built-in heading style."""
        level = max(1, min(level, 3))
        spec = self.styles.get(f"heading_{level}", self.styles['heading_1'])

        para = self.doc.add_heading(level=level)
        self._apply_paragraph_spec(para, spec)
        run = para.add_run(text)
        self._apply_font_spec(run, spec.font)
        return para

    def add_styled_paragraph(self, text: str, style_name: str) -> Paragraph:
        """Add a plain paragraph formatted by a named template style."""
        spec = self.styles.get(style_name, self.styles['body'])
        para = self.doc.add_paragraph()
        self._apply_paragraph_spec(para, spec)
        if text:
            run = para.add_run(text)
            self._apply_font_spec(run, spec.font)
        return para

    def _render_paragraph(self, node: TextBlock) -> List[Paragraph]:
        return [self.add_styled_paragraph(strip_inline(line), 'body') for line in node.lines]

    def _render_quote(self, node: Quote) -> List[Paragraph]:
        return [self.add_styled_paragraph(strip_inline(line), 'quote') for line in node.lines]

    def _render_rule(self) -> Paragraph:
        return self.add_styled_paragraph(self.template.RULE_TEXT, 'rule')

    def _apply_paragraph_spec(self, para: Paragraph, spec: ParagraphSpec):
        """Apply ParagraphSpec to a paragraph"""
        pf = para.paragraph_format

        pf.alignment = spec.alignment
        pf.space_before = spec.space_before
        pf.space_after = spec.space_after

        if spec.line_spacing:
            pf.line_spacing = spec.line_spacing

        if spec.first_line_indent is not None:
            pf.first_line_indent = spec.first_line_indent

        if spec.left_indent is not None:
            pf.left_indent = spec.left_indent

        pf.keep_with_next = spec.keep_with_next

    def _apply_font_spec(self, run, spec: FontSpec):
        """Apply FontSpec to a run"""
        run.font.name = spec.name
        run.font.size = spec.size
        run.bold = spec.bold
        run.italic = spec.italic

        if spec.color:
            run.font.color.rgb = spec.color

        # Set East Asian font for CJK support
        rPr = run._element.get_or_add_rPr()
        rFonts = rPr.get_or_add_rFonts()
        rFonts.set(qn('w:eastAsia'), spec.name)
