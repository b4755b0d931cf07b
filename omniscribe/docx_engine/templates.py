"""
Typography for DOCX export.

The composer asks the template for a ParagraphSpec by name ("title",
"body", "quote", ...) and never hard-codes sizes itself.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from docx.shared import Pt, Cm, Inches, RGBColor, Length
from docx.enum.text import WD_ALIGN_PARAGRAPH


@dataclass
class FontSpec:
    """Font specification"""
    name: str
    size: Pt
    bold: bool = False
    italic: bool = False
    color: Optional[RGBColor] = None


@dataclass
class ParagraphSpec:
    """Paragraph style specification"""
    font: FontSpec
    alignment: WD_ALIGN_PARAGRAPH = WD_ALIGN_PARAGRAPH.JUSTIFY
    line_spacing: Optional[float] = None  # Multiple
    space_before: Pt = field(default_factory=lambda: Pt(0))
    space_after: Pt = field(default_factory=lambda: Pt(6))
    first_line_indent: Optional[Length] = None
    left_indent: Optional[Length] = None
    keep_with_next: bool = False


@dataclass
class PageSetup:
    """Page layout specification"""
    width: Length
    height: Length
    top_margin: Length
    bottom_margin: Length
    left_margin: Length
    right_margin: Length

    @classmethod
    def a4(cls) -> 'PageSetup':
        """Standard A4"""
        return cls(
            width=Cm(21), height=Cm(29.7),
            top_margin=Cm(2.5), bottom_margin=Cm(2.5),
            left_margin=Cm(2.5), right_margin=Cm(2.5)
        )


class BookDocxTemplate:
    """
    Manuscript template: Times New Roman throughout, 12pt justified body
    with a first-line indent, centered title page.
    """

    BODY_FONT = "Times New Roman"
    RULE_COLOR = RGBColor(0xAA, 0xAA, 0xAA)
    RULE_TEXT = "─" * 30

    # Width of the cover picture on the title page
    COVER_WIDTH = Inches(4)

    def __init__(self, page_setup: Optional[PageSetup] = None):
        self.page_setup = page_setup or PageSetup.a4()

    def get_page_setup(self) -> PageSetup:
        return self.page_setup

    def get_styles(self) -> Dict[str, ParagraphSpec]:
        return {
            "title": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(28), bold=True),
                alignment=WD_ALIGN_PARAGRAPH.CENTER,
                space_before=Pt(72),
                space_after=Pt(24),
            ),
            "author": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(14)),
                alignment=WD_ALIGN_PARAGRAPH.CENTER,
                space_after=Pt(12),
            ),
            "cover": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(12)),
                alignment=WD_ALIGN_PARAGRAPH.CENTER,
                space_before=Pt(24),
            ),

            # Headings keep the built-in Heading N styles, only the run font changes
            "heading_1": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(20), bold=True),
                alignment=WD_ALIGN_PARAGRAPH.LEFT,
                space_before=Pt(24),
                space_after=Pt(12),
                keep_with_next=True,
            ),
            "heading_2": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(16), bold=True),
                alignment=WD_ALIGN_PARAGRAPH.LEFT,
                space_before=Pt(18),
                space_after=Pt(8),
                keep_with_next=True,
            ),
            "heading_3": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(13), bold=True),
                alignment=WD_ALIGN_PARAGRAPH.LEFT,
                space_before=Pt(12),
                space_after=Pt(6),
                keep_with_next=True,
            ),

            "body": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(12)),
                alignment=WD_ALIGN_PARAGRAPH.JUSTIFY,
                first_line_indent=Inches(0.33),
                line_spacing=1.15,
            ),
            "quote": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(11), italic=True),
                alignment=WD_ALIGN_PARAGRAPH.LEFT,
                left_indent=Inches(0.5),
            ),
            "rule": ParagraphSpec(
                font=FontSpec(name=self.BODY_FONT, size=Pt(10), color=self.RULE_COLOR),
                alignment=WD_ALIGN_PARAGRAPH.CENTER,
                space_before=Pt(6),
                space_after=Pt(6),
            ),
        }
