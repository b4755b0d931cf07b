"""
Book Model - the read-only input of every exporter.
"""

from .models import (
    BookModel,
    BookSettings,
    BookStructure,
    BookType,
    Chapter,
    Section,
    SectionStatus,
    LayoutSettings,
    FontFamily,
    FontSize,
    Theme,
)
from .cover import CoverImage, decode_cover_image

__all__ = [
    'BookModel',
    'BookSettings',
    'BookStructure',
    'BookType',
    'Chapter',
    'Section',
    'SectionStatus',
    'LayoutSettings',
    'FontFamily',
    'FontSize',
    'Theme',
    'CoverImage',
    'decode_cover_image',
]
