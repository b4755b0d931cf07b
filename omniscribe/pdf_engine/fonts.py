"""
Font management for PDF rendering.

This module handles:
- DejaVu font file discovery and registration
- Fallback to the standard PostScript fonts when DejaVu is missing
- Built-in CID fonts for Chinese and Japanese text
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, List

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from omniscribe.book import FontFamily


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSet:
    """Resolved ReportLab font names for one family"""
    regular: str
    bold: str
    italic: str


class FontManager:
    """
    Manages font registration for ReportLab.

    Handles:
    - Font file discovery across multiple paths
    - TTF font registration with ReportLab
    - Font family mapping (regular, bold, italic)
    """

    # Default search paths for fonts
    DEFAULT_SEARCH_PATHS = [
        # System paths (Linux)
        '/usr/share/fonts/truetype/dejavu/',
        '/usr/share/fonts/dejavu/',
        '/usr/share/fonts/TTF/',
        '/usr/local/share/fonts/',

        # User paths
        os.path.expanduser('~/.fonts/'),
        os.path.expanduser('~/.local/share/fonts/'),

        # macOS paths
        '/Library/Fonts/',
        os.path.expanduser('~/Library/Fonts/'),

        # Project paths
        './fonts/',
        './assets/fonts/',
    ]

    DEJAVU_FONTS = {
        'DejaVuSerif': 'DejaVuSerif.ttf',
        'DejaVuSerif-Bold': 'DejaVuSerif-Bold.ttf',
        'DejaVuSerif-Italic': 'DejaVuSerif-Italic.ttf',
        'DejaVuSans': 'DejaVuSans.ttf',
        'DejaVuSans-Bold': 'DejaVuSans-Bold.ttf',
        'DejaVuSans-Oblique': 'DejaVuSans-Oblique.ttf',
    }

    # Standard fonts are always available in ReportLab
    FALLBACK_FONTS = {
        'DejaVuSerif': 'Times-Roman',
        'DejaVuSerif-Bold': 'Times-Bold',
        'DejaVuSerif-Italic': 'Times-Italic',
        'DejaVuSans': 'Helvetica',
        'DejaVuSans-Bold': 'Helvetica-Bold',
        'DejaVuSans-Oblique': 'Helvetica-Oblique',
    }

    FAMILIES = {
        FontFamily.SERIF: ('DejaVuSerif', 'DejaVuSerif-Bold', 'DejaVuSerif-Italic'),
        FontFamily.SANS: ('DejaVuSans', 'DejaVuSans-Bold', 'DejaVuSans-Oblique'),
        # No rounded face ships with ReportLab or DejaVu
        FontFamily.ROUND: ('DejaVuSans', 'DejaVuSans-Bold', 'DejaVuSans-Oblique'),
    }

    # CID fonts bundled with ReportLab (no bold or italic faces)
    CJK_FONTS = {
        'zh': 'STSong-Light',
        'ja': 'HeiseiMin-W3',
    }

    def __init__(self, additional_paths: Optional[List[str]] = None):
        """
        Initialize FontManager.

        Args:
            additional_paths: Extra paths to search for fonts
        """
        self.search_paths = list(additional_paths or []) + list(self.DEFAULT_SEARCH_PATHS)

        self._registered_fonts: Dict[str, str] = {}
        self._font_cache: Dict[str, str] = {}
        self._missing: set = set()

    def find_font_file(self, filename: str) -> Optional[str]:
        """
        Find a font file in search paths.

        Args:
            filename: Font filename (e.g., 'DejaVuSerif.ttf')

        Returns:
            Full path to font file, or None if not found
        """
        if filename in self._font_cache:
            return self._font_cache[filename]

        for search_path in self.search_paths:
            path = Path(search_path) / filename
            if path.exists():
                self._font_cache[filename] = str(path)
                return str(path)

        return None

    def register_font(self, font_name: str, font_file: str) -> bool:
        """
        Register a single font with ReportLab.

        Returns:
            True if registration successful
        """
        if font_name in self._registered_fonts:
            return True
        if font_name in self._missing:
            return False

        font_path = self.find_font_file(font_file)
        if not font_path:
            logger.warning(f"Font file not found: {font_file}, using fallback")
            self._missing.add(font_name)
            return False

        try:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
        except (TTFError, OSError) as e:
            logger.warning(f"Failed to register font {font_name}: {e}")
            self._missing.add(font_name)
            return False

        self._registered_fonts[font_name] = font_path
        logger.debug(f"Registered font: {font_name} from {font_path}")
        return True

    def get_font_name(self, requested_name: str) -> str:
        """Get actual font name (fallback if the DejaVu file was not registered)."""
        font_file = self.DEJAVU_FONTS.get(requested_name)
        if font_file and self.register_font(requested_name, font_file):
            return requested_name
        return self.FALLBACK_FONTS.get(requested_name, requested_name)

    def get_font_set(self, family: FontFamily, lang: Optional[str] = None) -> FontSet:
        """
        Resolve the fonts for a layout font family.

        Chinese and Japanese books use the matching CID font for every
        variant, since the Latin faces carry no CJK glyphs.
        """
        if lang in self.CJK_FONTS:
            cid_name = self.register_cid_font(self.CJK_FONTS[lang])
            return FontSet(regular=cid_name, bold=cid_name, italic=cid_name)

        regular, bold, italic = self.FAMILIES.get(family, self.FAMILIES[FontFamily.SERIF])
        return FontSet(
            regular=self.get_font_name(regular),
            bold=self.get_font_name(bold),
            italic=self.get_font_name(italic),
        )

    def register_cid_font(self, cid_name: str) -> str:
        if cid_name not in self._registered_fonts:
            pdfmetrics.registerFont(UnicodeCIDFont(cid_name))
            self._registered_fonts[cid_name] = "cid"
            logger.debug(f"Registered CID font: {cid_name}")
        return cid_name
