"""
Filename sanitizing for exported books.

Titles are frequently Chinese or Japanese, so CJK characters are kept
as-is while everything else outside word characters and '-' becomes '_'.

Usage:
    from omniscribe.utils import output_filename
    output_filename("我的書: Vol 1", "epub")  # "我的書__Vol_1.epub"
"""

import re

MAX_FILENAME_LENGTH = 80

# ASCII word chars, CJK Unified Ideographs, Hiragana, Katakana, hyphen
_UNSAFE_RE = re.compile(r'[^A-Za-z0-9_\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff-]')

DEFAULT_STEM = "book"


def sanitize_filename(title: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Replace unsafe characters with '_' and truncate to ``max_length``.

    Never raises: ``None`` and empty strings give an empty result.
    """
    if not title:
        return ""
    return _UNSAFE_RE.sub("_", title)[:max_length]


def output_filename(title: str, ext: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Build ``{sanitized(title)}.{ext}``, using ``book`` when nothing is left."""
    stem = sanitize_filename(title, max_length) or DEFAULT_STEM
    return f"{stem}.{ext.lstrip('.')}"
