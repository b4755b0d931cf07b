"""
Internationalization (i18n) for exporter labels.

Book languages arrive as free text from the setup form ("Traditional
Chinese", "中文", "日本語", "Spanish"...), so the language is resolved by
substring match to one of zh, ja, es, en. English is the fallback.

Usage:
    from omniscribe.i18n import resolve_language, get_string, format_chapter_label
    lang = resolve_language("Traditional Chinese (繁體中文)")  # "zh"
    get_string("table_of_contents", lang)  # "目錄"
    format_chapter_label(0, lang)  # "第 1 章"
"""

from typing import Optional

# Checked in order; the first matching needle wins
LANGUAGE_NEEDLES = (
    ("zh", ("chinese", "中文")),
    ("ja", ("japanese", "日")),
    ("es", ("spanish", "español", "西班牙")),
    ("en", ("english", "英文")),
)

STRINGS = {
    "table_of_contents": {
        "en": "Table of Contents",
        "zh": "目錄",
        "ja": "目次",
        "es": "Índice",
    },
    "title_page": {
        "en": "Title",
        "zh": "書名頁",
        "ja": "扉",
        "es": "Portada",
    },
    "page": {
        "en": "Page",
        "zh": "頁",
        "ja": "ページ",
        "es": "Página",
    },
}

# Plain-text author line is always bilingual
AUTHOR_LABEL = "作者 / Author"


def resolve_language(language: Optional[str], default: Optional[str] = None) -> Optional[str]:
    """
    Map a free-text language name to a short code.

    Returns ``default`` when nothing matches.
    """
    lang = (language or "").lower()
    for code, needles in LANGUAGE_NEEDLES:
        if any(needle in lang for needle in needles):
            return code
    return default


def get_string(string_id: str, lang: Optional[str] = "en") -> str:
    """
    Get a localized string by ID and language code.

    Falls back to English, then to the string_id itself.
    """
    table = STRINGS.get(string_id)
    if not table:
        return string_id
    return table.get(lang or "en", table["en"])


def format_chapter_label(index: int, lang: Optional[str] = "en") -> str:
    """
    Label for the chapter at zero-based ``index``.

    Examples:
        format_chapter_label(2, "en") -> "Chapter 3"
        format_chapter_label(2, "zh") -> "第 3 章"
        format_chapter_label(2, "ja") -> "第3章"
        format_chapter_label(2, "es") -> "Capítulo 3"
    """
    number = index + 1
    if lang == "zh":
        return f"第 {number} 章"
    if lang == "ja":
        return f"第{number}章"
    if lang == "es":
        return f"Capítulo {number}"
    return f"Chapter {number}"
