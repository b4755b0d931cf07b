"""
Inline markup handling: stripping to plain text and conversion to HTML.
"""

import html
import re
from typing import List, Optional, Tuple

HEADING_MARKER_RE = re.compile(r'^[ \t]*#{1,6}[ \t]+', re.MULTILINE)
BOLD_RE = re.compile(r'\*\*(.*?)\*\*')
ITALIC_RE = re.compile(r'\*(.*?)\*')
CODE_RE = re.compile(r'`(.*?)`')
LINK_RE = re.compile(r'\[(.*?)\]\(.*?\)')

# Characters XML 1.0 does not allow anywhere in a document
INVALID_XML_RE = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')

# Order matters: heading marker, bold, italic, code, link
STRIP_PIPELINE: List[Tuple[re.Pattern, str]] = [
    (HEADING_MARKER_RE, ''),
    (BOLD_RE, r'\1'),
    (ITALIC_RE, r'\1'),
    (CODE_RE, r'\1'),
    (LINK_RE, r'\1'),
]

INLINE_PIPELINE = STRIP_PIPELINE[1:]


def _run_until_stable(text: str, pipeline: List[Tuple[re.Pattern, str]]) -> str:
    # Every substitution removes characters, so this terminates
    previous = None
    while text != previous:
        previous = text
        for pattern, replacement in pipeline:
            text = pattern.sub(replacement, text)
    return text


def strip_markup(text: Optional[str]) -> str:
    """
    Reduce markup-subset text to plain text.

    Heading markers, bold/italic markers and code backticks are removed;
    links keep their text and drop the target. Idempotent.
    """
    if not text:
        return ""
    return _run_until_stable(text, STRIP_PIPELINE)


def strip_inline(text: Optional[str]) -> str:
    """Like ``strip_markup`` but leaves line-leading `#` alone."""
    if not text:
        return ""
    return _run_until_stable(text, INLINE_PIPELINE)


def escape_html(text: Optional[str]) -> str:
    """
    Escape text for XML/XHTML element content and attributes.

    Control characters XML 1.0 forbids are dropped first, so the result
    always fits in a well-formed document.
    """
    if not text:
        return ""
    return html.escape(INVALID_XML_RE.sub('', text), quote=True)


def _wrap_matches(text: str, pattern: re.Pattern, tag: str, convert_inner, convert_outer) -> str:
    """
    Wrap each match of ``pattern`` in ``tag``.

    Matched text goes through ``convert_inner`` and the text between
    matches through ``convert_outer``, so every tag opened here is closed
    before the next piece starts.
    """
    parts = []
    position = 0
    for match in pattern.finditer(text):
        parts.append(convert_outer(text[position:match.start()]))
        parts.append(f"<{tag}>{convert_inner(match.group(1))}</{tag}>")
        position = match.end()
    parts.append(convert_outer(text[position:]))
    return "".join(parts)


def _italic_to_html(text: str) -> str:
    return _wrap_matches(text, ITALIC_RE, "em", escape_html, escape_html)


def _emphasis_to_html(text: str) -> str:
    # Bold claims its markers first; a `*` left unpaired inside or
    # outside a bold span stays literal
    return _wrap_matches(text, BOLD_RE, "strong", _italic_to_html, _italic_to_html)


def inline_to_html(text: Optional[str]) -> str:
    """
    Convert inline markup to XHTML.

    Code spans are cut out before emphasis is looked for, and emphasis
    markers only pair within one piece of text, so the output is always
    properly nested. Literal text is escaped piece by piece, so content
    can never inject markup.
    """
    if not text:
        return ""
    text = LINK_RE.sub(r'\1', text)
    return _wrap_matches(text, CODE_RE, "code", escape_html, _emphasis_to_html)
