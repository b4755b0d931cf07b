"""
Markup subset parser.

Turns section content into a flat node sequence. Parsing is line-driven:

- ``#``/``##``/``###`` lines are headings; ``####`` and deeper stay text
- ``---`` or ``***`` alone on a line is a rule
- consecutive ``>`` lines form one quote
- consecutive other non-blank lines form one paragraph
- runs of blank lines collapse into one Blank

Paragraphs and quotes are block level but keep their source lines, so
the DOCX and PDF renderers can still work one line at a time.
"""

import re
from typing import List, Optional

from .nodes import Blank, Heading, Node, Paragraph, Quote, Rule

HEADING_RE = re.compile(r'^(#{1,3})[ \t]+(.*)$')
QUOTE_RE = re.compile(r'^>[ \t]?')
RULE_LINES = ("---", "***")


def classify_line(line: str) -> str:
    """Return 'blank', 'heading', 'rule', 'quote' or 'text' for one line."""
    stripped = line.strip()
    if not stripped:
        return "blank"
    if stripped in RULE_LINES:
        return "rule"
    if HEADING_RE.match(stripped):
        return "heading"
    if stripped.startswith(">"):
        return "quote"
    return "text"


def parse_markup(content: Optional[str]) -> List[Node]:
    """
    Parse section content into nodes.

    Leading and trailing blank lines are dropped. Empty or None content
    gives an empty list.
    """
    if not content:
        return []

    nodes: List[Node] = []
    pending: List[str] = []
    pending_kind: Optional[str] = None

    def flush():
        nonlocal pending, pending_kind
        if pending:
            if pending_kind == "quote":
                nodes.append(Quote(tuple(pending)))
            else:
                nodes.append(Paragraph(tuple(pending)))
        pending = []
        pending_kind = None

    for raw_line in content.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        kind = classify_line(raw_line)
        stripped = raw_line.strip()

        if kind in ("text", "quote"):
            if pending_kind != kind:
                flush()
                pending_kind = kind
            if kind == "quote":
                stripped = QUOTE_RE.sub("", stripped)
            pending.append(stripped)
            continue

        flush()
        if kind == "blank":
            if nodes and not isinstance(nodes[-1], Blank):
                nodes.append(Blank())
        elif kind == "rule":
            nodes.append(Rule())
        else:
            hashes, text = HEADING_RE.match(stripped).groups()
            nodes.append(Heading(len(hashes), text.strip()))

    flush()

    while nodes and isinstance(nodes[-1], Blank):
        nodes.pop()
    return nodes
