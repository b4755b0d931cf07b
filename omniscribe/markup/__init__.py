"""
Markup subset handling shared by all exporters.

Usage:
    from omniscribe.markup import parse_markup, strip_markup

    nodes = parse_markup("# Intro\\n\\nSome **bold** text.")
    plain = strip_markup("Some **bold** text.")  # "Some bold text."
"""

from .nodes import NodeType, Node, Heading, Paragraph, Quote, Rule, Blank
from .parser import parse_markup, classify_line
from .inline import strip_markup, strip_inline, escape_html, inline_to_html

__all__ = [
    # Nodes
    'NodeType',
    'Node',
    'Heading',
    'Paragraph',
    'Quote',
    'Rule',
    'Blank',

    # Parsing
    'parse_markup',
    'classify_line',

    # Inline
    'strip_markup',
    'strip_inline',
    'escape_html',
    'inline_to_html',
]
