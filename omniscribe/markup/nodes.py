"""
Node types produced by the markup parser.

Every exporter walks the same node sequence; none re-parses raw content.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class NodeType(Enum):
    """Markup block types"""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    QUOTE = "quote"
    RULE = "rule"
    BLANK = "blank"


@dataclass(frozen=True)
class Heading:
    """A `#`, `##` or `###` line"""
    level: int
    text: str

    type = NodeType.HEADING


@dataclass(frozen=True)
class Paragraph:
    """Consecutive non-blank text lines"""
    lines: Tuple[str, ...]

    type = NodeType.PARAGRAPH

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class Quote:
    """Consecutive `>` lines, markers removed"""
    lines: Tuple[str, ...]

    type = NodeType.QUOTE

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class Rule:
    """A `---` or `***` line"""

    type = NodeType.RULE


@dataclass(frozen=True)
class Blank:
    """One or more blank lines between blocks"""

    type = NodeType.BLANK


Node = Union[Heading, Paragraph, Quote, Rule, Blank]
