"""
Book Model

Read-only snapshot of a drafted book as handed over by the project store.
Field names follow Python conventions; the store's camelCase JSON keys
are accepted as aliases so a saved project loads without translation.
"""

import json
import re
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from omniscribe.exceptions import InvalidBookError

_CJK_RE = re.compile(r'[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]')


class BookType(str, Enum):
    NOVEL = "novel"
    NON_FICTION = "non-fiction"
    TEXTBOOK = "textbook"
    BIOGRAPHY = "biography"
    ANTHOLOGY = "anthology"


class SectionStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"


class FontFamily(str, Enum):
    SERIF = "serif"
    SANS = "sans"
    ROUND = "round"


class FontSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Theme(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    SCIFI = "scifi"


class _StoreModel(BaseModel):
    """Base for models loaded from the project store JSON."""

    class Config:
        populate_by_name = True
        extra = "ignore"


class BookSettings(_StoreModel):
    title: str = Field(..., min_length=1)
    author_name: str = Field("", alias="authorName")
    topic: str = ""
    language: str = ""
    book_type: BookType = Field(BookType.NON_FICTION, alias="bookType")
    tone_and_style: str = Field("", alias="toneAndStyle")
    target_audience: str = Field("", alias="targetAudience")
    must_include: str = Field("", alias="mustInclude")
    word_count_target: str = Field("", alias="wordCountTarget")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("author_name", "topic", "language", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("word_count_target", mode="before")
    @classmethod
    def word_count_as_text(cls, value):
        # The setup form stores this as free text ("50000", "about 80k")
        return "" if value is None else str(value)


class Section(_StoreModel):
    id: str
    title: str
    description: str = ""
    content: Optional[str] = None
    status: SectionStatus = SectionStatus.PENDING
    word_count: int = Field(0, ge=0, alias="wordCount")

    @property
    def has_content(self) -> bool:
        """Whether the section has anything to export."""
        return bool(self.content and self.content.strip())


class Chapter(_StoreModel):
    id: str
    title: str
    sections: List[Section] = Field(default_factory=list)

    def written_sections(self) -> List[Section]:
        """Sections with content, in outline order."""
        return [s for s in self.sections if s.has_content]


class BookStructure(_StoreModel):
    chapters: List[Chapter] = Field(default_factory=list)


class LayoutSettings(_StoreModel):
    font_family: FontFamily = Field(FontFamily.SERIF, alias="fontFamily")
    font_size: FontSize = Field(FontSize.MEDIUM, alias="fontSize")
    theme: Theme = Theme.CLASSIC


class BookModel(_StoreModel):
    """
    The whole book as seen by the exporters.

    Exporters only read a snapshot; see ``snapshot()``.
    """
    settings: BookSettings
    structure: BookStructure = Field(default_factory=BookStructure)
    cover_image: Optional[str] = Field(None, alias="coverImage")
    layout_settings: LayoutSettings = Field(default_factory=LayoutSettings, alias="layoutSettings")

    @property
    def title(self) -> str:
        return self.settings.title

    @property
    def author(self) -> Optional[str]:
        """Author name, or None when the book has none."""
        name = self.settings.author_name.strip()
        return name or None

    @property
    def chapters(self) -> List[Chapter]:
        return self.structure.chapters

    def snapshot(self) -> "BookModel":
        """Deep copy so later edits by the generation loop cannot leak into an export."""
        return self.model_copy(deep=True)

    def has_cjk(self) -> bool:
        """True if the title, author, chapter titles or written content contain CJK text."""
        texts = [self.settings.title, self.settings.author_name, self.settings.topic]
        for chapter in self.chapters:
            texts.append(chapter.title)
            for section in chapter.written_sections():
                texts.append(section.title)
                texts.append(section.content)
        return any(_CJK_RE.search(text) for text in texts if text)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> "BookModel":
        """
        Validate a project dict.

        Accepts either a bare project or a saved-project wrapper
        (``{"id": ..., "project": {...}}``).

        Raises:
            InvalidBookError: if the data is not a valid book
        """
        if not isinstance(data, dict):
            raise InvalidBookError(f"Expected a JSON object, got {type(data).__name__}")
        if "project" in data and isinstance(data["project"], dict):
            data = data["project"]
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidBookError(f"Invalid book project: {e}") from e

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "BookModel":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidBookError(f"Project is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "BookModel":
        """Load a project JSON file written by the project store."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
