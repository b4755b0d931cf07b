"""
Export formats and export results.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from omniscribe.utils.filename import MAX_FILENAME_LENGTH, output_filename

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    """The closed set of formats a book can be exported to"""
    MARKDOWN = "md"
    TXT = "txt"
    EPUB = "epub"
    DOCX = "docx"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self]

    @property
    def is_binary(self) -> bool:
        """Binary formats are built off the event loop."""
        return self in (ExportFormat.EPUB, ExportFormat.DOCX, ExportFormat.PDF)

    @classmethod
    def from_name(cls, name: str) -> "ExportFormat":
        """Look up a format by extension or alias ("md", "markdown", "text", ...)."""
        key = name.lower().lstrip(".")
        key = FORMAT_ALIASES.get(key, key)
        return cls(key)


MIME_TYPES = {
    ExportFormat.MARKDOWN: "text/markdown;charset=utf-8",
    ExportFormat.TXT: "text/plain;charset=utf-8",
    ExportFormat.EPUB: "application/epub+zip",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.PDF: "application/pdf",
}

FORMAT_ALIASES = {
    "markdown": "md",
    "text": "txt",
    "plain": "txt",
}


@dataclass
class ExportResult:
    """The bytes of one exported book plus how to save them."""
    format: ExportFormat
    data: bytes
    filename: str
    page_count: Optional[int] = None

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def for_book(
        cls,
        fmt: ExportFormat,
        title: str,
        data: bytes,
        page_count: Optional[int] = None,
        max_filename_length: int = MAX_FILENAME_LENGTH,
    ) -> "ExportResult":
        return cls(
            format=fmt,
            data=data,
            filename=output_filename(title, fmt.extension, max_filename_length),
            page_count=page_count,
        )

    def save(self, directory: Union[str, Path]) -> Path:
        """Write the export to ``directory/filename`` and return the path."""
        output = Path(directory) / self.filename
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(self.data)
        logger.info(f"Saved {self.format.name} export: {output} ({self.size} bytes)")
        return output
