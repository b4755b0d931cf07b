"""
Export settings.

Values come from the environment (``OMNISCRIBE_`` prefix) or a ``.env``
file next to the working directory.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class ExportSettings(BaseSettings):
    """Exporter configuration"""

    # ========== Metadata ==========
    default_language: str = "zh"  # dc:language when the book language is unrecognised
    fallback_creator: str = "OmniScribe"  # DOCX creator when the book has no author
    book_id_prefix: str = "omniscribe"

    # ========== Files ==========
    filename_max_length: int = 80

    # ========== PDF ==========
    pdf_include_toc: bool = True
    pdf_include_back_cover: bool = True
    pdf_page_numbers: bool = True
    font_search_paths: List[str] = []  # Extra directories searched for DejaVu fonts

    class Config:
        env_prefix = "OMNISCRIBE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> ExportSettings:
    """Process-wide settings instance."""
    return ExportSettings()
