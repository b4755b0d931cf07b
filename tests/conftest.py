"""
Shared test fixtures.

Provides book models in the shape the project store saves them, plus a
small real cover image.
"""

import base64
import io

import pytest
from PIL import Image

from omniscribe.book import BookModel
from omniscribe.export.config import ExportSettings


# ============================================================
# Helper Functions
# ============================================================

def make_book(
    title="Test Book",
    author="",
    topic="",
    language="English",
    chapters=None,
    cover_image=None,
    layout=None,
) -> BookModel:
    """
    Build a BookModel from plain data.

    ``chapters`` is a list of ``(chapter_title, [(section_title, content), ...])``.
    """
    if chapters is None:
        chapters = [("Intro", [("Hello", "World")])]

    data = {
        "settings": {
            "title": title,
            "authorName": author,
            "topic": topic,
            "language": language,
        },
        "structure": {
            "chapters": [
                {
                    "id": f"c{ci}",
                    "title": chapter_title,
                    "sections": [
                        {
                            "id": f"c{ci}s{si}",
                            "title": section_title,
                            "content": content,
                            "status": "completed" if content else "pending",
                        }
                        for si, (section_title, content) in enumerate(sections)
                    ],
                }
                for ci, (chapter_title, sections) in enumerate(chapters)
            ]
        },
    }
    if cover_image is not None:
        data["coverImage"] = cover_image
    if layout is not None:
        data["layoutSettings"] = layout
    return BookModel.from_dict(data)


def png_bytes(width=40, height=60, color=(200, 80, 40)) -> bytes:
    """Encode a solid-colour PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def simple_book():
    """One chapter, one written section"""
    return make_book()


@pytest.fixture
def full_book():
    """Three chapters with mixed content, an empty chapter and an unwritten section"""
    return make_book(
        title="The Long Road",
        author="Ada Writer",
        topic="A journey across the plains",
        chapters=[
            ("Departure", [
                ("Morning", "# Dawn\n\nThe sun rose **slowly**.\nBirds sang.\n\n> Go west.\n\n---\n\nThey left."),
                ("Unwritten", ""),
            ]),
            ("The Plains", [
                ("Grass", "Endless *grass* and `wind`.\n\nSee [the map](http://example.com)."),
            ]),
            ("Arrival", []),
        ],
    )


@pytest.fixture
def cjk_book():
    return make_book(
        title="我的書",
        author="王小明",
        topic="一個關於旅行的故事",
        language="Traditional Chinese (繁體中文)",
        chapters=[
            ("第一章 出發", [("清晨", "太陽慢慢升起。" * 40)]),
            ("第二章 平原", [("草原", "無盡的草原。")]),
        ],
    )


@pytest.fixture
def cover_data_uri():
    return "data:image/png;base64," + base64.b64encode(png_bytes()).decode("ascii")


@pytest.fixture
def settings():
    """Settings with defaults, independent of the environment"""
    return ExportSettings(_env_file=None)


@pytest.fixture
def book_factory():
    """The make_book helper, for tests that need a custom model"""
    return make_book
