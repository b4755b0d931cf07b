"""Tests for omniscribe.book.models."""

import json

import pytest

from omniscribe.book import (
    BookModel, FontFamily, FontSize, SectionStatus, Theme,
)
from omniscribe.exceptions import InvalidBookError


def _project(**overrides):
    data = {
        "settings": {"title": "Test Book", "authorName": "Ada"},
        "structure": {"chapters": [
            {"id": "c1", "title": "Intro", "sections": [
                {"id": "s1", "title": "Hello", "content": "World", "status": "completed"},
                {"id": "s2", "title": "Later", "status": "pending"},
                {"id": "s3", "title": "Blank", "content": "   \n ", "status": "completed"},
            ]},
        ]},
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestFromDict:
    def test_camel_case_fields(self):
        book = BookModel.from_dict(_project())
        assert book.title == "Test Book"
        assert book.author == "Ada"
        assert book.chapters[0].sections[0].status == SectionStatus.COMPLETED

    def test_saved_project_wrapper_unwrapped(self):
        book = BookModel.from_dict({"id": "p1", "lastModified": 1, "project": _project()})
        assert book.title == "Test Book"

    def test_unknown_fields_ignored(self):
        data = _project(coverImagePrompt="a red door")
        data["settings"]["somethingNew"] = True
        book = BookModel.from_dict(data)
        assert book.title == "Test Book"

    def test_missing_title_rejected(self):
        with pytest.raises(InvalidBookError):
            BookModel.from_dict({"settings": {}})

    def test_blank_title_rejected(self):
        with pytest.raises(InvalidBookError):
            BookModel.from_dict({"settings": {"title": "   "}})

    def test_non_dict_rejected(self):
        with pytest.raises(InvalidBookError):
            BookModel.from_dict(["not", "a", "book"])

    def test_null_author_becomes_empty(self):
        book = BookModel.from_dict({"settings": {"title": "T", "authorName": None}})
        assert book.settings.author_name == ""
        assert book.author is None

    def test_word_count_target_kept_as_text(self):
        book = BookModel.from_dict({"settings": {"title": "T", "wordCountTarget": 50000}})
        assert book.settings.word_count_target == "50000"

    def test_layout_defaults(self):
        book = BookModel.from_dict({"settings": {"title": "T"}})
        assert book.layout_settings.font_family == FontFamily.SERIF
        assert book.layout_settings.font_size == FontSize.MEDIUM
        assert book.layout_settings.theme == Theme.CLASSIC

    def test_layout_from_store(self):
        book = BookModel.from_dict(_project(
            layoutSettings={"fontFamily": "sans", "fontSize": "large", "theme": "scifi"}
        ))
        assert book.layout_settings.font_family == FontFamily.SANS
        assert book.layout_settings.font_size == FontSize.LARGE
        assert book.layout_settings.theme == Theme.SCIFI


class TestFromJson:
    def test_valid_json(self):
        book = BookModel.from_json(json.dumps(_project()))
        assert book.title == "Test Book"

    def test_invalid_json(self):
        with pytest.raises(InvalidBookError):
            BookModel.from_json("{not json")

    def test_from_file(self, tmp_path):
        path = tmp_path / "project.json"
        path.write_text(json.dumps(_project(), ensure_ascii=False), encoding="utf-8")
        assert BookModel.from_file(path).title == "Test Book"


# ---------------------------------------------------------------------------
# Behaviour
# ---------------------------------------------------------------------------

class TestWrittenSections:
    def test_only_sections_with_content(self):
        book = BookModel.from_dict(_project())
        written = book.chapters[0].written_sections()
        assert [s.title for s in written] == ["Hello"]

    def test_status_does_not_matter(self):
        data = _project()
        data["structure"]["chapters"][0]["sections"][0]["status"] = "error"
        book = BookModel.from_dict(data)
        assert [s.title for s in book.chapters[0].written_sections()] == ["Hello"]


class TestSnapshot:
    def test_snapshot_is_independent(self):
        book = BookModel.from_dict(_project())
        snapshot = book.snapshot()

        book.chapters[0].sections[0].content = "Changed"
        book.settings.title = "Other"

        assert snapshot.chapters[0].sections[0].content == "World"
        assert snapshot.title == "Test Book"


class TestHasCjk:
    def test_latin_only(self):
        assert not BookModel.from_dict(_project()).has_cjk()

    def test_cjk_title(self):
        book = BookModel.from_dict({"settings": {"title": "我的書"}})
        assert book.has_cjk()

    def test_cjk_content(self):
        data = _project()
        data["structure"]["chapters"][0]["sections"][0]["content"] = "日本語のテキスト"
        assert BookModel.from_dict(data).has_cjk()
