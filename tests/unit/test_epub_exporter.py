"""
Unit tests for omniscribe/export/epub_exporter.py — EpubExporter.
"""

import io
import zipfile
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest

from omniscribe.export import EpubExporter, ExportFormat, nodes_to_html
from omniscribe.markup import parse_markup

OPF_NS = {"opf": "http://www.idpf.org/2007/opf", "dc": "http://purl.org/dc/elements/1.1/"}
NCX_NS = {"ncx": "http://www.daisy.org/z3986/2005/ncx/"}
XHTML_NS = {"x": "http://www.w3.org/1999/xhtml"}

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build(book, settings, **kwargs):
    kwargs.setdefault("book_id", "omniscribe-test")
    kwargs.setdefault("modified", FIXED_TIME)
    return EpubExporter(settings).build(book, **kwargs)


def _open(data):
    return zipfile.ZipFile(io.BytesIO(data))


def _xml(data, name):
    with _open(data) as z:
        return ET.fromstring(z.read(name))


# ---------------------------------------------------------------------------
# Container structure
# ---------------------------------------------------------------------------

class TestContainer:
    def test_mimetype_first_and_stored(self, simple_book, settings):
        with _open(_build(simple_book, settings)) as z:
            first = z.infolist()[0]
            assert first.filename == "mimetype"
            assert first.compress_type == zipfile.ZIP_STORED
            assert z.read("mimetype") == b"application/epub+zip"

    def test_expected_entries(self, full_book, settings):
        with _open(_build(full_book, settings)) as z:
            names = set(z.namelist())
        assert {
            "META-INF/container.xml",
            "OEBPS/content.opf",
            "OEBPS/toc.ncx",
            "OEBPS/nav.xhtml",
            "OEBPS/style.css",
            "OEBPS/title.xhtml",
            "OEBPS/chapter_1.xhtml",
            "OEBPS/chapter_2.xhtml",
            "OEBPS/chapter_3.xhtml",
        } <= names

    def test_all_xml_documents_well_formed(self, full_book, settings):
        data = _build(full_book, settings)
        with _open(data) as z:
            for name in z.namelist():
                if name.endswith((".xml", ".opf", ".ncx", ".xhtml")):
                    ET.fromstring(z.read(name))

    def test_export_result(self, simple_book, settings):
        result = EpubExporter(settings).export(simple_book, book_id="x", modified=FIXED_TIME)
        assert result.format == ExportFormat.EPUB
        assert result.filename == "Test_Book.epub"
        assert result.mime_type == "application/epub+zip"


# ---------------------------------------------------------------------------
# Package document
# ---------------------------------------------------------------------------

class TestOpf:
    def test_spine_is_title_plus_chapters(self, full_book, settings):
        opf = _xml(_build(full_book, settings), "OEBPS/content.opf")
        refs = [i.get("idref") for i in opf.findall("opf:spine/opf:itemref", OPF_NS)]
        assert refs == ["title", "chapter_1", "chapter_2", "chapter_3"]
        assert len(refs) == len(full_book.chapters) + 1

    def test_metadata(self, full_book, settings):
        opf = _xml(_build(full_book, settings), "OEBPS/content.opf")
        meta = opf.find("opf:metadata", OPF_NS)
        assert meta.find("dc:identifier", OPF_NS).text == "omniscribe-test"
        assert meta.find("dc:title", OPF_NS).text == "The Long Road"
        assert meta.find("dc:creator", OPF_NS).text == "Ada Writer"
        assert meta.find("dc:language", OPF_NS).text == "en"
        assert meta.find("dc:description", OPF_NS).text == "A journey across the plains"
        modified = meta.find("opf:meta[@property='dcterms:modified']", OPF_NS)
        assert modified.text == "2024-05-01T12:30:00Z"

    def test_missing_author_is_unknown(self, simple_book, settings):
        opf = _xml(_build(simple_book, settings), "OEBPS/content.opf")
        assert opf.find("opf:metadata/dc:creator", OPF_NS).text == "Unknown"

    def test_unrecognised_language_uses_default(self, book_factory, settings):
        book = book_factory(language="Klingon")
        opf = _xml(_build(book, settings), "OEBPS/content.opf")
        assert opf.find("opf:metadata/dc:language", OPF_NS).text == "zh"

    def test_generated_identifier(self, simple_book, settings):
        data = EpubExporter(settings).build(simple_book)
        opf = _xml(data, "OEBPS/content.opf")
        assert opf.find("opf:metadata/dc:identifier", OPF_NS).text.startswith("omniscribe-")

    def test_nav_item_declared(self, simple_book, settings):
        opf = _xml(_build(simple_book, settings), "OEBPS/content.opf")
        nav = opf.find("opf:manifest/opf:item[@id='nav']", OPF_NS)
        assert nav.get("properties") == "nav"


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

class TestNcx:
    def test_play_order(self, full_book, settings):
        ncx = _xml(_build(full_book, settings), "OEBPS/toc.ncx")
        points = ncx.findall("ncx:navMap/ncx:navPoint", NCX_NS)
        assert [p.get("playOrder") for p in points] == ["1", "2", "3", "4"]
        labels = [p.find("ncx:navLabel/ncx:text", NCX_NS).text for p in points[1:]]
        assert labels == ["Departure", "The Plains", "Arrival"]

    def test_uid_matches_identifier(self, simple_book, settings):
        ncx = _xml(_build(simple_book, settings), "OEBPS/toc.ncx")
        uid = ncx.find("ncx:head/ncx:meta[@name='dtb:uid']", NCX_NS)
        assert uid.get("content") == "omniscribe-test"


class TestNav:
    def test_localized_label(self, cjk_book, settings):
        nav = _xml(_build(cjk_book, settings), "OEBPS/nav.xhtml")
        assert nav.find(".//x:nav/x:h1", XHTML_NS).text == "目錄"

    def test_links_in_order(self, full_book, settings):
        nav = _xml(_build(full_book, settings), "OEBPS/nav.xhtml")
        hrefs = [a.get("href") for a in nav.findall(".//x:ol/x:li/x:a", XHTML_NS)]
        assert hrefs == ["title.xhtml", "chapter_1.xhtml", "chapter_2.xhtml", "chapter_3.xhtml"]


# ---------------------------------------------------------------------------
# Content documents
# ---------------------------------------------------------------------------

class TestChapters:
    def test_sections_in_order_and_empty_omitted(self, full_book, settings):
        chapter = _xml(_build(full_book, settings), "OEBPS/chapter_1.xhtml")
        body = chapter.find("x:body", XHTML_NS)
        assert body.find("x:h1", XHTML_NS).text == "Departure"
        h2s = [h.text for h in body.findall("x:h2", XHTML_NS)]
        assert h2s == ["Morning", "Dawn"]
        assert "Unwritten" not in ET.tostring(chapter, encoding="unicode")

    def test_empty_chapter_has_title_only(self, full_book, settings):
        chapter = _xml(_build(full_book, settings), "OEBPS/chapter_3.xhtml")
        body = chapter.find("x:body", XHTML_NS)
        assert [child.tag for child in body] == ["{http://www.w3.org/1999/xhtml}h1"]

    def test_special_characters_escaped(self, book_factory, settings):
        title = 'Fish & <Chips> "Deluxe"'
        book = book_factory(
            title=title,
            chapters=[(title, [(title, "a < b & c > d")])],
        )
        data = _build(book, settings)

        opf = _xml(data, "OEBPS/content.opf")
        assert opf.find("opf:metadata/dc:title", OPF_NS).text == title

        ncx = _xml(data, "OEBPS/toc.ncx")
        assert ncx.find("ncx:docTitle/ncx:text", NCX_NS).text == title

        chapter = _xml(data, "OEBPS/chapter_1.xhtml")
        body = chapter.find("x:body", XHTML_NS)
        assert body.find("x:h2", XHTML_NS).text == title
        assert body.find("x:p", XHTML_NS).text == "a < b & c > d"


class TestTitlePage:
    def test_author_shown(self, full_book, settings):
        page = _xml(_build(full_book, settings), "OEBPS/title.xhtml")
        author = page.find(".//x:p[@class='author']", XHTML_NS)
        assert author.text == "Ada Writer"

    def test_author_omitted_when_missing(self, simple_book, settings):
        page = _xml(_build(simple_book, settings), "OEBPS/title.xhtml")
        assert page.find(".//x:p[@class='author']", XHTML_NS) is None


class TestCover:
    def test_cover_packaged(self, book_factory, settings, cover_data_uri):
        book = book_factory(cover_image=cover_data_uri)
        data = _build(book, settings)

        with _open(data) as z:
            assert z.read("OEBPS/images/cover.png").startswith(b"\x89PNG")

        opf = _xml(data, "OEBPS/content.opf")
        item = opf.find("opf:manifest/opf:item[@id='cover-image']", OPF_NS)
        assert item.get("media-type") == "image/png"
        assert item.get("properties") == "cover-image"

    def test_broken_cover_skipped(self, book_factory, settings):
        book = book_factory(cover_image="data:image/png;base64,bm90IGFuIGltYWdl")
        with _open(_build(book, settings)) as z:
            assert not any(name.startswith("OEBPS/images/") for name in z.namelist())


class TestNodesToHtml:
    def test_heading_levels_shift(self):
        html = nodes_to_html(parse_markup("# One\n## Two\n### Three"))
        assert html == "<h2>One</h2>\n<h3>Two</h3>\n<h4>Three</h4>"

    def test_fourth_level_marker_is_paragraph(self):
        assert nodes_to_html(parse_markup("#### Four")) == "<p>#### Four</p>"

    def test_blocks(self):
        html = nodes_to_html(parse_markup("**hi**\n\n> quote\n\n---"))
        assert html == "<p><strong>hi</strong></p>\n<blockquote><p>quote</p></blockquote>\n<hr/>"

    @pytest.mark.parametrize("content", ["", None])
    def test_empty(self, content):
        assert nodes_to_html(parse_markup(content)) == ""

    @pytest.mark.parametrize("content", [
        "Use `*args` and *emphasis* here",
        "**a *b** c*",
        "*a **b** c*",
        "***both***",
        "`**` then **bold** and `*`",
        "[*link*](http://x) and *more",
    ])
    def test_mixed_inline_markup_well_formed(self, content):
        html = nodes_to_html(parse_markup(content))
        ET.fromstring(f"<body>{html}</body>")


class TestControlCharacters:
    def test_chapter_well_formed(self, book_factory, settings):
        book = book_factory(
            title="Bad\x00Title",
            chapters=[("Chapter\x0b", [("Sec\x1f", "a\x0bb\nPass `*args` to *any* function.")])],
        )
        data = _build(book, settings)

        chapter = _xml(data, "OEBPS/chapter_1.xhtml")
        body = chapter.find("x:body", XHTML_NS)
        assert body.find("x:h1", XHTML_NS).text == "Chapter"
        assert body.find("x:h2", XHTML_NS).text == "Sec"
        assert body.find("x:p", XHTML_NS).text.startswith("ab")

        opf = _xml(data, "OEBPS/content.opf")
        assert opf.find("opf:metadata/dc:title", OPF_NS).text == "BadTitle"
        _xml(data, "OEBPS/toc.ncx")
        _xml(data, "OEBPS/nav.xhtml")
        _xml(data, "OEBPS/title.xhtml")
