"""
EPUB Exporter

Packages a book as an EPUB 3 container that EPUB 2 readers can still
navigate through the NCX.

EPUB structure:
- mimetype (first entry, stored uncompressed)
- META-INF/container.xml
- OEBPS/
    - content.opf (package document)
    - toc.ncx (EPUB2 navigation)
    - nav.xhtml (EPUB3 navigation)
    - style.css
    - title.xhtml
    - chapter_1.xhtml, chapter_2.xhtml, ...
    - images/cover.{png,jpg,gif} (only when the book has a readable cover)
"""

import io
import logging
import time
import zipfile
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from omniscribe.book.cover import CoverImage, decode_cover_image
from omniscribe.book.models import BookModel, Chapter
from omniscribe.i18n import get_string, resolve_language
from omniscribe.markup import (
    Heading, Paragraph, Quote, Rule, Node,
    escape_html, inline_to_html, parse_markup, strip_inline,
)

from .config import ExportSettings, get_settings
from .formats import ExportFormat, ExportResult

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"


@dataclass
class EpubChapter:
    """One chapter document inside the package."""
    order: int  # 1-based reading order
    title: str
    body: str  # XHTML body content

    @property
    def item_id(self) -> str:
        return f"chapter_{self.order}"

    @property
    def filename(self) -> str:
        return f"chapter_{self.order}.xhtml"


@dataclass
class EpubMetadata:
    """EPUB metadata."""
    title: str
    identifier: str
    modified: str  # YYYY-MM-DDTHH:MM:SSZ
    author: str = UNKNOWN_AUTHOR
    language: str = "zh"
    description: str = ""
    cover: Optional[CoverImage] = None

    @property
    def has_author(self) -> bool:
        return bool(self.author) and self.author != UNKNOWN_AUTHOR

    @property
    def cover_href(self) -> Optional[str]:
        if not self.cover:
            return None
        return f"images/cover.{self.cover.extension}"


def nodes_to_html(nodes: List[Node]) -> str:
    """
    Convert parsed section content to XHTML.

    Headings shift down one level (`#` -> h2) because the chapter title
    owns h1.
    """
    blocks = []
    for node in nodes:
        if isinstance(node, Heading):
            level = node.level + 1
            blocks.append(f"<h{level}>{escape_html(strip_inline(node.text))}</h{level}>")
        elif isinstance(node, Quote):
            blocks.append(f"<blockquote><p>{inline_to_html(node.text)}</p></blockquote>")
        elif isinstance(node, Rule):
            blocks.append("<hr/>")
        elif isinstance(node, Paragraph):
            blocks.append(f"<p>{inline_to_html(node.text)}</p>")
    return "\n".join(blocks)


class EpubExporter:
    """
    Exports a book model to EPUB.

    Usage:
        exporter = EpubExporter()
        result = exporter.export(book)
        result.save("downloads/")
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or get_settings()

    def export(
        self,
        book: BookModel,
        book_id: Optional[str] = None,
        modified: Optional[datetime] = None,
    ) -> ExportResult:
        """
        Export the book to an EPUB result.

        Args:
            book: Book snapshot
            book_id: Fixed dtb:uid / dc:identifier (default: time based)
            modified: Fixed dcterms:modified time (default: now, UTC)
        """
        data = self.build(book, book_id=book_id, modified=modified)
        return ExportResult.for_book(
            ExportFormat.EPUB, book.title, data,
            max_filename_length=self.settings.filename_max_length,
        )

    def build(
        self,
        book: BookModel,
        book_id: Optional[str] = None,
        modified: Optional[datetime] = None,
    ) -> bytes:
        """Build the EPUB archive bytes."""
        meta = self._build_metadata(book, book_id, modified)
        chapters = [
            EpubChapter(order=index + 1, title=chapter.title, body=self._chapter_body(chapter))
            for index, chapter in enumerate(book.chapters)
        ]

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as epub:
            # mimetype must be first and uncompressed
            epub.writestr('mimetype', 'application/epub+zip', compress_type=zipfile.ZIP_STORED)

            # Container
            epub.writestr('META-INF/container.xml', self._generate_container())

            # Content
            epub.writestr('OEBPS/content.opf', self._generate_opf(chapters, meta))
            epub.writestr('OEBPS/toc.ncx', self._generate_ncx(chapters, meta))
            epub.writestr('OEBPS/nav.xhtml', self._generate_nav(chapters, meta))
            epub.writestr('OEBPS/style.css', self._generate_css())
            epub.writestr('OEBPS/title.xhtml', self._generate_title_page(meta))

            # Chapters
            for chapter in chapters:
                epub.writestr(
                    f'OEBPS/{chapter.filename}',
                    self._generate_chapter_xhtml(chapter, meta)
                )
                logger.debug(f"EPUB chapter packaged: {chapter.filename}")

            # Cover image
            if meta.cover:
                epub.writestr(f'OEBPS/{meta.cover_href}', meta.cover.data)

        data = buffer.getvalue()
        logger.info(f"EPUB created: {len(chapters)} chapters, {len(data)} bytes")
        return data

    def _build_metadata(
        self,
        book: BookModel,
        book_id: Optional[str],
        modified: Optional[datetime],
    ) -> EpubMetadata:
        if book_id is None:
            book_id = f"{self.settings.book_id_prefix}-{int(time.time() * 1000)}"
        if modified is None:
            modified = datetime.now(timezone.utc)

        return EpubMetadata(
            title=book.title,
            identifier=book_id,
            modified=modified.strftime("%Y-%m-%dT%H:%M:%SZ"),
            author=book.author or UNKNOWN_AUTHOR,
            language=resolve_language(book.settings.language, self.settings.default_language),
            description=book.settings.topic,
            cover=decode_cover_image(book.cover_image),
        )

    def _chapter_body(self, chapter: Chapter) -> str:
        parts = [f"<h1>{escape_html(chapter.title)}</h1>"]
        for section in chapter.written_sections():
            parts.append(f"<h2>{escape_html(section.title)}</h2>")
            html = nodes_to_html(parse_markup(section.content))
            if html:
                parts.append(html)
        return "\n".join(parts)

    def _generate_container(self) -> str:
        """Generate META-INF/container.xml."""
        return '''<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>'''

    def _generate_opf(self, chapters: List[EpubChapter], meta: EpubMetadata) -> str:
        """Generate OEBPS/content.opf."""
        items = [
            '<item id="title" href="title.xhtml" media-type="application/xhtml+xml"/>',
            '<item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>',
            '<item id="style" href="style.css" media-type="text/css"/>',
            '<item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>',
        ]
        spine = ['<itemref idref="title"/>']

        for chapter in chapters:
            items.append(
                f'<item id="{chapter.item_id}" href="{chapter.filename}" media-type="application/xhtml+xml"/>'
            )
            spine.append(f'<itemref idref="{chapter.item_id}"/>')

        extra_meta = []
        if meta.description:
            extra_meta.append(f'<dc:description>{escape_html(meta.description)}</dc:description>')
        if meta.cover:
            items.append(
                f'<item id="cover-image" href="{meta.cover_href}" '
                f'media-type="{meta.cover.media_type}" properties="cover-image"/>'
            )
            extra_meta.append('<meta name="cover" content="cover-image"/>')

        manifest = "\n    ".join(items)
        spine_refs = "\n    ".join(spine)
        metadata_extra = "".join(f"\n    {m}" for m in extra_meta)

        return f'''<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="book-id" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="book-id">{escape_html(meta.identifier)}</dc:identifier>
    <dc:title>{escape_html(meta.title)}</dc:title>
    <dc:creator>{escape_html(meta.author)}</dc:creator>
    <dc:language>{escape_html(meta.language)}</dc:language>
    <meta property="dcterms:modified">{meta.modified}</meta>{metadata_extra}
  </metadata>
  <manifest>
    {manifest}
  </manifest>
  <spine toc="ncx">
    {spine_refs}
  </spine>
</package>'''

    def _generate_ncx(self, chapters: List[EpubChapter], meta: EpubMetadata) -> str:
        """Generate OEBPS/toc.ncx (EPUB2 navigation)."""
        title_label = get_string("title_page", meta.language)
        nav_points = [f'''
    <navPoint id="nav_title" playOrder="1">
      <navLabel><text>{escape_html(title_label)}</text></navLabel>
      <content src="title.xhtml"/>
    </navPoint>''']
        for chapter in chapters:
            nav_points.append(f'''
    <navPoint id="nav_{chapter.order}" playOrder="{chapter.order + 1}">
      <navLabel><text>{escape_html(chapter.title)}</text></navLabel>
      <content src="{chapter.filename}"/>
    </navPoint>''')

        return f'''<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="{escape_html(meta.identifier)}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>
  <docTitle><text>{escape_html(meta.title)}</text></docTitle>
  <navMap>{''.join(nav_points)}
  </navMap>
</ncx>'''

    def _generate_nav(self, chapters: List[EpubChapter], meta: EpubMetadata) -> str:
        """Generate OEBPS/nav.xhtml (EPUB3 navigation)."""
        toc_label = escape_html(get_string("table_of_contents", meta.language))
        toc_items = [
            f'<li><a href="title.xhtml">{escape_html(get_string("title_page", meta.language))}</a></li>'
        ]
        for chapter in chapters:
            toc_items.append(f'<li><a href="{chapter.filename}">{escape_html(chapter.title)}</a></li>')
        toc_list = "\n      ".join(toc_items)

        return f'''<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{escape_html(meta.language)}" lang="{escape_html(meta.language)}">
<head>
  <title>{toc_label}</title>
  <link rel="stylesheet" type="text/css" href="style.css"/>
</head>
<body>
  <nav epub:type="toc" id="toc">
    <h1>{toc_label}</h1>
    <ol>
      {toc_list}
    </ol>
  </nav>
</body>
</html>'''

    def _generate_title_page(self, meta: EpubMetadata) -> str:
        """Generate OEBPS/title.xhtml."""
        author_html = ""
        if meta.has_author:
            author_html = f'\n    <p class="author">{escape_html(meta.author)}</p>'
        cover_html = ""
        if meta.cover:
            cover_html = f'\n    <div class="cover"><img src="{meta.cover_href}" alt="{escape_html(meta.title)}"/></div>'

        return f'''<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="{escape_html(meta.language)}" lang="{escape_html(meta.language)}">
<head>
  <title>{escape_html(meta.title)}</title>
  <link rel="stylesheet" type="text/css" href="style.css"/>
</head>
<body>
  <div class="title-page">
    <h1 class="book-title">{escape_html(meta.title)}</h1>{author_html}{cover_html}
  </div>
</body>
</html>'''

    def _generate_chapter_xhtml(self, chapter: EpubChapter, meta: EpubMetadata) -> str:
        """Generate chapter XHTML file."""
        return f'''<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="{escape_html(meta.language)}" lang="{escape_html(meta.language)}">
<head>
  <title>{escape_html(chapter.title)}</title>
  <link rel="stylesheet" type="text/css" href="style.css"/>
</head>
<body>
{chapter.body}
</body>
</html>'''

    def _generate_css(self) -> str:
        """Generate stylesheet."""
        return '''
body { font-family: serif; line-height: 1.8; margin: 1em; color: #222; }
h1 { font-size: 1.8em; margin-top: 2em; margin-bottom: 0.5em; text-align: center; }
h2 { font-size: 1.3em; margin-top: 1.5em; margin-bottom: 0.3em; }
h3 { font-size: 1.1em; margin-top: 1em; }
h4 { font-size: 1em; margin-top: 1em; }
p { text-indent: 2em; margin: 0.5em 0; text-align: justify; }
blockquote { margin: 1em 2em; font-style: italic; border-left: 3px solid #ccc; padding-left: 1em; }
hr { border: none; border-top: 1px solid #ccc; margin: 1.5em 25%; }
.title-page { text-align: center; margin-top: 40%; }
.title-page .book-title { font-size: 2.5em; }
.title-page .author { font-size: 1.2em; margin-top: 1em; text-indent: 0; text-align: center; }
.cover img { max-width: 80%; height: auto; margin-top: 2em; }
'''
