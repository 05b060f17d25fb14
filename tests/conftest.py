# ABOUTME: Shared pytest fixtures for opfmeta tests.
# ABOUTME: Provides sample EPUB files (valid and corrupt) and OPF package files.

import zipfile
from pathlib import Path

import pytest
from ebooklib import epub

from tests.fixtures.opf_documents import (
    BROKEN_CONTENT_PACKAGE,
    DISPLAY_OPTIONS_FIXED,
    EPUB2_PACKAGE,
    EPUB3_PACKAGE,
    NO_METADATA_PACKAGE,
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco", file_as="Eco, Umberto", role="aut", uid="creator")

    book.add_metadata("DC", "publisher", "Harcourt")
    book.add_metadata("DC", "description", "A mystery set in a medieval monastery.")
    book.add_metadata("DC", "subject", "Mystery")

    # Add a minimal chapter so the EPUB is structurally valid
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    # Add navigation
    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def epub2_archive(tmp_path: Path) -> Path:
    """Create a hand-assembled EPUB 2 archive with iBooks display options."""
    filepath = tmp_path / "old_tales.epub"
    container = (
        '<?xml version="1.0"?>\n'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
        "<rootfiles>"
        '<rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>'
        "</rootfiles></container>"
    )
    with zipfile.ZipFile(filepath, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        zf.writestr("META-INF/container.xml", container)
        zf.writestr("META-INF/com.apple.ibooks.display-options.xml", DISPLAY_OPTIONS_FIXED)
        zf.writestr("OEBPS/content.opf", EPUB2_PACKAGE)
    return filepath


@pytest.fixture
def broken_content_epub(tmp_path: Path) -> Path:
    """An EPUB whose content documents are malformed or missing."""
    filepath = tmp_path / "damaged.epub"
    container = (
        '<?xml version="1.0"?>\n'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
        "<rootfiles>"
        '<rootfile full-path="OPS/package.opf" media-type="application/oebps-package+xml"/>'
        "</rootfiles></container>"
    )
    with zipfile.ZipFile(filepath, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        zf.writestr("META-INF/container.xml", container)
        zf.writestr("OPS/package.opf", BROKEN_CONTENT_PACKAGE)
        zf.writestr("OPS/nav.xhtml", "<html><body><nav><ol><li>unclosed")
    return filepath


@pytest.fixture
def epub3_opf(tmp_path: Path) -> Path:
    """Write the full EPUB 3 package document to a bare .opf file."""
    filepath = tmp_path / "journey.opf"
    filepath.write_text(EPUB3_PACKAGE, encoding="utf-8")
    return filepath


@pytest.fixture
def epub2_opf(tmp_path: Path) -> Path:
    """Write the EPUB 2 package document to a bare .opf file."""
    filepath = tmp_path / "old_tales.opf"
    filepath.write_text(EPUB2_PACKAGE, encoding="utf-8")
    return filepath


@pytest.fixture
def no_metadata_opf(tmp_path: Path) -> Path:
    """A package document without a <metadata> element."""
    filepath = tmp_path / "empty.opf"
    filepath.write_text(NO_METADATA_PACKAGE, encoding="utf-8")
    return filepath
