# ABOUTME: Package metadata reading from EPUB archives (via ebooklib) and bare OPF files.
# ABOUTME: Reads only the container and the package document, raising EpubReadError on failure.

import logging
import zipfile
from pathlib import Path

from ebooklib import epub

from opfmeta.formats.package import PackageMetadata, parse_display_options, parse_package_document
from opfmeta.formats.xml import LxmlElement, XmlParseError

logger = logging.getLogger(__name__)

DISPLAY_OPTIONS_PATH = "META-INF/com.apple.ibooks.display-options.xml"


class EpubReadError(Exception):
    """Raised when an EPUB or package document cannot be read or parsed."""


class NoMetadataError(EpubReadError):
    """Raised when a package document has no <metadata> element."""


def _read_display_options(zf: zipfile.ZipFile) -> dict[str, str]:
    """Read the legacy iBooks display options from an open archive, if present."""
    try:
        data = zf.read(DISPLAY_OPTIONS_PATH)
    except KeyError:
        return {}
    except (OSError, zipfile.BadZipFile) as exc:
        logger.warning("Could not read display options: %s", exc)
        return {}
    return parse_display_options(data)


def _load_epub_package(path: Path) -> tuple[LxmlElement, str, dict[str, str]]:
    """Locate and parse the package document of an EPUB archive.

    Only META-INF/container.xml and the package document are read, so broken
    content documents elsewhere in the archive do not matter.

    Returns:
        The `<package>` element, its path inside the archive and the display options.
    """
    try:
        with zipfile.ZipFile(path) as zf:
            reader = epub.EpubReader(str(path))
            reader.zf = zf
            reader._load_container()
            if not getattr(reader, "opf_file", ""):
                raise EpubReadError(f"No package document found in EPUB: {path}")
            data = reader.read_file(reader.opf_file)
            display_options = _read_display_options(zf)
    except EpubReadError:
        raise
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    try:
        package = LxmlElement.from_bytes(data)
    except XmlParseError as exc:
        raise EpubReadError(f"Failed to parse package document: {path}: {exc}") from exc
    return package, reader.opf_file, display_options


def _load_opf_file(path: Path) -> tuple[LxmlElement, str]:
    try:
        package = LxmlElement.from_bytes(path.read_bytes())
    except (OSError, XmlParseError) as exc:
        raise EpubReadError(f"Failed to read package document: {path}: {exc}") from exc
    return package, path.name


def read_package_metadata(path: Path) -> PackageMetadata:
    """Read and adapt the package metadata of an EPUB or OPF file.

    Args:
        path: Path to an `.epub` archive or a bare `.opf` package document.

    Returns:
        PackageMetadata with the adapted metadata and the raw resolved items.

    Raises:
        NoMetadataError: If the package document has no `<metadata>` element.
        EpubReadError: If the file cannot be read or parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    if path.suffix.lower() == ".opf":
        package, file_path = _load_opf_file(path)
        display_options: dict[str, str] = {}
    else:
        package, file_path, display_options = _load_epub_package(path)

    result = parse_package_document(
        package,
        file_path,
        fallback_title=path.stem,
        display_options=display_options,
    )
    if result is None:
        raise NoMetadataError(f"Package document has no <metadata> element: {path}")
    return result
