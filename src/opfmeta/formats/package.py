# ABOUTME: Reads publication-level context from an OPF <package> element.
# ABOUTME: Ties the metadata parser and adapter together for a whole package document.

import logging
from dataclasses import dataclass, field

from opfmeta.formats.xml import ElementNode, LxmlElement, XmlParseError
from opfmeta.metadata.adapter import AdapterConfig, LinkMetadataAdapter, PubMetadataAdapter
from opfmeta.metadata.parser import MetadataParser
from opfmeta.metadata.types import EpubMetadata, Metadata, ReadingProgression
from opfmeta.metadata.vocab import OPF_NS, build_prefix_map

logger = logging.getLogger(__name__)

# Version assumed when the package does not declare a usable one.
DEFAULT_EPUB_VERSION = 1.2


@dataclass(frozen=True)
class PackageContext:
    """Package-level settings that shape how the metadata is read."""

    file_path: str
    version: float = DEFAULT_EPUB_VERSION
    unique_identifier_id: str | None = None
    prefixes: dict[str, str] = field(default_factory=dict)
    reading_progression: ReadingProgression = ReadingProgression.AUTO
    display_options: dict[str, str] = field(default_factory=dict)
    fallback_title: str = ""

    def adapter_config(self) -> AdapterConfig:
        return AdapterConfig(
            epub_version=self.version,
            fallback_title=self.fallback_title,
            unique_identifier_id=self.unique_identifier_id,
            reading_progression=self.reading_progression,
            display_options=dict(self.display_options),
        )


@dataclass
class PackageMetadata:
    """Everything read from a package document's metadata.

    Attributes:
        metadata: The adapted publication metadata.
        epub_metadata: The raw resolved items and links it was adapted from.
        context: The package context used for parsing and adaptation.
    """

    metadata: Metadata
    epub_metadata: EpubMetadata
    context: PackageContext

    def link_metadata(self, item_id: str) -> LinkMetadataAdapter:
        """Adapter over the metadata refining the manifest item `item_id`."""
        return LinkMetadataAdapter(
            self.epub_metadata.refine_items.get(item_id, {}), self.context.version
        )


def _parse_version(value: str | None) -> float:
    if value is None:
        return DEFAULT_EPUB_VERSION
    try:
        return float(value.strip())
    except ValueError:
        logger.debug("Unparsable package version %r, assuming %s", value, DEFAULT_EPUB_VERSION)
        return DEFAULT_EPUB_VERSION


def _reading_progression(package: ElementNode) -> ReadingProgression:
    spine = package.get_first("spine", OPF_NS)
    direction = spine.get_attr("page-progression-direction") if spine is not None else None
    if direction == "ltr":
        return ReadingProgression.LTR
    if direction == "rtl":
        return ReadingProgression.RTL
    return ReadingProgression.AUTO


def read_package_context(
    package: ElementNode,
    file_path: str,
    fallback_title: str = "",
    display_options: dict[str, str] | None = None,
) -> PackageContext:
    """Collect version, prefixes, unique identifier and reading progression."""
    return PackageContext(
        file_path=file_path,
        version=_parse_version(package.get_attr("version")),
        unique_identifier_id=package.get_attr("unique-identifier"),
        prefixes=build_prefix_map(package.get_attr("prefix")),
        reading_progression=_reading_progression(package),
        display_options=dict(display_options or {}),
        fallback_title=fallback_title,
    )


def parse_display_options(data: bytes) -> dict[str, str]:
    """Parse an iBooks display-options document into an option -> value mapping.

    The document looks like:
        <display_options><platform name="*">
            <option name="fixed-layout">true</option>
        </platform></display_options>

    Unreadable documents yield an empty mapping.
    """
    try:
        root = LxmlElement.from_bytes(data)
    except XmlParseError as exc:
        logger.warning("Ignoring unreadable display options: %s", exc)
        return {}

    options: dict[str, str] = {}
    for platform in root.get_all():
        if platform.name != "platform":
            continue
        for option in platform.get_all():
            name = option.get_attr("name")
            if option.name == "option" and name is not None and option.text is not None:
                options[name] = option.text
    return options


def parse_package_document(
    package: ElementNode,
    file_path: str,
    fallback_title: str = "",
    display_options: dict[str, str] | None = None,
) -> PackageMetadata | None:
    """Parse and adapt the metadata of a `<package>` element.

    Returns:
        The package metadata, or None if the package has no `<metadata>`.
    """
    context = read_package_context(package, file_path, fallback_title, display_options)
    epub_metadata = MetadataParser(context.version, context.prefixes).parse(package, file_path)
    if epub_metadata is None:
        return None
    adapter = PubMetadataAdapter(epub_metadata.global_items, context.adapter_config())
    return PackageMetadata(
        metadata=adapter.metadata(), epub_metadata=epub_metadata, context=context
    )
