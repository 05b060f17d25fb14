# ABOUTME: Extracts flat MetadataItem and EpubLink records from an OPF <metadata> element.
# ABOUTME: Malformed declarations are logged and skipped, never fatal.

import logging

from opfmeta.formats.paths import normalize
from opfmeta.formats.xml import ElementNode
from opfmeta.metadata.types import EpubLink, MetadataItem
from opfmeta.metadata.vocab import (
    DC_NS,
    DCTERMS,
    META,
    OPF_NS,
    DefaultVocab,
    parse_properties,
    resolve_property,
)

logger = logging.getLogger(__name__)

_CONTRIBUTOR_ELEMENTS = frozenset({"creator", "contributor", "publisher"})


class MetadataExtractor:
    """Turns the children of a `<metadata>` element into raw metadata records.

    Dublin Core elements, `<meta>` (both EPUB 2 name/content and EPUB 3
    property forms) and `<link>` elements are recognized; anything else is
    ignored.
    """

    def __init__(self, prefix_map: dict[str, str]) -> None:
        self.prefix_map = prefix_map

    def extract(
        self, metadata_element: ElementNode, file_path: str
    ) -> tuple[list[MetadataItem], list[EpubLink]]:
        """Extract items and links from a metadata element.

        Args:
            metadata_element: The `<metadata>` element of a package document.
            file_path: Path of the package document, used to resolve link hrefs.

        Returns:
            (items, links) in document order.
        """
        items: list[MetadataItem] = []
        links: list[EpubLink] = []
        for element in metadata_element.get_all():
            if element.namespace == DC_NS:
                item = self._parse_dc_element(element)
                if item is not None:
                    items.append(item)
            elif element.namespace == OPF_NS and element.name == "meta":
                item = self._parse_meta_element(element)
                if item is not None:
                    items.append(item)
            elif element.namespace == OPF_NS and element.name == "link":
                link = self._parse_link_element(element, file_path)
                if link is not None:
                    links.append(link)
        return items, links

    def _parse_link_element(self, element: ElementNode, file_path: str) -> EpubLink | None:
        href = element.get_attr("href")
        if href is None:
            logger.debug("Skipping <link> without href")
            return None
        rels = self._resolve_all(element.get_attr("rel"))
        properties = self._resolve_all(element.get_attr("properties"))
        return EpubLink(
            href=normalize(file_path, href),
            rels=frozenset(rels),
            media_type=element.get_attr("media-type"),
            refines=_strip_fragment(element.get_attr("refines")),
            properties=properties,
        )

    def _resolve_all(self, attr: str | None) -> list[str]:
        resolved = (
            resolve_property(token, self.prefix_map, DefaultVocab.LINK)
            for token in parse_properties(attr)
        )
        return [prop for prop in resolved if prop is not None]

    def _parse_meta_element(self, element: ElementNode) -> MetadataItem | None:
        prop_attr = element.get_attr("property")
        if prop_attr is None:
            # EPUB 2 form: <meta name="..." content="..."/>
            name = element.get_attr("name")
            content = element.get_attr("content")
            if name is None or content is None:
                logger.debug("Skipping legacy <meta> without name or content")
                return None
            return MetadataItem(name, content, lang=element.lang, id=element.id)

        value = element.text
        resolved = resolve_property(prop_attr, self.prefix_map, DefaultVocab.META)
        if resolved is None or value is None:
            logger.debug("Skipping <meta property=%r> without property or value", prop_attr)
            return None

        scheme_attr = element.get_attr("scheme")
        scheme = resolve_property(scheme_attr, self.prefix_map) if scheme_attr else None
        return MetadataItem(
            resolved,
            value,
            lang=element.lang,
            scheme=scheme,
            refines=_strip_fragment(element.get_attr("refines")),
            id=element.id,
        )

    def _parse_dc_element(self, element: ElementNode) -> MetadataItem | None:
        value = element.text
        if value is None:
            logger.debug("Skipping empty dc:%s", element.name)
            return None
        prop = DCTERMS + element.name
        if element.name in _CONTRIBUTOR_ELEMENTS:
            return _contributor_with_legacy_attrs(element, prop, value)
        if element.name == "date":
            return _date_with_legacy_attrs(element, prop, value)
        return MetadataItem(prop, value, lang=element.lang, id=element.id)


def _strip_fragment(refines: str | None) -> str | None:
    if refines is None:
        return None
    return refines.removeprefix("#")


def _contributor_with_legacy_attrs(element: ElementNode, prop: str, value: str) -> MetadataItem:
    """Fold EPUB 2 opf:file-as and opf:role attributes into refining children.

    This gives EPUB 2 and EPUB 3 contributors the same shape downstream.
    """
    children: dict[str, list[MetadataItem]] = {}
    file_as = element.get_attr_ns("file-as", OPF_NS)
    if file_as is not None:
        children[META + "file-as"] = [MetadataItem(META + "file-as", file_as, lang=element.lang)]
    role = element.get_attr_ns("role", OPF_NS)
    if role is not None:
        children[META + "role"] = [MetadataItem(META + "role", role, lang=element.lang)]
    return MetadataItem(prop, value, lang=element.lang, id=element.id, children=children)


def _date_with_legacy_attrs(element: ElementNode, prop: str, value: str) -> MetadataItem:
    if element.get_attr_ns("event", OPF_NS) == "modification":
        prop = DCTERMS + "modified"
    return MetadataItem(prop, value, lang=element.lang, id=element.id)
