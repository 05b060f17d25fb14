# ABOUTME: Parses the <metadata> element of an OPF package document into EpubMetadata.
# ABOUTME: Runs extraction then hierarchy resolution and partitions the result.

from opfmeta.formats.xml import ElementNode
from opfmeta.metadata.extractor import MetadataExtractor
from opfmeta.metadata.hierarchy import partition_items, resolve_hierarchy
from opfmeta.metadata.types import EpubMetadata
from opfmeta.metadata.vocab import OPF_NS


class MetadataParser:
    """Parser for the metadata section of an OPF package document.

    Args:
        epub_version: The package's EPUB version (e.g. 2.0, 3.0).
        prefix_map: Prefix to vocabulary IRI table used to resolve properties.
    """

    def __init__(self, epub_version: float, prefix_map: dict[str, str]) -> None:
        self.epub_version = epub_version
        self.prefix_map = prefix_map

    def parse(self, document: ElementNode, file_path: str) -> EpubMetadata | None:
        """Parse the `<metadata>` child of a `<package>` element.

        Returns:
            The parsed metadata, or None when the package has no `<metadata>`
            element at all (distinct from an empty one).
        """
        metadata = document.get_first("metadata", OPF_NS)
        if metadata is None:
            return None

        items, links = MetadataExtractor(self.prefix_map).extract(metadata, file_path)
        global_items, refine_items = partition_items(resolve_hierarchy(items))
        return EpubMetadata(global_items=global_items, refine_items=refine_items, links=links)
