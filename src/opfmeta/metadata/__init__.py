# ABOUTME: Metadata package: OPF metadata parsing, refinement resolution and adaptation.
# ABOUTME: Exports the parser, the adapters and the core data structures.

from opfmeta.metadata.adapter import AdapterConfig, LinkMetadataAdapter, PubMetadataAdapter
from opfmeta.metadata.parser import MetadataParser
from opfmeta.metadata.types import (
    Collection,
    Contributor,
    EpubLink,
    EpubMetadata,
    LocalizedString,
    Metadata,
    MetadataItem,
    Presentation,
    Subject,
    Title,
)

__all__ = [
    "AdapterConfig",
    "Collection",
    "Contributor",
    "EpubLink",
    "EpubMetadata",
    "LinkMetadataAdapter",
    "LocalizedString",
    "Metadata",
    "MetadataItem",
    "MetadataParser",
    "Presentation",
    "PubMetadataAdapter",
    "Subject",
    "Title",
]
