# ABOUTME: Data structures for raw OPF metadata items and the derived publication metadata.
# ABOUTME: MetadataItem is the atomic unit; Metadata is the interchange format handed to callers.

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class MetadataItem:
    """A single metadata expression from the OPF `<metadata>` block.

    `property` is the fully-qualified property IRI (or the literal name of a
    legacy `<meta name=...>`). `children` holds the expressions refining this
    one, keyed by property, and is only populated by hierarchy resolution.
    """

    property: str
    value: str
    lang: str = ""
    scheme: str | None = None
    refines: str | None = None
    id: str | None = None
    children: dict[str, list["MetadataItem"]] = field(default_factory=dict)

    def first_value(self, prop: str) -> str | None:
        """Value of the first child refining this item with `prop`, if any."""
        refined_by = self.children.get(prop)
        return refined_by[0].value if refined_by else None

    def all_values(self, prop: str) -> list[str]:
        return [child.value for child in self.children.get(prop, [])]

    def to_value(self) -> Any:
        """Serialize for the extension bag.

        Items without children serialize to their raw text; items with
        children to a mapping of child property to child value plus "@value".
        """
        if not self.children:
            return self.value
        mapped: dict[str, Any] = {}
        for refined_by in self.children.values():
            for child in refined_by:
                mapped[child.property] = child.to_value()
        mapped["@value"] = self.value
        return mapped


@dataclass(frozen=True)
class EpubLink:
    """A `<link>` declaration from the metadata block."""

    href: str
    rels: frozenset[str] = frozenset()
    media_type: str | None = None
    refines: str | None = None
    properties: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EpubMetadata:
    """Result of parsing a `<metadata>` element.

    Attributes:
        global_items: Root-level items (no `refines`), grouped by property.
        refine_items: Items refining something outside the item set (e.g. a
            manifest item), grouped by refined id then by property.
        links: `<link>` declarations in document order.
    """

    global_items: dict[str, list[MetadataItem]] = field(default_factory=dict)
    refine_items: dict[str, dict[str, list[MetadataItem]]] = field(default_factory=dict)
    links: list[EpubLink] = field(default_factory=list)


@dataclass(frozen=True)
class LocalizedString:
    """A string with one translation per language tag.

    The None key holds a translation whose language is unknown.
    """

    translations: dict[str | None, str] = field(default_factory=dict)

    @classmethod
    def from_string(cls, value: str, lang: str | None = None) -> "LocalizedString":
        return cls({lang or None: value})

    @classmethod
    def from_strings(cls, strings: Mapping[str | None, str]) -> "LocalizedString":
        return cls({(lang or None): value for lang, value in strings.items()})

    @property
    def string(self) -> str:
        """The default translation: the first one declared."""
        return next(iter(self.translations.values()), "")

    def get(self, lang: str | None) -> str | None:
        return self.translations.get(lang or None)

    def to_value(self) -> str | dict[str, str]:
        """JSON-ready form: a bare string when unlocalized, else lang -> string."""
        if list(self.translations) == [None]:
            return self.translations[None]
        return {(lang or "und"): value for lang, value in self.translations.items()}


@dataclass(frozen=True)
class Title:
    value: LocalizedString
    file_as: LocalizedString | None = None
    type: str | None = None
    display_seq: int | None = None


@dataclass(frozen=True)
class Subject:
    localized_name: LocalizedString
    localized_sort_as: LocalizedString | None = None
    scheme: str | None = None
    code: str | None = None

    @property
    def name(self) -> str:
        return self.localized_name.string

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.localized_name.to_value()}
        if self.localized_sort_as is not None:
            result["sortAs"] = self.localized_sort_as.to_value()
        if self.scheme is not None:
            result["scheme"] = self.scheme
        if self.code is not None:
            result["code"] = self.code
        return result


@dataclass(frozen=True)
class Contributor:
    localized_name: LocalizedString
    localized_sort_as: LocalizedString | None = None
    roles: frozenset[str] = frozenset()
    identifier: str | None = None
    position: float | None = None

    @property
    def name(self) -> str:
        return self.localized_name.string

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.localized_name.to_value()}
        if self.localized_sort_as is not None:
            result["sortAs"] = self.localized_sort_as.to_value()
        if self.roles:
            result["role"] = sorted(self.roles)
        if self.identifier is not None:
            result["identifier"] = self.identifier
        if self.position is not None:
            result["position"] = self.position
        return result


@dataclass(frozen=True)
class Collection:
    """A collection or series the publication belongs to."""

    localized_name: LocalizedString
    localized_sort_as: LocalizedString | None = None
    identifier: str | None = None
    position: float | None = None

    @property
    def name(self) -> str:
        return self.localized_name.string

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.localized_name.to_value()}
        if self.localized_sort_as is not None:
            result["sortAs"] = self.localized_sort_as.to_value()
        if self.identifier is not None:
            result["identifier"] = self.identifier
        if self.position is not None:
            result["position"] = self.position
        return result


class ReadingProgression(str, Enum):
    LTR = "ltr"
    RTL = "rtl"
    AUTO = "auto"


class Overflow(str, Enum):
    AUTO = "auto"
    PAGINATED = "paginated"
    SCROLLED = "scrolled"


class Orientation(str, Enum):
    AUTO = "auto"
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class Spread(str, Enum):
    AUTO = "auto"
    BOTH = "both"
    NONE = "none"
    LANDSCAPE = "landscape"


class EpubLayout(str, Enum):
    FIXED = "fixed"
    REFLOWABLE = "reflowable"


@dataclass(frozen=True)
class Presentation:
    """Rendition hints for a reading system."""

    overflow: Overflow = Overflow.AUTO
    continuous: bool = False
    layout: EpubLayout = EpubLayout.REFLOWABLE
    orientation: Orientation = Orientation.AUTO
    spread: Spread = Spread.AUTO

    def to_dict(self) -> dict[str, Any]:
        return {
            "overflow": self.overflow.value,
            "continuous": self.continuous,
            "layout": self.layout.value,
            "orientation": self.orientation.value,
            "spread": self.spread.value,
        }


@dataclass
class Metadata:
    """Structured publication metadata adapted from an OPF package.

    Every field has a usable default, since even a badly-formed package must
    still yield something a reading system can display.
    """

    localized_title: LocalizedString
    identifier: str | None = None
    localized_subtitle: LocalizedString | None = None
    localized_sort_as: LocalizedString | None = None
    languages: list[str] = field(default_factory=list)
    published: datetime | None = None
    modified: datetime | None = None
    description: str | None = None
    cover: str | None = None
    duration: float | None = None
    subjects: list[Subject] = field(default_factory=list)
    reading_progression: ReadingProgression = ReadingProgression.AUTO
    presentation: Presentation = field(default_factory=Presentation)
    belongs_to_collections: list[Collection] = field(default_factory=list)
    belongs_to_series: list[Collection] = field(default_factory=list)
    authors: list[Contributor] = field(default_factory=list)
    translators: list[Contributor] = field(default_factory=list)
    editors: list[Contributor] = field(default_factory=list)
    publishers: list[Contributor] = field(default_factory=list)
    artists: list[Contributor] = field(default_factory=list)
    illustrators: list[Contributor] = field(default_factory=list)
    colorists: list[Contributor] = field(default_factory=list)
    narrators: list[Contributor] = field(default_factory=list)
    contributors: list[Contributor] = field(default_factory=list)
    other_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        """Convenience property: the default translation of the title."""
        return self.localized_title.string

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready mapping, omitting empty fields.

        Extension metadata goes in first so core fields win on a key clash.
        """
        result: dict[str, Any] = dict(self.other_metadata)
        result["title"] = self.localized_title.to_value()
        if self.identifier is not None:
            result["identifier"] = self.identifier
        if self.localized_subtitle is not None:
            result["subtitle"] = self.localized_subtitle.to_value()
        if self.localized_sort_as is not None:
            result["sortAs"] = self.localized_sort_as.to_value()
        if self.languages:
            result["language"] = list(self.languages)
        if self.published is not None:
            result["published"] = self.published.isoformat()
        if self.modified is not None:
            result["modified"] = self.modified.isoformat()
        if self.description is not None:
            result["description"] = self.description
        if self.duration is not None:
            result["duration"] = self.duration
        if self.subjects:
            result["subject"] = [subject.to_dict() for subject in self.subjects]
        result["readingProgression"] = self.reading_progression.value

        roles = {
            "author": self.authors,
            "translator": self.translators,
            "editor": self.editors,
            "publisher": self.publishers,
            "artist": self.artists,
            "illustrator": self.illustrators,
            "colorist": self.colorists,
            "narrator": self.narrators,
            "contributor": self.contributors,
        }
        for key, people in roles.items():
            if people:
                result[key] = [person.to_dict() for person in people]

        belongs_to: dict[str, Any] = {}
        if self.belongs_to_collections:
            belongs_to["collection"] = [c.to_dict() for c in self.belongs_to_collections]
        if self.belongs_to_series:
            belongs_to["series"] = [c.to_dict() for c in self.belongs_to_series]
        if belongs_to:
            result["belongsTo"] = belongs_to
        return result
