# ABOUTME: Adapts resolved OPF metadata items into structured publication metadata.
# ABOUTME: Handles titles, contributors, collections, subjects, presentation and extensions.

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from opfmeta.formats.dates import parse_iso8601
from opfmeta.metadata.clock import parse_clock_value
from opfmeta.metadata.types import (
    Collection,
    Contributor,
    EpubLayout,
    LocalizedString,
    Metadata,
    MetadataItem,
    Orientation,
    Overflow,
    Presentation,
    ReadingProgression,
    Spread,
    Subject,
    Title,
)
from opfmeta.metadata.vocab import DCTERMS, MEDIA, META, RENDITION

logger = logging.getLogger(__name__)

# Roles with a dedicated accessor; everything else lands in the None bucket.
KNOWN_ROLES: frozenset[str] = frozenset({"aut", "trl", "edt", "pbl", "art", "ill", "clr", "nrt"})

# Properties consumed by the adapter, kept out of the extension bag.
RESERVED_PROPERTIES: frozenset[str] = frozenset(
    [
        DCTERMS + name
        for name in (
            "identifier",
            "language",
            "title",
            "date",
            "modified",
            "description",
            "duration",
            "creator",
            "publisher",
            "contributor",
        )
    ]
    + [MEDIA + name for name in ("narrator", "duration")]
    + [RENDITION + name for name in ("flow", "spread", "orientation", "layout")]
)

_SUBJECT_SEPARATOR_RE = re.compile(r"[,;]")


@dataclass(frozen=True)
class AdapterConfig:
    """Publication-level context the adapter needs beyond the metadata items.

    Attributes:
        epub_version: Package version; below 3.0 the EPUB 2 conventions apply.
        fallback_title: Title to use when the package declares none.
        unique_identifier_id: Id of the identifier named by `package@unique-identifier`.
        reading_progression: From the spine's `page-progression-direction`.
        display_options: Legacy iBooks display options (e.g. "fixed-layout").
    """

    epub_version: float = 3.0
    fallback_title: str = ""
    unique_identifier_id: str | None = None
    reading_progression: ReadingProgression = ReadingProgression.AUTO
    display_options: dict[str, str] = field(default_factory=dict)

    @property
    def is_legacy(self) -> bool:
        return self.epub_version < 3.0


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.debug("Ignoring non-numeric value %r", value)
        return None


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-integer value %r", value)
        return None


def _localized_string(item: MetadataItem, default_lang: str | None) -> LocalizedString:
    """The item's value plus its alternate scripts, keyed by language."""
    values = {item.lang: item.value}
    for alternate in item.children.get(META + "alternate-script", []):
        values[alternate.lang] = alternate.value
    return LocalizedString.from_strings(
        {(lang or default_lang): value for lang, value in values.items()}
    )


def _file_as(item: MetadataItem, default_lang: str | None) -> LocalizedString | None:
    refined_by = item.children.get(META + "file-as")
    if not refined_by:
        return None
    sort_key = refined_by[0]
    return LocalizedString.from_string(sort_key.value, sort_key.lang or default_lang)


def to_title(item: MetadataItem, default_lang: str | None) -> Title:
    return Title(
        value=_localized_string(item, default_lang),
        file_as=_file_as(item, default_lang),
        type=item.first_value(META + "title-type"),
        display_seq=_parse_int(item.first_value(META + "display-seq")),
    )


def to_subject(item: MetadataItem, default_lang: str | None) -> Subject:
    return Subject(
        localized_name=_localized_string(item, default_lang),
        localized_sort_as=_file_as(item, default_lang),
        scheme=item.first_value(META + "authority"),
        code=item.first_value(META + "term"),
    )


def to_contributor(
    item: MetadataItem, default_lang: str | None, default_role: str | None = None
) -> Contributor:
    """Build a Contributor; `default_role` applies only without explicit roles."""
    roles = item.all_values(META + "role")
    if not roles and default_role is not None:
        roles = [default_role]
    return Contributor(
        localized_name=_localized_string(item, default_lang),
        localized_sort_as=_file_as(item, default_lang),
        roles=frozenset(roles),
        identifier=item.first_value(DCTERMS + "identifier"),
        position=_parse_float(item.first_value(META + "group-position")),
    )


def to_collection(item: MetadataItem, default_lang: str | None) -> tuple[str | None, Collection]:
    """Build a (collection-type, Collection) pair from a belongs-to-collection item."""
    collection = Collection(
        localized_name=_localized_string(item, default_lang),
        localized_sort_as=_file_as(item, default_lang),
        identifier=item.first_value(DCTERMS + "identifier"),
        position=_parse_float(item.first_value(META + "group-position")),
    )
    return item.first_value(META + "collection-type"), collection


def distribute_by_role(contributors: list[Contributor]) -> dict[str | None, list[Contributor]]:
    """Bucket contributors by known role.

    A contributor appears under each known role it has; one with no known
    role goes to the None bucket only.
    """
    buckets: dict[str | None, list[Contributor]] = {}
    for contributor in contributors:
        known = [role for role in sorted(contributor.roles) if role in KNOWN_ROLES]
        if not known:
            buckets.setdefault(None, []).append(contributor)
        for role in known:
            buckets.setdefault(role, []).append(contributor)
    return buckets


def split_subject(subject: Subject) -> list[Subject]:
    """Explode a delimiter-separated subject into bare subjects."""
    lang, text = next(iter(subject.localized_name.translations.items()))
    names = [name.strip() for name in _SUBJECT_SEPARATOR_RE.split(text)]
    return [Subject(LocalizedString.from_string(name, lang)) for name in names if name]


class MetadataAdapter:
    """Base adapter over a property -> items mapping."""

    def __init__(self, items: dict[str, list[MetadataItem]], epub_version: float = 3.0) -> None:
        self.items = items
        self.epub_version = epub_version
        self.duration = parse_clock_value(self.first_value(MEDIA + "duration"))

    def first_value(self, prop: str) -> str | None:
        found = self.items.get(prop)
        return found[0].value if found else None


class LinkMetadataAdapter(MetadataAdapter):
    """Adapter for metadata refining a manifest item (e.g. a media overlay)."""


class PubMetadataAdapter(MetadataAdapter):
    """Adapter producing the publication-level Metadata.

    Every field is derived independently from the global items; a field that
    cannot be derived falls back to an empty or default value.
    """

    def __init__(self, items: dict[str, list[MetadataItem]], config: AdapterConfig) -> None:
        super().__init__(items, config.epub_version)
        self.config = config
        self.default_lang = self.first_value(DCTERMS + "language")

        self.identifier = self._identifier()
        self.languages = [item.value for item in items.get(DCTERMS + "language", [])]
        self.published = parse_iso8601(self.first_value(DCTERMS + "date"))
        self.modified = parse_iso8601(self.first_value(DCTERMS + "modified"))
        self.description = self.first_value(DCTERMS + "description")
        self.cover = self.first_value("cover")
        self.localized_title, self.localized_subtitle, self.localized_sort_as = self._titles()
        self.belongs_to_series, self.belongs_to_collections = self._collections()
        self.subjects = self._subjects()
        self._contributors = self._all_contributors()
        self.presentation = self._presentation()
        self.other_metadata = self._other_metadata()

    def contributors(self, role: str | None) -> list[Contributor]:
        """Contributors with the given known role, or the unclassified ones for None."""
        return list(self._contributors.get(role, []))

    def metadata(self) -> Metadata:
        return Metadata(
            identifier=self.identifier,
            modified=self.modified,
            published=self.published,
            languages=self.languages,
            localized_title=self.localized_title,
            localized_sort_as=self.localized_sort_as,
            localized_subtitle=self.localized_subtitle,
            duration=self.duration,
            subjects=self.subjects,
            description=self.description,
            cover=self.cover,
            reading_progression=self.config.reading_progression,
            presentation=self.presentation,
            belongs_to_collections=self.belongs_to_collections,
            belongs_to_series=self.belongs_to_series,
            other_metadata=self.other_metadata,
            authors=self.contributors("aut"),
            translators=self.contributors("trl"),
            editors=self.contributors("edt"),
            publishers=self.contributors("pbl"),
            artists=self.contributors("art"),
            illustrators=self.contributors("ill"),
            colorists=self.contributors("clr"),
            narrators=self.contributors("nrt"),
            contributors=self.contributors(None),
        )

    def _identifier(self) -> str | None:
        identifiers = self.items.get(DCTERMS + "identifier", [])
        by_id = {item.id: item.value for item in identifiers if item.id is not None}
        unique_id = self.config.unique_identifier_id
        if unique_id is not None and unique_id in by_id:
            return by_id[unique_id]
        return identifiers[0].value if identifiers else None

    def _titles(
        self,
    ) -> tuple[LocalizedString, LocalizedString | None, LocalizedString | None]:
        """The main title, the first subtitle and the title's sort key."""
        titles = [
            to_title(item, self.default_lang) for item in self.items.get(DCTERMS + "title", [])
        ]
        main_title = next((title for title in titles if title.type == "main"), None)
        if main_title is None and titles:
            main_title = titles[0]

        if main_title is not None:
            value = main_title.value
        else:
            value = LocalizedString.from_string(self.config.fallback_title)

        # sorted() is stable; titles without a display-seq go last.
        subtitles = sorted(
            (title for title in titles if title.type == "subtitle"),
            key=lambda title: (title.display_seq is None, title.display_seq or 0),
        )
        subtitle = subtitles[0].value if subtitles else None

        if main_title is not None and main_title.file_as is not None:
            return value, subtitle, main_title.file_as
        title_sort = self.first_value("calibre:title_sort")
        sort_as = LocalizedString.from_string(title_sort) if title_sort is not None else None
        return value, subtitle, sort_as

    def _collections(self) -> tuple[list[Collection], list[Collection]]:
        """Series and other collections the publication belongs to."""
        if self.config.is_legacy:
            series_items = self.items.get("calibre:series")
            if not series_items:
                return [], []
            series = series_items[0]
            legacy = Collection(
                localized_name=LocalizedString.from_string(series.value, series.lang),
                position=_parse_float(self.first_value("calibre:series_index")),
            )
            return [legacy], []

        pairs = [
            to_collection(item, self.default_lang)
            for item in self.items.get(META + "belongs-to-collection", [])
        ]
        series = [collection for kind, collection in pairs if kind == "series"]
        collections = [collection for kind, collection in pairs if kind != "series"]
        return series, collections

    def _subjects(self) -> list[Subject]:
        subjects = [
            to_subject(item, self.default_lang) for item in self.items.get(DCTERMS + "subject", [])
        ]
        if len(subjects) == 1:
            subject = subjects[0]
            bare = (
                len(subject.localized_name.translations) == 1
                and subject.code is None
                and subject.scheme is None
                and subject.localized_sort_as is None
            )
            if bare:
                return split_subject(subject)
        return subjects

    def _all_contributors(self) -> dict[str | None, list[Contributor]]:
        def convert(prop: str, default_role: str | None = None) -> list[Contributor]:
            return [
                to_contributor(item, self.default_lang, default_role)
                for item in self.items.get(prop, [])
            ]

        contributors = (
            convert(DCTERMS + "creator", "aut")
            + convert(DCTERMS + "publisher", "pbl")
            + convert(MEDIA + "narrator", "nrt")
            + convert(DCTERMS + "contributor")
        )
        return distribute_by_role(contributors)

    def _presentation(self) -> Presentation:
        flow = self.first_value(RENDITION + "flow")
        if flow == "paginated":
            overflow, continuous = Overflow.PAGINATED, False
        elif flow == "scrolled-continuous":
            overflow, continuous = Overflow.SCROLLED, True
        elif flow == "scrolled-doc":
            overflow, continuous = Overflow.SCROLLED, False
        else:
            overflow, continuous = Overflow.AUTO, False

        if self.config.is_legacy:
            fixed = self.config.display_options.get("fixed-layout") == "true"
        else:
            fixed = self.first_value(RENDITION + "layout") == "pre-paginated"
        layout = EpubLayout.FIXED if fixed else EpubLayout.REFLOWABLE

        orientation = {
            "landscape": Orientation.LANDSCAPE,
            "portrait": Orientation.PORTRAIT,
        }.get(self.first_value(RENDITION + "orientation") or "", Orientation.AUTO)

        spread = {
            "none": Spread.NONE,
            "landscape": Spread.LANDSCAPE,
            "both": Spread.BOTH,
            "portrait": Spread.BOTH,
        }.get(self.first_value(RENDITION + "spread") or "", Spread.AUTO)

        return Presentation(
            overflow=overflow,
            continuous=continuous,
            layout=layout,
            orientation=orientation,
            spread=spread,
        )

    def _other_metadata(self) -> dict[str, Any]:
        other: dict[str, Any] = {}
        for prop, found in self.items.items():
            if prop in RESERVED_PROPERTIES:
                continue
            values = [item.to_value() for item in found]
            other[prop] = values[0] if len(values) == 1 else values
        other["presentation"] = self.presentation.to_dict()
        return other
