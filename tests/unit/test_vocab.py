# ABOUTME: Unit tests for CURIE-style property resolution and prefix parsing.
# ABOUTME: Covers registered prefixes, default vocabularies and the strict scheme case.

import pytest

from opfmeta.metadata.vocab import (
    DCTERMS,
    LINK,
    META,
    RENDITION,
    RESERVED_PREFIXES,
    DefaultVocab,
    build_prefix_map,
    parse_prefixes,
    parse_properties,
    resolve_property,
)


class TestResolveProperty:
    """Tests for resolve_property."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("dcterms:modified", DCTERMS + "modified"),
            ("rendition:layout", RENDITION + "layout"),
            ("schema:accessMode", "http://schema.org/accessMode"),
        ],
    )
    def test_registered_prefix_is_substituted(self, token: str, expected: str) -> None:
        """A registered prefix is replaced by its IRI, keeping the suffix."""
        assert resolve_property(token, RESERVED_PREFIXES, DefaultVocab.META) == expected

    def test_bare_token_uses_default_vocabulary(self) -> None:
        """A token without a colon is appended to the default vocabulary."""
        assert resolve_property("file-as", RESERVED_PREFIXES, DefaultVocab.META) == META + "file-as"

    def test_default_vocabulary_depends_on_context(self) -> None:
        """Link context resolves against the link vocabulary."""
        assert resolve_property("record", RESERVED_PREFIXES, DefaultVocab.LINK) == LINK + "record"

    def test_unregistered_prefix_uses_default_vocabulary(self) -> None:
        """An unknown prefix falls back to default vocabulary plus the whole token."""
        resolved = resolve_property("foo:bar", RESERVED_PREFIXES, DefaultVocab.META)
        assert resolved == META + "foo:bar"

    def test_caller_prefixes_are_used(self) -> None:
        """Prefixes supplied by the caller are honored."""
        prefixes = {"foaf": "http://xmlns.com/foaf/spec/"}
        resolved = resolve_property("foaf:name", prefixes, DefaultVocab.META)
        assert resolved == "http://xmlns.com/foaf/spec/name"

    def test_suffix_is_case_sensitive(self) -> None:
        """The suffix is kept exactly as written."""
        assert resolve_property("dcterms:Modified", RESERVED_PREFIXES) == DCTERMS + "Modified"

    def test_surrounding_whitespace_is_trimmed(self) -> None:
        """Whitespace around the token is ignored."""
        assert resolve_property("  title-type ", {}, DefaultVocab.META) == META + "title-type"

    @pytest.mark.parametrize("token", ["", "   "])
    def test_empty_token_is_none(self, token: str) -> None:
        """Empty tokens cannot be resolved."""
        assert resolve_property(token, RESERVED_PREFIXES, DefaultVocab.META) is None

    def test_without_default_vocabulary_unknown_prefix_is_none(self) -> None:
        """Without a default vocabulary, only registered prefixes resolve."""
        assert resolve_property("onix:codelist5", RESERVED_PREFIXES) is not None
        assert resolve_property("unknown:thing", RESERVED_PREFIXES) is None
        assert resolve_property("bare", RESERVED_PREFIXES) is None


class TestParseProperties:
    """Tests for whitespace tokenization of property attributes."""

    def test_splits_on_whitespace(self) -> None:
        assert parse_properties("  alternate  onix:record\tmarc21xml-record ") == [
            "alternate",
            "onix:record",
            "marc21xml-record",
        ]

    def test_missing_attribute_is_empty(self) -> None:
        assert parse_properties(None) == []
        assert parse_properties("") == []


class TestPrefixes:
    """Tests for package prefix attribute parsing."""

    def test_parses_declarations(self) -> None:
        """Each 'prefix: iri' pair becomes a mapping entry."""
        attr = "foaf: http://xmlns.com/foaf/spec/\n dbp: http://dbpedia.org/ontology/"
        assert parse_prefixes(attr) == {
            "foaf": "http://xmlns.com/foaf/spec/",
            "dbp": "http://dbpedia.org/ontology/",
        }

    def test_missing_attribute_is_empty(self) -> None:
        assert parse_prefixes(None) == {}

    def test_build_prefix_map_includes_reserved(self) -> None:
        """Reserved prefixes are always available."""
        prefixes = build_prefix_map(None)
        assert prefixes["dcterms"] == DCTERMS
        assert prefixes["rendition"] == RENDITION

    def test_declared_prefix_overrides_reserved(self) -> None:
        """A package may redefine a reserved prefix."""
        prefixes = build_prefix_map("schema: http://example.org/schema#")
        assert prefixes["schema"] == "http://example.org/schema#"
        assert prefixes["dcterms"] == DCTERMS
