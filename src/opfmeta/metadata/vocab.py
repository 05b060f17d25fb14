# ABOUTME: Namespaces, vocabularies and CURIE-style property resolution for OPF metadata.
# ABOUTME: Maps prefixed or bare property tokens to fully-qualified vocabulary IRIs.

import re
from enum import Enum

OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"

DCTERMS = "http://purl.org/dc/terms/"
META = "http://idpf.org/epub/vocab/package/meta/#"
LINK = "http://idpf.org/epub/vocab/package/link/#"
MEDIA = "http://www.idpf.org/epub/vocab/overlays/#"
RENDITION = "http://www.idpf.org/vocab/rendition/#"


class DefaultVocab(Enum):
    """Vocabulary that bare property names fall back to, per attribute context."""

    META = META
    LINK = LINK


# Prefixes every EPUB 3 reading system must know without a `prefix` declaration.
RESERVED_PREFIXES: dict[str, str] = {
    "dcterms": DCTERMS,
    "media": MEDIA,
    "rendition": RENDITION,
    "a11y": "http://www.idpf.org/epub/vocab/package/a11y/#",
    "marc": "http://id.loc.gov/vocabulary/",
    "onix": "http://www.editeur.org/ONIX/book/codelists/current.html#",
    "schema": "http://schema.org/",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "msv": "http://www.idpf.org/epub/vocab/structure/magazine/#",
    "prism": "http://www.prismstandard.org/specifications/3.0/PRISM_CV_Spec_3.0.htm#",
}

_PREFIX_DECLARATION_RE = re.compile(r"\s*([^:\s]+):\s*(\S+)")


def resolve_property(
    token: str,
    prefixes: dict[str, str],
    default_vocab: DefaultVocab | None = None,
) -> str | None:
    """Resolve a property token to a fully-qualified IRI.

    A token whose prefix is declared in `prefixes` has the prefix replaced by
    the mapped IRI. Any other token (bare, or with an unknown prefix) is
    appended to the default vocabulary. Without a default vocabulary such a
    token cannot be resolved and None is returned, as it is for empty tokens.
    """
    token = token.strip()
    if not token:
        return None

    prefix, sep, suffix = token.partition(":")
    if sep and prefix in prefixes:
        return prefixes[prefix] + suffix

    if default_vocab is None:
        return None
    return default_vocab.value + token


def parse_properties(attr: str | None) -> list[str]:
    """Split a whitespace-separated property attribute into tokens."""
    if not attr:
        return []
    return attr.split()


def parse_prefixes(attr: str | None) -> dict[str, str]:
    """Parse a package `prefix` attribute ("foaf: http://xmlns.com/foaf/spec/ ...")."""
    if not attr:
        return {}
    return dict(_PREFIX_DECLARATION_RE.findall(attr))


def build_prefix_map(prefix_attr: str | None) -> dict[str, str]:
    """Merge the reserved prefixes with a package's own declarations.

    Declared prefixes take precedence over reserved ones.
    """
    return {**RESERVED_PREFIXES, **parse_prefixes(prefix_attr)}
