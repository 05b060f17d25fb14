# ABOUTME: Narrow XML element interface consumed by the metadata parser.
# ABOUTME: LxmlElement adapts lxml elements; the parser never touches raw markup.

from typing import Protocol

from lxml import etree

XML_NS = "http://www.w3.org/XML/1998/namespace"

_XML_LANG = f"{{{XML_NS}}}lang"


class ElementNode(Protocol):
    """Read-only view of a parsed XML element."""

    @property
    def name(self) -> str: ...

    @property
    def namespace(self) -> str: ...

    @property
    def id(self) -> str | None: ...

    @property
    def lang(self) -> str: ...

    @property
    def text(self) -> str | None: ...

    def get_first(self, name: str, namespace: str) -> "ElementNode | None": ...

    def get_all(self) -> list["ElementNode"]: ...

    def get_attr(self, name: str) -> str | None: ...

    def get_attr_ns(self, name: str, namespace: str) -> str | None: ...


class XmlParseError(Exception):
    """Raised when a document is not well-formed XML."""


class LxmlElement:
    """ElementNode backed by an lxml element."""

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    @classmethod
    def from_bytes(cls, data: bytes) -> "LxmlElement":
        """Parse a document and wrap its root element.

        Raises:
            XmlParseError: If the document is not well-formed.
        """
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(data, parser)
        except etree.XMLSyntaxError as exc:
            raise XmlParseError(str(exc)) from exc
        return cls(root)

    @property
    def element(self) -> etree._Element:
        return self._element

    @property
    def name(self) -> str:
        return etree.QName(self._element).localname

    @property
    def namespace(self) -> str:
        return etree.QName(self._element).namespace or ""

    @property
    def id(self) -> str | None:
        return self._element.get("id")

    @property
    def lang(self) -> str:
        """The element's xml:lang, inherited from the nearest ancestor declaring one."""
        node: etree._Element | None = self._element
        while node is not None:
            lang = node.get(_XML_LANG)
            if lang is not None:
                return lang.strip()
            node = node.getparent()
        return ""

    @property
    def text(self) -> str | None:
        """Concatenated text content, trimmed; None when the element has none."""
        content = "".join(self._element.itertext()).strip()
        return content or None

    def get_first(self, name: str, namespace: str) -> "LxmlElement | None":
        for child in self.get_all():
            if child.name == name and child.namespace == namespace:
                return child
        return None

    def get_all(self) -> list["LxmlElement"]:
        # Comments and processing instructions have non-string tags.
        return [LxmlElement(child) for child in self._element if isinstance(child.tag, str)]

    def get_attr(self, name: str) -> str | None:
        return self._element.get(name)

    def get_attr_ns(self, name: str, namespace: str) -> str | None:
        return self._element.get(f"{{{namespace}}}{name}")

    def __repr__(self) -> str:
        return f"LxmlElement({self._element.tag!r})"
