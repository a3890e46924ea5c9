"""Helper functions to work with XML namespaces, parsing and serialization."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
from xml.etree import ElementTree as ET


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    CONTENT_TYPES: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.CONTENT_TYPES = {  # type: ignore[attr-defined]
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
}

# Prefixes Word expects to see when it reads the parts back.
_SERIALIZATION_PREFIXES = {
    "w": Namespaces.WORD["w"],
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "w14": "http://schemas.microsoft.com/office/word/2010/wordml",
    "w15": "http://schemas.microsoft.com/office/word/2012/wordml",
    "v": "urn:schemas-microsoft-com:vml",
    "o": "urn:schemas-microsoft-com:office:office",
}
for _prefix, _uri in _SERIALIZATION_PREFIXES.items():
    ET.register_namespace(_prefix, _uri)


def parse_xml(data: bytes) -> ET.ElementTree:
    """Parse XML from raw bytes with sane defaults."""
    return ET.ElementTree(ET.fromstring(data))


def to_xml_bytes(root: ET.Element, default_namespace: Optional[str] = None) -> bytes:
    """Serialize an element as a standalone UTF-8 XML part."""
    body = ET.tostring(root, encoding="unicode", default_namespace=default_namespace)
    return b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n' + body.encode("utf-8")


def qualify(name: str, namespaces: Optional[Dict[str, str]] = None) -> str:
    """Expand a ``prefix:local`` name into ElementTree's ``{uri}local`` form."""
    prefix, local = name.split(":", 1)
    namespace = (namespaces or Namespaces.WORD)[prefix]
    return f"{{{namespace}}}{local}"


def local_name(tag: str) -> str:
    """Strip the ``{uri}`` part of a qualified tag."""
    return tag.split("}", 1)[-1]


def get_int_attr(element: ET.Element, child_name: Optional[str], attr_name: str) -> Optional[int]:
    """Read an integer ``w:`` attribute from ``element`` or one of its children."""
    target = element.find(child_name, Namespaces.WORD) if child_name else element
    if target is None:
        return None
    value = target.attrib.get(qualify(attr_name))
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
