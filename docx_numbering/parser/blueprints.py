"""Bundled list blueprints used to seed new numbering definitions."""
from __future__ import annotations

from pathlib import Path
from typing import Dict
from xml.etree import ElementTree as ET

from docx_numbering.errors import CorruptCatalog, UnsupportedStyle
from docx_numbering.model.numbering_model import NumberingTemplate, StyleKind
from docx_numbering.parser.numbering_parser import NumberingParser
from docx_numbering.utils.xml_utils import Namespaces, parse_xml, qualify

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"

DEFAULT_NUMBERING_RESOURCE = "default_numbering.xml"
BLUEPRINT_RESOURCES: Dict[StyleKind, str] = {
    StyleKind.BULLETED: "default_bullet_abstract.xml",
    StyleKind.NUMBERED: "default_decimal_abstract.xml",
}


def read_resource(name: str) -> bytes:
    """Return the raw bytes of a bundled resource."""
    return (RESOURCES_DIR / name).read_bytes()


def load_blueprint(style_kind: StyleKind, template_id: int) -> NumberingTemplate:
    """Load the blueprint for ``style_kind`` and stamp it with ``template_id``."""
    resource = BLUEPRINT_RESOURCES.get(style_kind) if isinstance(style_kind, StyleKind) else None
    if resource is None:
        raise UnsupportedStyle(f"Unable to create a list of style {style_kind!r}")

    root = parse_xml(read_resource(resource)).getroot()
    abstract_el = _single_template(root, resource)
    abstract_el.set(qualify("w:abstractNumId"), str(template_id))
    template = NumberingParser(None).parse_template(abstract_el)
    template.style_kind = style_kind
    return template


def _single_template(root: ET.Element, resource: str) -> ET.Element:
    if root.tag == qualify("w:abstractNum"):
        return root
    found = root.findall(".//w:abstractNum", Namespaces.WORD)
    if len(found) != 1:
        raise CorruptCatalog(f"Blueprint {resource} must hold exactly one abstractNum, found {len(found)}")
    return found[0]
