"""DOCX package access: archive parts plus the numbering catalog storage contract."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict
from xml.etree import ElementTree as ET

from docx_numbering.parser.rels_parser import MAIN_DOCUMENT_PART, RELTYPE_NUMBERING, Relationships, append_relationship
from docx_numbering.utils.logger import get_logger
from docx_numbering.utils.xml_utils import Namespaces, parse_xml, to_xml_bytes

LOGGER = get_logger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
DOCUMENT_XML_PATH = MAIN_DOCUMENT_PART
NUMBERING_XML_PATH = "word/numbering.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"

NUMBERING_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.numbering+xml"


@dataclass(slots=True)
class DocxPackage:
    """In-memory parts of a DOCX archive.

    Implements the storage side of the numbering catalog: ``catalog_exists``,
    ``read_catalog`` and ``write_catalog``.
    """

    raw_parts: Dict[str, bytes] = field(default_factory=dict)
    xml_cache: Dict[str, ET.ElementTree] = field(default_factory=dict)

    @classmethod
    def load(cls, docx_path: Path) -> "DocxPackage":
        """Open a DOCX archive and read every part into memory."""
        with zipfile.ZipFile(docx_path) as docx_zip:
            parts = {name: docx_zip.read(name) for name in docx_zip.namelist()}

        LOGGER.debug("Loaded %d parts from %s", len(parts), Path(docx_path).name)
        return cls(raw_parts=parts)

    def save(self, docx_path: Path) -> None:
        """Write all parts back into a DOCX archive, content types first."""
        names = sorted(self.raw_parts, key=lambda name: name != CONTENT_TYPES_PATH)
        with zipfile.ZipFile(docx_path, "w", compression=zipfile.ZIP_DEFLATED) as docx_zip:
            for name in names:
                docx_zip.writestr(name, self.raw_parts[name])
        LOGGER.debug("Wrote %d parts to %s", len(names), Path(docx_path).name)

    # ------------------------------------------------------------------
    # Public helpers
    def require_document_xml(self) -> ET.ElementTree:
        tree = self.get_xml_part(DOCUMENT_XML_PATH)
        if tree is None:
            raise ValueError("Primary document part missing from package")
        return tree

    def get_xml_part(self, name: str) -> ET.ElementTree | None:
        if name in self.xml_cache:
            return self.xml_cache[name]
        data = self.raw_parts.get(name)
        if data is None:
            return None
        tree = parse_xml(data)
        self.xml_cache[name] = tree
        return tree

    @property
    def numbering_part_name(self) -> str:
        """Part holding numbering.xml, as declared by the document relationships."""
        target = Relationships.from_package(self.raw_parts).target_of_type(MAIN_DOCUMENT_PART, RELTYPE_NUMBERING)
        return target or NUMBERING_XML_PATH

    # ------------------------------------------------------------------
    # Catalog storage
    def catalog_exists(self) -> bool:
        return self.numbering_part_name in self.raw_parts

    def read_catalog(self) -> bytes:
        return self.raw_parts[self.numbering_part_name]

    def write_catalog(self, data: bytes) -> None:
        part_name = self.numbering_part_name
        is_new = part_name not in self.raw_parts
        self.raw_parts[part_name] = data
        self.xml_cache.pop(part_name, None)
        if is_new:
            self._register_numbering_part(part_name)

    def _register_numbering_part(self, part_name: str) -> None:
        content_types = self.raw_parts.get(CONTENT_TYPES_PATH)
        if content_types is not None:
            self.raw_parts[CONTENT_TYPES_PATH] = self._with_override(content_types, part_name)
            self.xml_cache.pop(CONTENT_TYPES_PATH, None)

        relationships = Relationships.from_package(self.raw_parts)
        if relationships.target_of_type(MAIN_DOCUMENT_PART, RELTYPE_NUMBERING) is None:
            payload, r_id = append_relationship(
                self.raw_parts.get(DOCUMENT_RELS_PATH), RELTYPE_NUMBERING, "numbering.xml"
            )
            self.raw_parts[DOCUMENT_RELS_PATH] = payload
            self.xml_cache.pop(DOCUMENT_RELS_PATH, None)
            LOGGER.debug("Registered numbering part %s as %s", part_name, r_id)

    @staticmethod
    def _with_override(content_types: bytes, part_name: str) -> bytes:
        root = parse_xml(content_types).getroot()
        part_uri = f"/{part_name}"
        for override in root.findall("ct:Override", Namespaces.CONTENT_TYPES):
            if override.attrib.get("PartName") == part_uri:
                return content_types
        ET.SubElement(
            root,
            f"{{{Namespaces.CONTENT_TYPES['ct']}}}Override",
            {"PartName": part_uri, "ContentType": NUMBERING_CONTENT_TYPE},
        )
        return to_xml_bytes(root, default_namespace=Namespaces.CONTENT_TYPES["ct"])
