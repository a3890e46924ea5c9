"""Utilities for reading and extending Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Mapping, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_numbering.utils.xml_utils import Namespaces, parse_xml, to_xml_bytes

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_NUMBERING = f"{WORD_REL_NS}/numbering"

MAIN_DOCUMENT_PART = "word/document.xml"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    source_part: str
    r_id: str
    target: str
    rel_type: str
    is_external: bool = False
    resolved_target: Optional[str] = None


class Relationships:
    """Aggregated relationship mappings for the DOCX package."""

    def __init__(self, relationships: Dict[str, Dict[str, Relationship]]) -> None:
        self._by_source = relationships

    @classmethod
    def from_package(cls, parts: Mapping[str, bytes]) -> "Relationships":
        """Collect relationships from all .rels parts within the package."""
        by_source: Dict[str, Dict[str, Relationship]] = {}
        for name, payload in parts.items():
            if not name.endswith(".rels"):
                continue
            source, base_dir = cls._source_and_base_from_rel_part(name)
            parsed = cls._parse_relationship_part(source, base_dir, parse_xml(payload))
            if parsed:
                by_source[source] = parsed
        return cls(by_source)

    def for_source(self, part_name: str) -> Dict[str, Relationship]:
        """Return all relationships for a given source part."""
        return dict(self._by_source.get(part_name, {}))

    def target_of_type(self, part_name: str, rel_type: str) -> Optional[str]:
        """Return the resolved part name of the first relationship of ``rel_type``."""
        for rel in self.for_source(part_name).values():
            if rel.rel_type == rel_type and not rel.is_external:
                return rel.resolved_target
        return None

    @classmethod
    def _parse_relationship_part(
        cls, source_part: str, base_dir: PurePosixPath, tree: ET.ElementTree
    ) -> Dict[str, Relationship]:
        result: Dict[str, Relationship] = {}
        for rel_el in tree.findall(".//rel:Relationship", Namespaces.RELS):
            r_id = rel_el.attrib["Id"]
            target = rel_el.attrib.get("Target", "")
            is_external = rel_el.attrib.get("TargetMode") == "External"
            result[r_id] = Relationship(
                source_part=source_part,
                r_id=r_id,
                target=target,
                rel_type=rel_el.attrib.get("Type", ""),
                is_external=is_external,
                resolved_target=cls._resolve_target_path(base_dir, target, is_external),
            )
        return result

    @staticmethod
    def _source_and_base_from_rel_part(rel_part: str) -> Tuple[str, PurePosixPath]:
        if rel_part == "_rels/.rels":
            return "", PurePosixPath("")
        if "/_rels/" in rel_part:
            folder, suffix = rel_part.split("/_rels/", 1)
            return f"{folder}/{suffix[:-5]}", PurePosixPath(folder)
        return rel_part[:-5], PurePosixPath(rel_part).parent

    @staticmethod
    def _resolve_target_path(base_dir: PurePosixPath, target: str, is_external: bool) -> Optional[str]:
        if not target:
            return None
        if is_external:
            return target
        if target.startswith("/"):
            return target.lstrip("/")
        return posixpath.normpath(base_dir.joinpath(target).as_posix())


def append_relationship(rels_xml: Optional[bytes], rel_type: str, target: str) -> Tuple[bytes, str]:
    """Add a relationship to a .rels part, returning the new payload and its id."""
    if rels_xml is None:
        root = ET.Element(f"{{{Namespaces.RELS['rel']}}}Relationships")
    else:
        root = parse_xml(rels_xml).getroot()
    taken = {el.attrib.get("Id") for el in root.findall("rel:Relationship", Namespaces.RELS)}
    index = len(taken) + 1
    while f"rId{index}" in taken:
        index += 1
    r_id = f"rId{index}"
    ET.SubElement(
        root,
        f"{{{Namespaces.RELS['rel']}}}Relationship",
        {"Id": r_id, "Type": rel_type, "Target": target},
    )
    return to_xml_bytes(root, default_namespace=Namespaces.RELS["rel"]), r_id
