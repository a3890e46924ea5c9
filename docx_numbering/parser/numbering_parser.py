"""Parse numbering.xml into numbering model definitions."""
from __future__ import annotations

from copy import deepcopy
from typing import Dict, List, Optional
from xml.etree import ElementTree as ET

from docx_numbering.model.numbering_model import (
    NumberingCatalog,
    NumberingInstance,
    NumberingLevel,
    NumberingOverride,
    NumberingTemplate,
    StyleKind,
)
from docx_numbering.utils.logger import get_logger
from docx_numbering.utils.xml_utils import Namespaces, get_int_attr, qualify

LOGGER = get_logger(__name__)

_ABSTRACT_NUM = qualify("w:abstractNum")
_NUM = qualify("w:num")
_NUM_PIC_BULLET = qualify("w:numPicBullet")


class NumberingParser:
    """Parser for numbering definitions defined in numbering.xml."""

    def __init__(self, numbering_xml: Optional[ET.ElementTree]) -> None:
        self._numbering_xml = numbering_xml

    def parse(self) -> NumberingCatalog:
        if self._numbering_xml is None:
            return NumberingCatalog()

        root = self._numbering_xml.getroot()
        templates = [self.parse_template(el) for el in self._with_id(root, "w:abstractNum", "w:abstractNumId")]
        instances = self._parse_nums(root)
        preamble = [deepcopy(child) for child in root if child.tag == _NUM_PIC_BULLET]
        trailer = [deepcopy(child) for child in root if child.tag not in (_ABSTRACT_NUM, _NUM, _NUM_PIC_BULLET)]
        LOGGER.debug("Parsed %d numbering templates and %d instances", len(templates), len(instances))
        return NumberingCatalog(templates=templates, instances=instances, preamble=preamble, trailer=trailer)

    # ------------------------------------------------------------------
    def parse_template(self, abstract_el: ET.Element) -> NumberingTemplate:
        """Build a template record from a single ``w:abstractNum`` element."""
        template_id = get_int_attr(abstract_el, None, "w:abstractNumId")
        if template_id is None:
            raise ValueError("abstractNum element without a numeric w:abstractNumId")
        levels = self._parse_levels(abstract_el)
        name_el = abstract_el.find("w:name", Namespaces.WORD)
        name = name_el.attrib.get(qualify("w:val")) if name_el is not None else None
        return NumberingTemplate(
            template_id=template_id,
            style_kind=self._style_kind(levels),
            element=deepcopy(abstract_el),
            levels=levels,
            name=name,
        )

    def _parse_levels(self, abstract_el: ET.Element) -> Dict[int, NumberingLevel]:
        levels: Dict[int, NumberingLevel] = {}
        for lvl_el in abstract_el.findall("w:lvl", Namespaces.WORD):
            level_index = get_int_attr(lvl_el, None, "w:ilvl")
            if level_index is None:
                continue
            levels[level_index] = NumberingLevel(
                level_index=level_index,
                start=get_int_attr(lvl_el, "w:start", "w:val"),
                num_format=self._get_attr(lvl_el, "w:numFmt", "w:val"),
                level_text=self._get_attr(lvl_el, "w:lvlText", "w:val"),
                alignment=self._get_attr(lvl_el, "w:lvlJc", "w:val"),
            )
        return levels

    def _parse_nums(self, root: ET.Element) -> List[NumberingInstance]:
        instances: List[NumberingInstance] = []
        for num_el in self._with_id(root, "w:num", "w:numId"):
            template_id = get_int_attr(num_el, "w:abstractNumId", "w:val")
            if template_id is None:
                LOGGER.warning("w:num %s has no w:abstractNumId reference", num_el.get(qualify("w:numId")))
            instances.append(
                NumberingInstance(
                    instance_id=get_int_attr(num_el, None, "w:numId"),  # type: ignore[arg-type]
                    template_id=template_id,
                    overrides=self._parse_overrides(num_el),
                    element=deepcopy(num_el),
                )
            )
        return instances

    def _parse_overrides(self, num_el: ET.Element) -> Dict[int, NumberingOverride]:
        overrides: Dict[int, NumberingOverride] = {}
        for override_el in num_el.findall("w:lvlOverride", Namespaces.WORD):
            level_index = get_int_attr(override_el, None, "w:ilvl")
            if level_index is None:
                continue
            overrides[level_index] = NumberingOverride(
                level_index=level_index,
                start_override=get_int_attr(override_el, "w:startOverride", "w:val"),
            )
        return overrides

    # ------------------------------------------------------------------
    def _with_id(self, root: ET.Element, tag: str, id_attr: str) -> List[ET.Element]:
        found = []
        for element in root.findall(tag, Namespaces.WORD):
            if get_int_attr(element, None, id_attr) is None:
                LOGGER.warning("Skipping %s without numeric %s", tag, id_attr)
                continue
            found.append(element)
        return found

    def _get_attr(self, element: ET.Element, child_name: str, attr_name: str) -> Optional[str]:
        target = element.find(child_name, Namespaces.WORD)
        if target is None:
            return None
        return target.attrib.get(qualify(attr_name))

    @staticmethod
    def _style_kind(levels: Dict[int, NumberingLevel]) -> Optional[StyleKind]:
        first = levels.get(0)
        if first is None or first.num_format is None:
            return None
        if first.num_format == "bullet":
            return StyleKind.BULLETED
        return StyleKind.NUMBERED
