"""Serialize a numbering catalog back into numbering.xml bytes."""
from __future__ import annotations

from copy import deepcopy
from xml.etree import ElementTree as ET

from docx_numbering.model.numbering_model import NumberingCatalog, NumberingInstance, NumberingTemplate
from docx_numbering.utils.xml_utils import qualify, to_xml_bytes


class NumberingWriter:
    """Writes templates and instances in schema order (abstractNum before num)."""

    def __init__(self, catalog: NumberingCatalog) -> None:
        self._catalog = catalog

    def to_bytes(self) -> bytes:
        return to_xml_bytes(self.build())

    def build(self) -> ET.Element:
        root = ET.Element(qualify("w:numbering"))
        for element in self._catalog.preamble:
            root.append(deepcopy(element))
        for template in self._catalog.templates:
            root.append(self._template_element(template))
        for instance in self._catalog.instances:
            root.append(self._instance_element(instance))
        for element in self._catalog.trailer:
            root.append(deepcopy(element))
        return root

    def _template_element(self, template: NumberingTemplate) -> ET.Element:
        element = deepcopy(template.element)
        element.set(qualify("w:abstractNumId"), str(template.template_id))
        return element

    def _instance_element(self, instance: NumberingInstance) -> ET.Element:
        if instance.element is not None:
            element = deepcopy(instance.element)
        else:
            element = ET.Element(qualify("w:num"))
        element.set(qualify("w:numId"), str(instance.instance_id))
        if instance.template_id is None:
            return element
        reference = element.find(qualify("w:abstractNumId"))
        if reference is None:
            reference = ET.Element(qualify("w:abstractNumId"))
            element.insert(0, reference)
        reference.set(qualify("w:val"), str(instance.template_id))
        return element
