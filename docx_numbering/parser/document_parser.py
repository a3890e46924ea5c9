"""Parse document.xml into paragraphs carrying list metadata."""
from __future__ import annotations

from typing import List, Optional
from xml.etree import ElementTree as ET

from docx_numbering.model.elements import NumberingInfo, ParagraphElement, RunFragment
from docx_numbering.utils.logger import get_logger
from docx_numbering.utils.xml_utils import Namespaces, get_int_attr, local_name, qualify

LOGGER = get_logger(__name__)


class DocumentParser:
    """Collects body paragraphs, including those nested in tables, in document order."""

    def __init__(self, package) -> None:
        self._package = package

    def parse(self) -> List[ParagraphElement]:
        root = self._package.require_document_xml().getroot()
        body = root.find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("document.xml missing body element")
            return []
        paragraphs: List[ParagraphElement] = []
        self._collect(body, paragraphs)
        return paragraphs

    def _collect(self, container: ET.Element, paragraphs: List[ParagraphElement]) -> None:
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "p":
                paragraphs.append(self.parse_paragraph(child))
            elif tag == "tbl":
                for cell_el in child.iterfind("w:tr/w:tc", Namespaces.WORD):
                    self._collect(cell_el, paragraphs)
            elif tag == "sdt":
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    self._collect(content, paragraphs)

    def parse_paragraph(self, paragraph_el: ET.Element) -> ParagraphElement:
        runs = [
            RunFragment(text="".join(t.text or "" for t in run_el.iterfind("w:t", Namespaces.WORD)))
            for run_el in paragraph_el.iter(qualify("w:r"))
        ]
        style_el = paragraph_el.find("w:pPr/w:pStyle", Namespaces.WORD)
        style_id = style_el.attrib.get(qualify("w:val")) if style_el is not None else None
        return ParagraphElement(runs=runs, style_id=style_id, numbering=self._extract_numbering_info(paragraph_el))

    def _extract_numbering_info(self, paragraph_el: ET.Element) -> Optional[NumberingInfo]:
        num_pr = paragraph_el.find("w:pPr/w:numPr", Namespaces.WORD)
        if num_pr is None:
            return None
        num_id = get_int_attr(num_pr, "w:numId", "w:val")
        # numId 0 is Word's marker for "numbering removed".
        if num_id is None or num_id <= 0:
            return None
        level = get_int_attr(num_pr, "w:ilvl", "w:val")
        return NumberingInfo(num_id=num_id, level=level or 0)
