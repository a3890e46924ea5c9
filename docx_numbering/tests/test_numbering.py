"""Tests for numbering parser and writer behavior."""
import unittest
from xml.etree import ElementTree as ET

from docx_numbering.errors import CorruptCatalog
from docx_numbering.model.numbering_model import StyleKind
from docx_numbering.parser.numbering_parser import NumberingParser
from docx_numbering.parser.numbering_writer import NumberingWriter
from docx_numbering.utils.xml_utils import Namespaces, parse_xml


NUMBERING_XML = """
<w:numbering xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:numPicBullet w:numPicBulletId="0"/>
  <w:abstractNum w:abstractNumId="1">
    <w:multiLevelType w:val="multilevel"/>
    <w:name w:val="List Bullet"/>
    <w:lvl w:ilvl="0">
      <w:start w:val="1"/>
      <w:numFmt w:val="bullet"/>
      <w:lvlText w:val="•"/>
      <w:lvlJc w:val="left"/>
      <w:pPr>
        <w:ind w:left="720" w:hanging="360"/>
      </w:pPr>
    </w:lvl>
    <w:lvl w:ilvl="1">
      <w:start w:val="1"/>
      <w:numFmt w:val="decimal"/>
      <w:lvlText w:val="%2."/>
    </w:lvl>
  </w:abstractNum>
  <w:abstractNum w:abstractNumId="4">
    <w:lvl w:ilvl="0">
      <w:numFmt w:val="upperRoman"/>
    </w:lvl>
  </w:abstractNum>
  <w:abstractNum w:abstractNumId="oops"/>
  <w:num w:numId="5">
    <w:abstractNumId w:val="1"/>
    <w:lvlOverride w:ilvl="0">
      <w:startOverride w:val="3"/>
    </w:lvlOverride>
  </w:num>
  <w:num w:numId="2">
    <w:abstractNumId w:val="4"/>
  </w:num>
  <w:numIdMacAtCleanup w:val="5"/>
</w:numbering>
"""


class NumberingParserTest(unittest.TestCase):
    """Ensure numbering parser captures definitions correctly."""

    def setUp(self) -> None:
        self.tree = ET.ElementTree(ET.fromstring(NUMBERING_XML))
        self.catalog = NumberingParser(self.tree).parse()

    def test_templates_parsed(self) -> None:
        template = self.catalog.get_template(1)
        self.assertIsNotNone(template)
        assert template
        self.assertEqual(template.name, "List Bullet")
        self.assertEqual(template.style_kind, StyleKind.BULLETED)
        self.assertIn(0, template.levels)
        level0 = template.levels[0]
        self.assertEqual(level0.num_format, "bullet")
        self.assertEqual(level0.level_text, "•")
        self.assertEqual(level0.alignment, "left")
        self.assertEqual(template.levels[1].num_format, "decimal")

    def test_style_kind_follows_first_level(self) -> None:
        template = self.catalog.get_template(4)
        assert template
        self.assertEqual(template.style_kind, StyleKind.NUMBERED)

    def test_templates_without_numeric_id_are_skipped(self) -> None:
        self.assertEqual([t.template_id for t in self.catalog.templates], [1, 4])

    def test_instances_and_overrides(self) -> None:
        instance = self.catalog.get_instance(5)
        self.assertIsNotNone(instance)
        assert instance
        self.assertEqual(instance.template_id, 1)
        self.assertIn(0, instance.overrides)
        self.assertEqual(instance.overrides[0].start_override, 3)

    def test_missing_part_gives_empty_catalog(self) -> None:
        catalog = NumberingParser(None).parse()
        self.assertEqual(catalog.templates, [])
        self.assertEqual(catalog.instances, [])

    def test_num_without_reference_keeps_its_id(self) -> None:
        xml = NUMBERING_XML.replace('<w:numIdMacAtCleanup', '<w:num w:numId="8"/><w:numIdMacAtCleanup')
        catalog = NumberingParser(ET.ElementTree(ET.fromstring(xml))).parse()
        instance = catalog.get_instance(8)
        assert instance
        self.assertIsNone(instance.template_id)
        self.assertEqual(catalog.max_instance_id(), 8)
        with self.assertRaises(CorruptCatalog):
            catalog.resolve_template(8)

        reloaded = NumberingParser(parse_xml(NumberingWriter(catalog).to_bytes())).parse()
        written = reloaded.get_instance(8)
        assert written
        self.assertIsNone(written.template_id)


class NumberingWriterTest(unittest.TestCase):
    """Saved numbering keeps bindings, overrides and schema order."""

    def setUp(self) -> None:
        self.catalog = NumberingParser(ET.ElementTree(ET.fromstring(NUMBERING_XML))).parse()

    def test_children_written_in_schema_order(self) -> None:
        root = NumberingWriter(self.catalog).build()
        tags = [child.tag.split("}")[-1] for child in root]
        self.assertEqual(
            tags,
            ["numPicBullet", "abstractNum", "abstractNum", "num", "num", "numIdMacAtCleanup"],
        )

    def test_reloaded_catalog_keeps_bindings_and_overrides(self) -> None:
        self.catalog.add_instance(6, 4)
        payload = NumberingWriter(self.catalog).to_bytes()
        self.assertTrue(payload.startswith(b"<?xml"))

        reloaded = NumberingParser(parse_xml(payload)).parse()
        bindings = {(i.instance_id, i.template_id) for i in reloaded.instances}
        self.assertEqual(bindings, {(5, 1), (2, 4), (6, 4)})
        instance = reloaded.get_instance(5)
        assert instance
        self.assertEqual(instance.overrides[0].start_override, 3)
        template = reloaded.get_template(1)
        assert template
        self.assertEqual(template.levels[0].level_text, "•")

    def test_new_instance_gets_abstract_reference(self) -> None:
        self.catalog.add_instance(9, 1)
        root = NumberingWriter(self.catalog).build()
        w = Namespaces.WORD["w"]
        num_els = [el for el in root.findall("w:num", Namespaces.WORD) if el.get(f"{{{w}}}numId") == "9"]
        self.assertEqual(len(num_els), 1)
        ref = num_els[0].find("w:abstractNumId", Namespaces.WORD)
        assert ref is not None
        self.assertEqual(ref.get(f"{{{w}}}val"), "1")

    def test_output_uses_word_prefix(self) -> None:
        payload = NumberingWriter(self.catalog).to_bytes()
        self.assertIn(b"<w:numbering", payload)
        self.assertIn(b'w:abstractNumId="1"', payload)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
