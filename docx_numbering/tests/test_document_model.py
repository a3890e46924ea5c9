"""Tests for lazy catalog materialization and document-level list grouping."""
import unittest

from docx_numbering.errors import StorageUnavailable
from docx_numbering.model.document_model import NumberingDocument
from docx_numbering.model.elements import NumberingInfo, ParagraphElement
from docx_numbering.model.numbering_model import StyleKind


EXISTING_NUMBERING = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:numbering xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">
  <w:abstractNum w:abstractNumId="3">
    <w:lvl w:ilvl="0"><w:numFmt w:val="decimal"/></w:lvl>
  </w:abstractNum>
  <w:num w:numId="7"><w:abstractNumId w:val="3"/></w:num>
</w:numbering>
"""


class RecordingStorage:
    """In-memory storage that counts reads."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.reads = 0
        self.writes = []

    def catalog_exists(self):
        return self.payload is not None or self.error is not None

    def read_catalog(self):
        self.reads += 1
        if self.error is not None:
            raise self.error
        return self.payload

    def write_catalog(self, data):
        self.writes.append(data)
        self.payload = data


def list_paragraph(num_id):
    return ParagraphElement(numbering=NumberingInfo(num_id=num_id))


class EnsureExistsTest(unittest.TestCase):
    """Bootstrap of the numbering catalog."""

    def test_empty_bootstrap_when_storage_has_no_catalog(self) -> None:
        document = NumberingDocument(RecordingStorage())
        self.assertFalse(document.is_materialized)
        catalog = document.ensure_exists()
        self.assertTrue(document.is_materialized)
        self.assertEqual(catalog.max_instance_id(), 0)
        self.assertEqual(catalog.max_template_id(), -1)

    def test_loads_existing_catalog_once(self) -> None:
        storage = RecordingStorage(EXISTING_NUMBERING)
        document = NumberingDocument(storage)
        first = document.ensure_exists()
        second = document.ensure_exists()
        self.assertIs(first, second)
        self.assertIs(document.catalog, first)
        self.assertEqual(storage.reads, 1)
        self.assertEqual(first.resolve_template(7).template_id, 3)

    def test_mint_continues_after_existing_ids(self) -> None:
        document = NumberingDocument(RecordingStorage(EXISTING_NUMBERING))
        numbered_list = document.create_list(StyleKind.BULLETED)
        self.assertEqual(numbered_list.num_id, 8)
        self.assertEqual(numbered_list.resolve_template().template_id, 4)

    def test_mint_skips_ids_of_unreferenced_instances(self) -> None:
        payload = EXISTING_NUMBERING.replace(b"</w:numbering>", b'<w:num w:numId="9"/></w:numbering>')
        document = NumberingDocument(RecordingStorage(payload))
        numbered_list = document.create_list(StyleKind.BULLETED)
        self.assertEqual(numbered_list.num_id, 10)
        self.assertEqual(numbered_list.resolve_template().template_id, 4)

    def test_unreadable_storage(self) -> None:
        document = NumberingDocument(RecordingStorage(error=OSError("disk gone")))
        with self.assertRaises(StorageUnavailable) as ctx:
            document.ensure_exists()
        self.assertIsInstance(ctx.exception.__cause__, OSError)
        self.assertFalse(document.is_materialized)

    def test_malformed_storage(self) -> None:
        document = NumberingDocument(RecordingStorage(b"<w:numbering"))
        with self.assertRaises(StorageUnavailable):
            document.ensure_exists()


class SaveTest(unittest.TestCase):
    """Persisting the catalog through the storage contract."""

    def test_save_without_materialized_catalog_is_noop(self) -> None:
        storage = RecordingStorage()
        NumberingDocument(storage).save()
        self.assertEqual(storage.writes, [])

    def test_minted_definitions_survive_reload(self) -> None:
        storage = RecordingStorage()
        document = NumberingDocument(storage)
        document.create_list(StyleKind.NUMBERED)
        document.create_list(StyleKind.BULLETED)
        document.save()
        self.assertEqual(len(storage.writes), 1)

        reloaded = NumberingDocument(storage)
        catalog = reloaded.ensure_exists()
        self.assertEqual([(i.instance_id, i.template_id) for i in catalog.instances], [(1, 0), (2, 1)])
        self.assertEqual(catalog.resolve_template(1).style_kind, StyleKind.NUMBERED)
        self.assertEqual(catalog.resolve_template(2).style_kind, StyleKind.BULLETED)


class ListsTest(unittest.TestCase):
    """Grouping body paragraphs into lists."""

    def test_groups_consecutive_paragraphs_by_num_id(self) -> None:
        paragraphs = [
            list_paragraph(1),
            list_paragraph(1),
            ParagraphElement(),
            list_paragraph(1),
            list_paragraph(2),
            list_paragraph(2),
        ]
        document = NumberingDocument(RecordingStorage(), paragraphs)
        lists = document.lists()
        self.assertEqual([(lst.num_id, len(lst.items)) for lst in lists], [(1, 2), (1, 1), (2, 2)])
        self.assertIs(lists[0].items[0], paragraphs[0])

    def test_no_list_paragraphs(self) -> None:
        document = NumberingDocument(RecordingStorage(), [ParagraphElement()])
        self.assertEqual(document.lists(), [])
        self.assertFalse(document.is_materialized)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
