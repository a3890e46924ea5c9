"""Document-level owner of the numbering catalog."""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol, Sequence
from xml.etree import ElementTree as ET

from docx_numbering.errors import StorageUnavailable
from docx_numbering.model.elements import ParagraphElement
from docx_numbering.model.list_model import NumberedList
from docx_numbering.model.numbering_model import NumberingCatalog, StyleKind
from docx_numbering.parser.blueprints import DEFAULT_NUMBERING_RESOURCE, read_resource
from docx_numbering.parser.document_parser import DocumentParser
from docx_numbering.parser.numbering_parser import NumberingParser
from docx_numbering.parser.numbering_writer import NumberingWriter
from docx_numbering.utils.logger import get_logger
from docx_numbering.utils.xml_utils import parse_xml

LOGGER = get_logger(__name__)


class CatalogStorage(Protocol):
    """Where the numbering part of a document is persisted."""

    def catalog_exists(self) -> bool: ...

    def read_catalog(self) -> bytes: ...

    def write_catalog(self, data: bytes) -> None: ...


class NumberingDocument:
    """Owns the single numbering catalog of a document and hands it out to lists.

    The catalog is materialized on first use. ``allocation()`` is the one
    mutual-exclusion scope for bootstrap and id allocation; hold it for the
    whole read-max/add-template/add-instance sequence.
    """

    def __init__(self, storage: CatalogStorage, paragraphs: Optional[Sequence[ParagraphElement]] = None) -> None:
        self._storage = storage
        self._catalog: Optional[NumberingCatalog] = None
        self._lock = threading.RLock()
        self.paragraphs: List[ParagraphElement] = list(paragraphs or [])

    @classmethod
    def from_package(cls, package) -> "NumberingDocument":
        """Build a document over a DOCX package, reading its paragraphs."""
        return cls(package, DocumentParser(package).parse())

    @contextmanager
    def allocation(self) -> Iterator[NumberingCatalog]:
        with self._lock:
            yield self.ensure_exists()

    @property
    def is_materialized(self) -> bool:
        return self._catalog is not None

    @property
    def catalog(self) -> NumberingCatalog:
        """The live catalog. Readers racing a mint must go through ``allocation()``."""
        return self.ensure_exists()

    def ensure_exists(self) -> NumberingCatalog:
        """Load the catalog from storage, or start an empty one, exactly once."""
        with self._lock:
            if self._catalog is None:
                self._catalog = self._load_catalog()
            return self._catalog

    def _load_catalog(self) -> NumberingCatalog:
        try:
            exists = self._storage.catalog_exists()
            tree = parse_xml(self._storage.read_catalog()) if exists else None
        except (OSError, KeyError, ET.ParseError) as exc:
            raise StorageUnavailable(f"Numbering part could not be read: {exc}") from exc
        if tree is None:
            LOGGER.debug("No numbering part in storage, starting an empty catalog")
            return NumberingParser(parse_xml(read_resource(DEFAULT_NUMBERING_RESOURCE))).parse()
        catalog = NumberingParser(tree).parse()
        LOGGER.debug(
            "Loaded numbering catalog with %d templates and %d instances",
            len(catalog.templates),
            len(catalog.instances),
        )
        return catalog

    def save(self) -> None:
        """Persist the catalog if it was ever materialized."""
        with self._lock:
            if self._catalog is None:
                return
            self._storage.write_catalog(NumberingWriter(self._catalog).to_bytes())

    # ------------------------------------------------------------------
    def create_list(self, style_kind: Optional[StyleKind] = None, level: int = 0) -> NumberedList:
        """Return a new list, minting a numbering definition when a style is given."""
        numbered_list = NumberedList(self)
        if style_kind is not None:
            numbered_list.mint_new_definition(style_kind, level)
        return numbered_list

    def lists(self) -> List[NumberedList]:
        """Group consecutive list paragraphs sharing a numId into lists."""
        found: List[NumberedList] = []
        current: Optional[NumberedList] = None
        for paragraph in self.paragraphs:
            if not paragraph.is_list_item:
                current = None
                continue
            if current is None or not current.can_accept(paragraph):
                current = NumberedList(self)
                found.append(current)
            current.add_item(paragraph)
        return found
