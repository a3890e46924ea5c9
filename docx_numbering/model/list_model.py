"""A logical list: paragraphs sharing one numbering instance."""
from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from docx_numbering.errors import AlreadyBound, IncompatibleListItem, NotBound
from docx_numbering.model.elements import NumberingInfo, ParagraphElement, RunFragment
from docx_numbering.model.numbering_model import NumberingInstance, NumberingTemplate, StyleKind
from docx_numbering.parser.blueprints import load_blueprint
from docx_numbering.utils.logger import get_logger

if TYPE_CHECKING:
    from docx_numbering.model.document_model import NumberingDocument

LOGGER = get_logger(__name__)

MAX_LEVEL = 8
UNBOUND = 0


class NumberedList:
    """Group of paragraphs that share a ``numId``.

    The list keeps a reference to its document and resolves numbering through
    the document's catalog on every call. ``num_id`` is ``0`` until the list
    is bound, either by its first paragraph or by minting a new definition.
    """

    def __init__(self, document: "NumberingDocument") -> None:
        self._document = document
        self.num_id: int = UNBOUND
        self.style_kind: Optional[StyleKind] = None
        self.level: int = 0
        self.items: List[ParagraphElement] = []

    @property
    def is_bound(self) -> bool:
        return self.num_id != UNBOUND

    def can_accept(self, paragraph: ParagraphElement) -> bool:
        """Return True if ``add_item`` would accept ``paragraph``."""
        if not paragraph.is_list_item:
            return False
        return self.num_id == UNBOUND or (paragraph.numbering_instance_id == self.num_id and self.num_id > 0)

    def add_item(self, paragraph: ParagraphElement) -> None:
        if not self.can_accept(paragraph):
            raise IncompatibleListItem(
                "New list items can only be added to this list if they have the same numId "
                f"(list numId={self.num_id}, paragraph numId={paragraph.numbering_instance_id})"
            )
        self.num_id = paragraph.numbering_instance_id  # type: ignore[assignment]
        self.items.append(paragraph)

    def new_item(self, text: str = "", level: Optional[int] = None) -> ParagraphElement:
        """Create a paragraph numbered by this list and add it."""
        if not self.is_bound:
            raise NotBound("List has no numbering instance to number new items with")
        paragraph = ParagraphElement(
            runs=[RunFragment(text=text)] if text else [],
            numbering=NumberingInfo(num_id=self.num_id, level=self._check_level(self.level if level is None else level)),
        )
        self.add_item(paragraph)
        return paragraph

    def mint_new_definition(self, style_kind: StyleKind, level: int = 0) -> NumberingInstance:
        """Allocate a fresh template and instance for this list and bind to it."""
        if self.is_bound or self.items:
            raise AlreadyBound(f"List is already bound to numId={self.num_id}")
        level = self._check_level(level)
        with self._document.allocation() as catalog:
            num_id = catalog.max_instance_id() + 1
            template_id = catalog.max_template_id() + 1
            template = load_blueprint(style_kind, template_id)
            catalog.add_template(template)
            instance = catalog.add_instance(num_id, template_id)
            self.num_id = num_id
            self.style_kind = style_kind
            self.level = level
        LOGGER.info("Created %s list numId=%d abstractNumId=%d", style_kind.value, num_id, template_id)
        return instance

    def resolve_template(self) -> NumberingTemplate:
        if not self.is_bound:
            raise NotBound("List is not bound to a numbering instance")
        with self._document.allocation() as catalog:
            return catalog.resolve_template(self.num_id)

    def __repr__(self) -> str:
        return f"NumberedList(num_id={self.num_id}, style_kind={self.style_kind}, items={len(self.items)})"

    @staticmethod
    def _check_level(level: int) -> int:
        if not 0 <= level <= MAX_LEVEL:
            raise ValueError(f"List level must be between 0 and {MAX_LEVEL}, got {level}")
        return level
