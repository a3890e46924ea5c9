"""Numbering model captures list definitions stored in numbering.xml."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_numbering.errors import CorruptCatalog, DuplicateIdentifier, UnknownInstance


class StyleKind(enum.Enum):
    """Visual family of a list: bullet glyphs or ordinal numbers."""

    BULLETED = "bulleted"
    NUMBERED = "numbered"


@dataclass(slots=True)
class NumberingLevel:
    """Defines numbering behavior for a specific indentation level."""

    level_index: int
    start: Optional[int]
    num_format: Optional[str]
    level_text: Optional[str]
    alignment: Optional[str]


@dataclass(slots=True)
class NumberingOverride:
    """Overrides applied to a numbering instance for specific levels."""

    level_index: int
    start_override: Optional[int]


@dataclass(slots=True)
class NumberingTemplate:
    """Template (``w:abstractNum``) describing multi-level numbering behavior.

    ``element`` holds the level definitions verbatim; only the id attribute is
    rewritten when the catalog is saved.
    """

    template_id: int
    style_kind: Optional[StyleKind]
    element: ET.Element
    levels: Dict[int, NumberingLevel] = field(default_factory=dict)
    name: Optional[str] = None


@dataclass(slots=True)
class NumberingInstance:
    """Concrete numbering instance (``w:num``) bound to a template.

    ``template_id`` is ``None`` for a persisted ``w:num`` without an
    ``w:abstractNumId`` reference. Its ``numId`` still counts as taken.
    """

    instance_id: int
    template_id: Optional[int]
    overrides: Dict[int, NumberingOverride] = field(default_factory=dict)
    element: Optional[ET.Element] = None


@dataclass(slots=True)
class NumberingCatalog:
    """Collection of numbering templates and the instances that reference them.

    Records keep their document order. Lookups return the first record that
    carries a given id.
    """

    templates: List[NumberingTemplate] = field(default_factory=list)
    instances: List[NumberingInstance] = field(default_factory=list)
    preamble: List[ET.Element] = field(default_factory=list)
    trailer: List[ET.Element] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Lookups
    def get_template(self, template_id: Optional[int]) -> Optional[NumberingTemplate]:
        if template_id is None:
            return None
        return next((t for t in self.templates if t.template_id == template_id), None)

    def get_instance(self, instance_id: Optional[int]) -> Optional[NumberingInstance]:
        if instance_id is None:
            return None
        return next((i for i in self.instances if i.instance_id == instance_id), None)

    def resolve_template(self, instance_id: int) -> NumberingTemplate:
        """Follow ``numId -> abstractNumId`` and return the template in use."""
        instance = self.get_instance(instance_id)
        if instance is None:
            raise UnknownInstance(instance_id)
        if instance.template_id is None:
            raise CorruptCatalog(f"numId={instance_id} has no abstractNumId reference")
        template = self.get_template(instance.template_id)
        if template is None:
            raise CorruptCatalog(
                f"numId={instance_id} references missing abstractNumId={instance.template_id}"
            )
        return template

    def iter_bindings(self) -> Iterator[Tuple[NumberingInstance, Optional[NumberingTemplate]]]:
        for instance in self.instances:
            yield instance, self.get_template(instance.template_id)

    # ------------------------------------------------------------------
    # Allocation
    def max_instance_id(self) -> int:
        """Highest ``numId`` in use, ``0`` for an empty catalog."""
        return max((i.instance_id for i in self.instances), default=0)

    def max_template_id(self) -> int:
        """Highest ``abstractNumId`` in use, ``-1`` for an empty catalog."""
        return max((t.template_id for t in self.templates), default=-1)

    def next_instance_id(self) -> int:
        return self.max_instance_id() + 1

    def next_template_id(self) -> int:
        return self.max_template_id() + 1

    def add_template(self, template: NumberingTemplate) -> None:
        """Append a template whose id was allocated by the caller."""
        if self.get_template(template.template_id) is not None:
            raise DuplicateIdentifier(f"abstractNumId={template.template_id} already defined")
        self.templates.append(template)

    def add_instance(self, instance_id: int, template_id: int) -> NumberingInstance:
        """Append an instance binding ``instance_id`` to ``template_id``."""
        if instance_id < 1:
            raise ValueError(f"numId must be positive, got {instance_id}")
        if self.get_instance(instance_id) is not None:
            raise DuplicateIdentifier(f"numId={instance_id} already defined")
        instance = NumberingInstance(instance_id=instance_id, template_id=template_id)
        self.instances.append(instance)
        return instance
