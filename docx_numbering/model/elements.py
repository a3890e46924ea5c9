"""Paragraph elements as seen by the numbering layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class RunFragment:
    """Continuous run of text sharing the same formatting."""

    text: str


@dataclass(slots=True)
class NumberingInfo:
    """Numbering reference (``w:numPr``) applied to a paragraph."""

    num_id: int
    level: int = 0


@dataclass(slots=True)
class ParagraphElement:
    """Body paragraph with its optional list membership."""

    runs: List[RunFragment] = field(default_factory=list)
    style_id: Optional[str] = None
    numbering: Optional[NumberingInfo] = None

    @property
    def is_list_item(self) -> bool:
        return self.numbering is not None and self.numbering.num_id > 0

    @property
    def numbering_instance_id(self) -> Optional[int]:
        if self.numbering is None:
            return None
        return self.numbering.num_id

    @property
    def level(self) -> Optional[int]:
        if self.numbering is None:
            return None
        return self.numbering.level

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)
