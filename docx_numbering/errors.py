"""Exception hierarchy for numbering catalog and list operations.

Callers can catch :class:`NumberingError` for any failure raised by this
package, or react to the narrower classes:

* :class:`IncompatibleListItem` is a precondition violation; check
  ``NumberedList.can_accept`` before adding a paragraph.
* :class:`UnknownInstance` and :class:`CorruptCatalog` indicate broken
  references in the numbering part. They are never repaired automatically.
* :class:`StorageUnavailable` means the persisted numbering part could not be
  read, so no numbering work can proceed.
* :class:`UnsupportedStyle`, :class:`NotBound` and :class:`AlreadyBound` are
  programming errors.
"""

from __future__ import annotations

__all__ = [
    "NumberingError",
    "IncompatibleListItem",
    "UnknownInstance",
    "CorruptCatalog",
    "StorageUnavailable",
    "UnsupportedStyle",
    "NotBound",
    "AlreadyBound",
    "DuplicateIdentifier",
]


class NumberingError(RuntimeError):
    """Base exception for numbering catalog and list failures."""


class IncompatibleListItem(NumberingError):
    """Raised when a paragraph is not a list item or belongs to another list."""


class UnknownInstance(NumberingError):
    """Raised when no numbering instance carries the requested ``numId``."""

    def __init__(self, instance_id: int) -> None:
        super().__init__(f"No numbering instance with numId={instance_id}")
        self.instance_id = instance_id


class CorruptCatalog(NumberingError):
    """Raised when numbering data references a template that does not exist."""


class StorageUnavailable(NumberingError):
    """Raised when the persisted numbering part cannot be read."""


class UnsupportedStyle(NumberingError):
    """Raised for a list style kind without a blueprint."""


class NotBound(NumberingError):
    """Raised when a list without a numbering instance is asked to resolve one."""


class AlreadyBound(NumberingError):
    """Raised when a list that already has a numbering instance is asked to mint one."""


class DuplicateIdentifier(NumberingError):
    """Raised when a template or instance id is already taken in the catalog."""
