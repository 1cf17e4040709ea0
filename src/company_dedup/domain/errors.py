"""Failure taxonomy for a deduplication run.

Every step that talks to the CRM translates the store's exception into one of
these, so the caller can branch on :attr:`DeduplicationError.kind` instead of
parsing message text.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .model import CompanyId


class ErrorKind(StrEnum):
    FETCH = "fetch"
    SEARCH = "search"
    UPDATE = "update"
    MERGE = "merge"
    EVENT = "event"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class DeduplicationError(RuntimeError):
    """Base class for failures that abort a deduplication run."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED

    def __init__(self, message: str, *, company_id: CompanyId | None = None) -> None:
        super().__init__(message)
        self.company_id = company_id

    @property
    def message(self) -> str:
        return str(self)


class FetchError(DeduplicationError):
    """The enrolled company could not be read."""

    kind = ErrorKind.FETCH


class SearchError(DeduplicationError):
    """The duplicate search failed or returned unusable ids."""

    kind = ErrorKind.SEARCH


class UpdateError(DeduplicationError):
    """Writing the deduplication status marker failed."""

    kind = ErrorKind.UPDATE


class MergeError(DeduplicationError):
    """The CRM rejected the merge request."""

    kind = ErrorKind.MERGE


class InvalidEventError(DeduplicationError):
    """The triggering event carried no usable company id."""

    kind = ErrorKind.EVENT
