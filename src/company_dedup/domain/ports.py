"""Port for the remote CRM that owns company records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .matching import MatchQuery
    from .model import CompanyId, CompanySnapshot


class CompanyStoreError(RuntimeError):
    """Raised by store adapters when a remote operation fails."""


class CompanyNotFoundError(CompanyStoreError):
    """Raised when the requested company does not exist (or was merged away)."""


@runtime_checkable
class CompanyStore(Protocol):
    """The four CRM operations deduplication depends on.

    Implementations raise :class:`CompanyStoreError` (or a subclass) on failure and
    never retry non-idempotent calls on their own.
    """

    def get_company(
        self,
        company_id: CompanyId,
        *,
        properties: Sequence[str],
    ) -> CompanySnapshot: ...

    def search_companies(
        self,
        query: MatchQuery,
        *,
        properties: Sequence[str] = (),
        limit: int = 100,
        descending: bool = False,
    ) -> list[CompanyId]:
        """Return matching company ids ordered by id (ascending unless ``descending``)."""
        ...

    def update_company(self, company_id: CompanyId, *, properties: Mapping[str, str]) -> None: ...

    def merge_companies(self, *, primary_id: CompanyId, merge_away_id: CompanyId) -> None: ...


__all__ = ["CompanyNotFoundError", "CompanyStore", "CompanyStoreError"]
