"""Duplicate resolution: run the match query and choose the canonical company."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import SearchError
from .model import company_id_key
from .ports import CompanyStoreError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .matching import MatchQuery
    from .model import CompanyId
    from .ports import CompanyStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of a duplicate search for one company.

    ``duplicate_ids`` never contains ``current_id`` and is ordered oldest first.
    ``primary_id`` is the oldest company among the duplicates and the current one.
    """

    current_id: CompanyId
    duplicate_ids: tuple[CompanyId, ...]
    primary_id: CompanyId

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_ids)

    @property
    def current_is_primary(self) -> bool:
        return company_id_key(self.primary_id) == company_id_key(self.current_id)

    @classmethod
    def without_duplicates(cls, current_id: CompanyId) -> Resolution:
        return cls(current_id=current_id, duplicate_ids=(), primary_id=current_id)


def collect_duplicates(
    result_ids: Iterable[CompanyId],
    current_id: CompanyId,
) -> tuple[CompanyId, ...]:
    """Drop ``current_id`` from ``result_ids`` and collapse repeats.

    Ids are compared numerically, so ``"042"`` and ``"42"`` count once. The first
    spelling seen wins. Raises ``ValueError`` on non-numeric ids.
    """

    current_key = company_id_key(current_id)
    unique: dict[int, CompanyId] = {}
    for result_id in result_ids:
        key = company_id_key(result_id)
        if key == current_key:
            continue
        unique.setdefault(key, str(result_id))
    return tuple(unique[key] for key in sorted(unique))


def select_primary(duplicate_ids: Iterable[CompanyId], current_id: CompanyId) -> CompanyId:
    """Return the oldest (numerically smallest) id among duplicates and ``current_id``."""

    return min((*duplicate_ids, current_id), key=company_id_key)


def resolve_duplicates(
    store: CompanyStore,
    query: MatchQuery | None,
    *,
    current_id: CompanyId,
    limit: int,
) -> Resolution:
    if query is None:
        return Resolution.without_duplicates(current_id)

    try:
        result_ids = store.search_companies(query, limit=limit)
    except CompanyStoreError as exc:
        raise SearchError(str(exc), company_id=current_id) from exc

    try:
        duplicate_ids = collect_duplicates(result_ids, current_id)
    except ValueError as exc:
        raise SearchError(
            f"Search returned a non-numeric company id: {exc}", company_id=current_id
        ) from exc

    if not duplicate_ids:
        log.info(f"No matching companies found for company {current_id}")
        return Resolution.without_duplicates(current_id)

    if len(result_ids) >= limit:
        log.warning(f"Search hit the {limit} result cap; only the first page is considered")

    primary_id = select_primary(duplicate_ids, current_id)
    log.info(
        f"Found {len(duplicate_ids)} potential duplicate(s) of company {current_id}: "
        f"{', '.join(duplicate_ids)}"
    )
    log.info(f"Strategy: using oldest company (ID: {primary_id}) as the primary record")
    return Resolution(current_id=current_id, duplicate_ids=duplicate_ids, primary_id=primary_id)
