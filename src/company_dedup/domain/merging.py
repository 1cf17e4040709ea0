"""Merge direction and the status-mark / merge / status-mark sequence."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import MergeError, UpdateError
from .model import DedupStatus
from .ports import CompanyStoreError

if TYPE_CHECKING:
    from .model import CompanyId
    from .ports import CompanyStore
    from .resolution import Resolution

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergePlan:
    """What a single run will change.

    ``merge_away_id`` is ``None`` when the run only marks ``primary_id``. When the
    current company is the oldest, only one duplicate is absorbed per run and the
    rest are counted in ``remaining_duplicates`` for later runs.
    """

    current_id: CompanyId
    primary_id: CompanyId
    merge_away_id: CompanyId | None = None
    remaining_duplicates: int = 0

    @property
    def current_is_primary(self) -> bool:
        return self.primary_id == self.current_id

    @property
    def merges(self) -> bool:
        return self.merge_away_id is not None


def plan_merge(resolution: Resolution) -> MergePlan:
    current_id = resolution.current_id
    if not resolution.has_duplicates:
        return MergePlan(current_id=current_id, primary_id=current_id)

    if resolution.current_is_primary:
        absorbed, *remaining = resolution.duplicate_ids
        return MergePlan(
            current_id=current_id,
            primary_id=current_id,
            merge_away_id=absorbed,
            remaining_duplicates=len(remaining),
        )

    return MergePlan(
        current_id=current_id,
        primary_id=resolution.primary_id,
        merge_away_id=current_id,
    )


class MergeDirector:
    """Applies a :class:`MergePlan` against the CRM.

    The absorbed company is marked ``merged`` before the merge call so a retried or
    concurrent run skips it even when the merge itself fails. The survivor is marked
    ``primary`` last. Any failure stops the sequence; nothing is rolled back.
    """

    def __init__(self, store: CompanyStore, *, status_attribute: str) -> None:
        self._store = store
        self._status_attribute = status_attribute

    def execute(self, plan: MergePlan) -> None:
        if plan.merge_away_id is not None:
            self.mark(plan.merge_away_id, DedupStatus.MERGED)
            self.merge(primary_id=plan.primary_id, merge_away_id=plan.merge_away_id)
        self.mark(plan.primary_id, DedupStatus.PRIMARY)

    def mark(self, company_id: CompanyId, status: DedupStatus) -> None:
        log.info(f"Marking company {company_id} as {status}")
        try:
            self._store.update_company(
                company_id,
                properties={self._status_attribute: status.value},
            )
        except CompanyStoreError as exc:
            raise UpdateError(str(exc), company_id=company_id) from exc

    def merge(self, *, primary_id: CompanyId, merge_away_id: CompanyId) -> None:
        log.info(f"Merging company {merge_away_id} into primary company {primary_id}")
        try:
            self._store.merge_companies(primary_id=primary_id, merge_away_id=merge_away_id)
        except CompanyStoreError as exc:
            raise MergeError(str(exc), company_id=merge_away_id) from exc
        log.info(f"Successfully merged company {merge_away_id} into {primary_id}")
