"""Reusable fakes and helpers for company deduplication tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from company_dedup.domain import (
    CompanyNotFoundError,
    CompanySnapshot,
    CompanyStoreError,
    company_id_key,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from company_dedup.domain import MatchQuery


@dataclass(slots=True)
class StoreCall:
    operation: str
    args: tuple[object, ...]


@dataclass(slots=True)
class InMemoryCompanyStore:
    """Company store port backed by a dict, recording every call in order.

    ``failures`` maps an operation name (``get``, ``search``, ``update``, ``merge``)
    to the exception that operation raises. Reads of a merged-away id are served
    from the surviving record through ``aliases``, like the CRM does.
    """

    companies: dict[str, dict[str, str | None]] = field(default_factory=dict)
    failures: dict[str, CompanyStoreError] = field(default_factory=dict)
    extra_search_ids: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    calls: list[StoreCall] = field(default_factory=list)

    def add(self, company_id: str | int, **properties: str | None) -> None:
        self.companies[str(company_id)] = dict(properties)

    def status_of(
        self,
        company_id: str | int,
        attribute: str = "deduplication_status",
    ) -> str | None:
        return self.companies[str(company_id)].get(attribute)

    @property
    def operations(self) -> list[str]:
        return [call.operation for call in self.calls]

    @property
    def mutations(self) -> list[StoreCall]:
        return [call for call in self.calls if call.operation in {"update", "merge"}]

    def get_company(self, company_id: str, *, properties: Sequence[str]) -> CompanySnapshot:
        self.calls.append(StoreCall("get", (company_id, tuple(properties))))
        self._maybe_fail("get")
        resolved_id = self.aliases.get(company_id, company_id)
        record = self.companies.get(resolved_id)
        if record is None:
            raise CompanyNotFoundError(f"Company {company_id} does not exist")
        return CompanySnapshot(
            company_id=resolved_id,
            properties={name: record.get(name) for name in properties},
        )

    def search_companies(
        self,
        query: MatchQuery,
        *,
        properties: Sequence[str] = (),
        limit: int = 100,
        descending: bool = False,
    ) -> list[str]:
        self.calls.append(StoreCall("search", (query, limit, descending)))
        self._maybe_fail("search")
        matches = [
            company_id
            for company_id, record in self.companies.items()
            if query.matches(record)
        ]
        matches.sort(key=company_id_key, reverse=descending)
        matches.extend(self.extra_search_ids)
        return matches[:limit]

    def update_company(self, company_id: str, *, properties: Mapping[str, str]) -> None:
        self.calls.append(StoreCall("update", (company_id, dict(properties))))
        self._maybe_fail("update")
        if company_id not in self.companies:
            raise CompanyNotFoundError(f"Company {company_id} does not exist")
        self.companies[company_id].update(properties)

    def merge_companies(self, *, primary_id: str, merge_away_id: str) -> None:
        self.calls.append(StoreCall("merge", (primary_id, merge_away_id)))
        self._maybe_fail("merge")
        for company_id in (primary_id, merge_away_id):
            if company_id not in self.companies:
                raise CompanyNotFoundError(f"Company {company_id} does not exist")
        absorbed = self.companies.pop(merge_away_id)
        self.aliases[merge_away_id] = primary_id
        primary = self.companies[primary_id]
        for name, value in absorbed.items():
            if primary.get(name) is None:
                primary[name] = value

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error
