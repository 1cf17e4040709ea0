"""Terminal outcomes of a deduplication run and their workflow output fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .errors import ErrorKind

if TYPE_CHECKING:
    from .errors import DeduplicationError
    from .merging import MergePlan
    from .model import CompanyId
    from .resolution import Resolution

type OutputValue = str | int
type OutputFields = dict[str, OutputValue]


class DedupResult(StrEnum):
    NO_DUPLICATES_FOUND = "no_duplicates_found"
    ALREADY_MERGED = "already_merged"
    MERGED_AS_PRIMARY = "successfully_merged_as_primary"
    MERGED_INTO_PRIMARY = "successfully_merged_into_primary"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DedupOutcome:
    result: DedupResult
    company_id: CompanyId | None = None
    primary_company_id: CompanyId | None = None
    merged_company_id: CompanyId | None = None
    remaining_duplicates: int | None = None
    duplicate_company_ids: tuple[CompanyId, ...] = ()
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.result is DedupResult.ERROR

    @classmethod
    def no_duplicates(cls, company_id: CompanyId) -> DedupOutcome:
        return cls(
            result=DedupResult.NO_DUPLICATES_FOUND,
            company_id=company_id,
            primary_company_id=company_id,
        )

    @classmethod
    def already_merged(cls, company_id: CompanyId) -> DedupOutcome:
        return cls(result=DedupResult.ALREADY_MERGED, company_id=company_id)

    @classmethod
    def merged(cls, plan: MergePlan, resolution: Resolution) -> DedupOutcome:
        if plan.current_is_primary:
            return cls(
                result=DedupResult.MERGED_AS_PRIMARY,
                company_id=plan.current_id,
                primary_company_id=plan.primary_id,
                merged_company_id=plan.merge_away_id,
                remaining_duplicates=plan.remaining_duplicates,
                duplicate_company_ids=resolution.duplicate_ids,
            )
        return cls(
            result=DedupResult.MERGED_INTO_PRIMARY,
            company_id=plan.current_id,
            primary_company_id=plan.primary_id,
            merged_company_id=plan.merge_away_id,
            duplicate_company_ids=resolution.duplicate_ids,
        )

    @classmethod
    def failed(
        cls,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.UNEXPECTED,
        company_id: CompanyId | None = None,
    ) -> DedupOutcome:
        return cls(result=DedupResult.ERROR, company_id=company_id, error=message, error_kind=kind)

    @classmethod
    def from_error(
        cls,
        error: DeduplicationError,
        *,
        company_id: CompanyId | None = None,
    ) -> DedupOutcome:
        return cls.failed(error.message, kind=error.kind, company_id=company_id)

    def to_output_fields(self) -> OutputFields:
        """Flatten into the field mapping a workflow reads back; unset fields are omitted."""

        fields: OutputFields = {"result": self.result.value}
        if self.company_id is not None:
            fields["companyId"] = self.company_id
        if self.primary_company_id is not None:
            fields["primaryCompanyId"] = self.primary_company_id
        if self.merged_company_id is not None:
            fields["mergedCompanyId"] = self.merged_company_id
        if self.remaining_duplicates is not None:
            fields["remainingDuplicates"] = self.remaining_duplicates
        if self.duplicate_company_ids:
            fields["duplicateCompanyIds"] = ", ".join(self.duplicate_company_ids)
        if self.error is not None:
            fields["error"] = self.error
        if self.error_kind is not None:
            fields["errorKind"] = self.error_kind.value
        return fields
