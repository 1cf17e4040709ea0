"""Company record projections and deduplication vocabulary (pure, dependency-light)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

type CompanyId = str


class DedupStatus(StrEnum):
    """Persisted marker recording how far deduplication got for a company."""

    UNSET = "unset"
    PRIMARY = "primary"
    MERGED = "merged"

    @classmethod
    def parse(cls, value: str | None) -> DedupStatus:
        """Map a raw property value onto the closed status set.

        Blank and unknown values both count as ``UNSET`` so the record is processed.
        """

        if value is None or not value.strip():
            return cls.UNSET
        normalized = value.strip()
        if normalized == cls.MERGED.value:
            return cls.MERGED
        if normalized == cls.PRIMARY.value:
            return cls.PRIMARY
        if normalized != cls.UNSET.value:
            log.warning(f"Unrecognised deduplication status {value!r}; treating it as unset")
        return cls.UNSET


def company_id_key(company_id: CompanyId) -> int:
    """Numeric sort key for a company id; lower ids are older records.

    Raises ``ValueError`` for ids that are not base-10 integers.
    """

    return int(str(company_id).strip())


@dataclass(frozen=True, slots=True)
class CompanySnapshot:
    """Read-only projection of a company record as fetched from the CRM."""

    company_id: CompanyId
    properties: Mapping[str, str | None] = field(default_factory=dict)

    def value(self, name: str) -> str | None:
        """Return the property value, or ``None`` when it is absent or blank."""

        raw = self.properties.get(name)
        if raw is None or not raw.strip():
            return None
        return raw
