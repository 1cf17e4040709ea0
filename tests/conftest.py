from __future__ import annotations

import pytest

from company_dedup.config import DedupConfig
from tests.support.companies import InMemoryCompanyStore


@pytest.fixture
def dedup_config() -> DedupConfig:
    return DedupConfig(
        identifying_attribute="name",
        secondary_attributes=("domain", "linkedin_company_page", "website"),
        logging_attributes=("phone", "address"),
        status_attribute="deduplication_status",
    )


@pytest.fixture
def store() -> InMemoryCompanyStore:
    return InMemoryCompanyStore()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "HUBSPOT_ACCESS_TOKEN",
        "COMPANY_DEDUP_IDENTIFYING_ATTRIBUTE",
        "COMPANY_DEDUP_SECONDARY_ATTRIBUTES",
        "COMPANY_DEDUP_LOGGING_ATTRIBUTES",
        "COMPANY_DEDUP_STATUS_ATTRIBUTE",
        "COMPANY_DEDUP_SEARCH_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
