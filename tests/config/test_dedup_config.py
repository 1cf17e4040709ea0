from __future__ import annotations

import pytest

from company_dedup.config import (
    ConfigurationError,
    DedupConfig,
    MissingConfigurationError,
    get_dedup_config,
    get_hubspot_config,
)


def test_defaults() -> None:
    config = get_dedup_config()

    assert config == DedupConfig()
    assert config.identifying_attribute == "name"
    assert config.secondary_attributes == ("domain", "linkedin_company_page", "website")
    assert config.status_attribute == "deduplication_status"
    assert config.search_limit == 100


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPANY_DEDUP_IDENTIFYING_ATTRIBUTE", "legal_name")
    monkeypatch.setenv("COMPANY_DEDUP_SECONDARY_ATTRIBUTES", "vat_number, domain")
    monkeypatch.setenv("COMPANY_DEDUP_LOGGING_ATTRIBUTES", "")
    monkeypatch.setenv("COMPANY_DEDUP_STATUS_ATTRIBUTE", "dedupe_state")
    monkeypatch.setenv("COMPANY_DEDUP_SEARCH_LIMIT", "25")

    config = get_dedup_config()

    assert config.identifying_attribute == "legal_name"
    assert config.secondary_attributes == ("vat_number", "domain")
    assert config.logging_attributes == DedupConfig().logging_attributes
    assert config.status_attribute == "dedupe_state"
    assert config.search_limit == 25


def test_fetch_properties_are_ordered_without_repeats() -> None:
    config = DedupConfig(
        secondary_attributes=("domain", "name"),
        logging_attributes=("phone", "domain"),
    )

    assert config.fetch_properties == ("name", "domain", "phone", "deduplication_status")


def test_with_overrides_keeps_unset_values() -> None:
    base = DedupConfig(search_limit=50)

    config = base.with_overrides(secondary_attributes=(), status_attribute=None)

    assert config.secondary_attributes == ()
    assert config.status_attribute == base.status_attribute
    assert config.search_limit == 50


@pytest.mark.parametrize(
    "kwargs",
    [
        {"identifying_attribute": " "},
        {"status_attribute": ""},
        {"search_limit": 0},
        {"search_limit": 101},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        DedupConfig(**kwargs)  # type: ignore[arg-type]


def test_search_limit_must_be_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPANY_DEDUP_SEARCH_LIMIT", "all")

    with pytest.raises(ConfigurationError):
        get_dedup_config()


def test_hubspot_config_requires_access_token() -> None:
    with pytest.raises(MissingConfigurationError, match="HUBSPOT_ACCESS_TOKEN"):
        get_hubspot_config()


def test_hubspot_config_reads_access_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HUBSPOT_ACCESS_TOKEN", " pat-na1-secret \n")

    config = get_hubspot_config()

    assert config.access_token == "pat-na1-secret"
    assert config.resilience.base_url == "https://api.hubapi.com"
    assert config.resilience.ratelimit is not None
