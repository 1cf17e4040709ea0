from __future__ import annotations

import pytest

from company_dedup.domain import CompanySnapshot, DedupStatus


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, DedupStatus.UNSET),
        ("", DedupStatus.UNSET),
        ("   ", DedupStatus.UNSET),
        ("unset", DedupStatus.UNSET),
        ("primary", DedupStatus.PRIMARY),
        ("merged", DedupStatus.MERGED),
        (" merged ", DedupStatus.MERGED),
        ("pending_review", DedupStatus.UNSET),
    ],
)
def test_parse_maps_raw_values_onto_closed_set(raw: str | None, expected: DedupStatus) -> None:
    assert DedupStatus.parse(raw) is expected


def test_unknown_status_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        DedupStatus.parse("archived")

    assert "archived" in caplog.text


def test_snapshot_value_treats_blank_as_absent() -> None:
    company = CompanySnapshot(
        company_id="1",
        properties={"name": "Acme", "domain": "  ", "phone": None},
    )

    assert company.value("name") == "Acme"
    assert company.value("domain") is None
    assert company.value("phone") is None
    assert company.value("missing") is None
