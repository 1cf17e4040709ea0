from __future__ import annotations

import pytest
from pydantic import ValidationError

from company_dedup.adapters.hubspot import CompanySearchResponse, WorkflowEvent
from company_dedup.adapters.hubspot.schema import ErrorResponse


def test_workflow_event_accepts_numeric_object_id() -> None:
    event = WorkflowEvent.model_validate(
        {
            "callbackId": "ap-123-456",
            "origin": {"portalId": 1234},
            "object": {"objectId": 24273, "objectType": "COMPANY"},
            "inputFields": {},
        }
    )

    assert event.company_id == "24273"
    assert event.enrolled_object.object_type == "COMPANY"
    assert event.callback_id == "ap-123-456"


def test_workflow_event_strips_string_object_id() -> None:
    event = WorkflowEvent.model_validate({"object": {"objectId": " 42 "}})

    assert event.company_id == "42"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"object": {}},
        {"object": {"objectId": "abc"}},
        {"object": {"objectId": ""}},
        {"object": {"objectId": "\u00b2"}},
    ],
)
def test_workflow_event_rejects_missing_or_invalid_object(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        WorkflowEvent.model_validate(payload)


def test_search_response_coerces_ids_and_ignores_unknown_fields() -> None:
    response = CompanySearchResponse.model_validate(
        {
            "total": 1,
            "results": [
                {
                    "id": 100,
                    "properties": {"name": "Acme", "hs_object_id": "100"},
                    "createdAt": "2024-01-07T12:00:00.000Z",
                    "updatedAt": "2024-02-07T12:00:00.000Z",
                    "archived": False,
                    "propertiesWithHistory": {},
                }
            ],
            "paging": {"next": {"after": "1"}},
        }
    )

    (company,) = response.results
    assert company.id == "100"
    assert company.created_at is not None
    assert response.paging is not None
    assert response.paging.next is not None
    assert response.paging.next.after == "1"


def test_error_response_defaults_message() -> None:
    payload = ErrorResponse.model_validate({"status": "error"})

    assert payload.message == "Unknown HubSpot error"
    assert payload.correlation_id is None
