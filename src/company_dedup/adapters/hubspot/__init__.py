"""Public interface for the HubSpot adapter."""

from __future__ import annotations

from .client import (
    HubSpotAPIError,
    HubSpotCompanyNotFoundError,
    HubSpotCompanyStore,
    build_hubspot_store,
    build_search_request,
)
from .schema import CompanyObject, CompanySearchResponse, WorkflowEvent

__all__ = [
    "CompanyObject",
    "CompanySearchResponse",
    "HubSpotAPIError",
    "HubSpotCompanyNotFoundError",
    "HubSpotCompanyStore",
    "WorkflowEvent",
    "build_hubspot_store",
    "build_search_request",
]
