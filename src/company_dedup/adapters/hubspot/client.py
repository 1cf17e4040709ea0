"""HTTP client for the HubSpot CRM v3 companies API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from company_dedup.adapters.http_resilience import ResilientClient
from company_dedup.config.hubspot import HubSpotConfig, get_hubspot_config
from company_dedup.domain.model import CompanySnapshot
from company_dedup.domain.ports import CompanyNotFoundError, CompanyStoreError

from .schema import (
    CompanyObject,
    CompanySearchRequest,
    CompanySearchResponse,
    ErrorResponse,
    MergeRequest,
    PropertiesUpdate,
    SearchFilter,
    SearchFilterGroup,
    SearchSort,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from company_dedup.config.http_resilience import ResilienceConfig
    from company_dedup.domain.matching import MatchQuery
    from company_dedup.domain.ports import CompanyStore

log = getLogger(__name__)

COMPANIES_PATH = "/crm/v3/objects/companies"
COMPANIES_SEARCH_PATH = f"{COMPANIES_PATH}/search"
COMPANIES_MERGE_PATH = f"{COMPANIES_PATH}/merge"
OBJECT_ID_PROPERTY = "hs_object_id"


class HubSpotAPIError(CompanyStoreError):
    """Raised when the HubSpot API rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        category: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.category = category
        self.correlation_id = correlation_id


class HubSpotCompanyNotFoundError(HubSpotAPIError, CompanyNotFoundError):
    """Raised when HubSpot answers 404 for a company."""


def build_search_request(
    query: MatchQuery,
    *,
    properties: Sequence[str] = (),
    limit: int = 100,
    descending: bool = False,
) -> CompanySearchRequest:
    return CompanySearchRequest(
        filter_groups=[
            SearchFilterGroup(
                filters=[
                    SearchFilter(property_name=f.property_name, value=f.value)
                    for f in group.filters
                ]
            )
            for group in query.filter_groups
        ],
        sorts=[
            SearchSort(
                property_name=OBJECT_ID_PROPERTY,
                direction="DESCENDING" if descending else "ASCENDING",
            )
        ],
        properties=list(properties),
        limit=limit,
    )


def error_from_response(response: httpx.Response) -> HubSpotAPIError:
    """Translate an HTTP error response into :class:`HubSpotAPIError`."""

    try:
        payload = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        payload = ErrorResponse(message=f"HubSpot API returned HTTP {response.status_code}")

    error_type = HubSpotAPIError
    if response.status_code == httpx.codes.NOT_FOUND:
        error_type = HubSpotCompanyNotFoundError
    return error_type(
        payload.message,
        status_code=response.status_code,
        category=payload.category,
        correlation_id=payload.correlation_id,
    )


class HubSpotCompanyStore:
    """Company store backed by HubSpot.

    Each call opens its own :class:`ResilientClient` inside ``asyncio.run`` so the
    store can be used from plain synchronous code such as a workflow action.
    """

    def __init__(
        self,
        *,
        config: HubSpotConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def get_company(self, company_id: str, *, properties: Sequence[str]) -> CompanySnapshot:
        return asyncio.run(self._get_company_async(company_id, properties=properties))

    def search_companies(
        self,
        query: MatchQuery,
        *,
        properties: Sequence[str] = (),
        limit: int = 100,
        descending: bool = False,
    ) -> list[str]:
        return asyncio.run(
            self._search_companies_async(
                query,
                properties=properties,
                limit=limit,
                descending=descending,
            )
        )

    def update_company(self, company_id: str, *, properties: Mapping[str, str]) -> None:
        body = PropertiesUpdate(properties=dict(properties))
        asyncio.run(
            self._perform_request(
                "PATCH",
                f"{COMPANIES_PATH}/{company_id}",
                json=body.model_dump(by_alias=True),
            )
        )

    def merge_companies(self, *, primary_id: str, merge_away_id: str) -> None:
        body = MergeRequest(primary_object_id=primary_id, object_id_to_merge=merge_away_id)
        asyncio.run(
            self._perform_request(
                "POST",
                COMPANIES_MERGE_PATH,
                json=body.model_dump(by_alias=True),
            )
        )

    async def _get_company_async(
        self,
        company_id: str,
        *,
        properties: Sequence[str],
    ) -> CompanySnapshot:
        params = {"properties": ",".join(properties)} if properties else None
        payload = await self._perform_request(
            "GET",
            f"{COMPANIES_PATH}/{company_id}",
            params=params,
        )
        company = _validate(CompanyObject, payload)
        return CompanySnapshot(company_id=company.id, properties=company.properties)

    async def _search_companies_async(
        self,
        query: MatchQuery,
        *,
        properties: Sequence[str],
        limit: int,
        descending: bool,
    ) -> list[str]:
        request = build_search_request(
            query,
            properties=properties,
            limit=limit,
            descending=descending,
        )
        payload = await self._perform_request(
            "POST",
            COMPANIES_SEARCH_PATH,
            json=request.model_dump(by_alias=True),
        )
        response = _validate(CompanySearchResponse, payload)
        log.debug(f"HubSpot search returned {len(response.results)} of {response.total} companies")
        return [company.id for company in response.results]

    async def _perform_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> object:
        if self._resilience.base_url is None:
            raise HubSpotAPIError("Missing HubSpot base_url in resilience configuration")

        headers = {"Authorization": f"Bearer {self._config.access_token}"}
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                log.error(f"HubSpot {method} {path} failed: {exc}")
                raise HubSpotAPIError(f"HubSpot request failed: {exc}") from exc

        if response.is_error:
            error = error_from_response(response)
            log.error(
                f"HubSpot API error {response.status_code} on {method} {path}: {error} "
                f"(category={error.category}, correlationId={error.correlation_id})"
            )
            raise error

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            msg = f"Unexpected HubSpot response payload for {method} {path}"
            raise HubSpotAPIError(msg) from exc


def _validate[TModel: CompanyObject | CompanySearchResponse](
    model: type[TModel],
    payload: object,
) -> TModel:
    if not isinstance(payload, dict):
        raise HubSpotAPIError("Unexpected HubSpot response payload")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise HubSpotAPIError(f"Unexpected HubSpot response payload: {exc}") from exc


def build_hubspot_store(*, config: HubSpotConfig | None = None) -> HubSpotCompanyStore:
    """Construct the HubSpot store, reading the access token from the environment."""

    return HubSpotCompanyStore(config=config or get_hubspot_config())


if TYPE_CHECKING:
    _store_check: CompanyStore = HubSpotCompanyStore(config=get_hubspot_config())
