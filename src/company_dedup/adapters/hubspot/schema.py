"""Minimal Pydantic models for the HubSpot CRM v3 companies API and workflow events."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HubSpotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)


class CompanyObject(HubSpotBaseModel):
    id: str
    properties: dict[str, str | None] = Field(default_factory=dict)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    archived: bool = False


class SearchPaging(HubSpotBaseModel):
    after: str | None = None


class SearchNextPage(HubSpotBaseModel):
    next: SearchPaging | None = None


class CompanySearchResponse(HubSpotBaseModel):
    total: int = 0
    results: list[CompanyObject] = Field(default_factory=list["CompanyObject"])
    paging: SearchNextPage | None = None


class ErrorResponse(HubSpotBaseModel):
    status: str | None = None
    message: str = "Unknown HubSpot error"
    category: str | None = None
    correlation_id: str | None = Field(default=None, alias="correlationId")


class SearchFilter(HubSpotBaseModel):
    property_name: str = Field(alias="propertyName")
    operator: Literal["EQ"] = "EQ"
    value: str


class SearchFilterGroup(HubSpotBaseModel):
    filters: list[SearchFilter]


class SearchSort(HubSpotBaseModel):
    property_name: str = Field(alias="propertyName")
    direction: Literal["ASCENDING", "DESCENDING"] = "ASCENDING"


class CompanySearchRequest(HubSpotBaseModel):
    filter_groups: list[SearchFilterGroup] = Field(alias="filterGroups")
    sorts: list[SearchSort] = Field(default_factory=list["SearchSort"])
    properties: list[str] = Field(default_factory=list)
    limit: int = 100


class PropertiesUpdate(HubSpotBaseModel):
    properties: dict[str, str]


class MergeRequest(HubSpotBaseModel):
    primary_object_id: str = Field(alias="primaryObjectId")
    object_id_to_merge: str = Field(alias="objectIdToMerge")


class EnrolledObject(HubSpotBaseModel):
    object_id: str = Field(alias="objectId")
    object_type: str | None = Field(default=None, alias="objectType")

    @field_validator("object_id")
    @classmethod
    def _numeric_id(cls, value: str) -> str:
        stripped = value.strip()
        if not (stripped.isascii() and stripped.isdigit()):
            msg = f"objectId must be a numeric record id, got {value!r}"
            raise ValueError(msg)
        return stripped


class WorkflowEvent(HubSpotBaseModel):
    """Payload a workflow custom-code action hands to ``main(event)``."""

    enrolled_object: EnrolledObject = Field(alias="object")
    input_fields: dict[str, object] = Field(default_factory=dict, alias="inputFields")
    callback_id: str | None = Field(default=None, alias="callbackId")
    origin: dict[str, object] = Field(default_factory=dict)

    @property
    def company_id(self) -> str:
        return self.enrolled_object.object_id
