"""Company deduplication domain: matching, canonical selection and merge direction."""

from __future__ import annotations

from .errors import (
    DeduplicationError,
    ErrorKind,
    FetchError,
    InvalidEventError,
    MergeError,
    SearchError,
    UpdateError,
)
from .matching import FilterGroup, MatchQuery, PropertyFilter, build_match_query
from .merging import MergeDirector, MergePlan, plan_merge
from .model import CompanyId, CompanySnapshot, DedupStatus, company_id_key
from .outcome import DedupOutcome, DedupResult, OutputFields
from .pipeline import DeduplicationPipeline, build_pipeline, deduplicate_company
from .ports import CompanyNotFoundError, CompanyStore, CompanyStoreError
from .resolution import Resolution, resolve_duplicates

__all__ = [
    "CompanyId",
    "CompanyNotFoundError",
    "CompanySnapshot",
    "CompanyStore",
    "CompanyStoreError",
    "DedupOutcome",
    "DedupResult",
    "DedupStatus",
    "DeduplicationError",
    "DeduplicationPipeline",
    "ErrorKind",
    "FetchError",
    "FilterGroup",
    "InvalidEventError",
    "MatchQuery",
    "MergeDirector",
    "MergeError",
    "MergePlan",
    "OutputFields",
    "PropertyFilter",
    "Resolution",
    "SearchError",
    "UpdateError",
    "build_match_query",
    "build_pipeline",
    "company_id_key",
    "deduplicate_company",
    "plan_merge",
    "resolve_duplicates",
]
