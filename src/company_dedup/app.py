"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from company_dedup.adapters.hubspot import WorkflowEvent, build_hubspot_store
from company_dedup.config import ConfigurationError, get_dedup_config
from company_dedup.domain import (
    DedupOutcome,
    ErrorKind,
    InvalidEventError,
    OutputFields,
    deduplicate_company,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from company_dedup.config import DedupConfig
    from company_dedup.domain import CompanyId, CompanyStore

type StoreFactory = Callable[[], CompanyStore]


log = getLogger(__name__)


def deduplicate_hubspot_company(
    company_id: CompanyId,
    *,
    store: CompanyStore | None = None,
    store_factory: StoreFactory | None = None,
    config: DedupConfig | None = None,
) -> DedupOutcome:
    """Deduplicate one company using the configured adapters.

    Configuration problems (for example a missing access token) are reported as an
    ``error`` outcome rather than raised, matching how CRM failures are reported.
    """

    try:
        effective_config = config or get_dedup_config()
        effective_store = store or (store_factory or build_hubspot_store)()
    except ConfigurationError as exc:
        log.error(f"Cannot deduplicate company {company_id}: {exc}")
        return DedupOutcome.failed(str(exc), kind=ErrorKind.CONFIGURATION, company_id=company_id)

    log.info(
        "Starting company deduplication: company_id=%s, identifying_attribute=%s, "
        "secondary_attributes=%s",
        company_id,
        effective_config.identifying_attribute,
        ", ".join(effective_config.secondary_attributes) or "-",
    )
    outcome = deduplicate_company(company_id, store=effective_store, config=effective_config)
    log.info(f"Finished company deduplication: {outcome.to_output_fields()}")
    return outcome


def parse_event(event: Mapping[str, object]) -> CompanyId:
    """Return the enrolled company id or raise :class:`InvalidEventError`."""

    try:
        return WorkflowEvent.model_validate(event).company_id
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidEventError(f"Invalid workflow event: {errors}") from exc


def handle_event(
    event: Mapping[str, object],
    *,
    store: CompanyStore | None = None,
    store_factory: StoreFactory | None = None,
    config: DedupConfig | None = None,
) -> dict[str, OutputFields]:
    """Workflow custom-code entry point: ``{"object": {"objectId": ...}}`` in,
    ``{"outputFields": {...}}`` out. Never raises."""

    try:
        company_id = parse_event(event)
    except InvalidEventError as exc:
        log.error(str(exc))
        return {"outputFields": DedupOutcome.from_error(exc).to_output_fields()}

    try:
        outcome = deduplicate_hubspot_company(
            company_id,
            store=store,
            store_factory=store_factory,
            config=config,
        )
    except Exception as exc:  # noqa: BLE001
        log.exception(f"Unexpected failure while deduplicating company {company_id}")
        outcome = DedupOutcome.failed(str(exc), company_id=company_id)

    return {"outputFields": outcome.to_output_fields()}
