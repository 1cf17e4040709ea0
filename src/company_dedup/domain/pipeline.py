"""Step-based pipeline deduplicating one enrolled company.

Steps run in a fixed order against a shared :class:`DedupContext`. A step either
returns ``None`` to hand over to the next step, returns a terminal
:class:`DedupOutcome`, or raises a :class:`DeduplicationError` whose ``kind``
names the failed stage. The pipeline stops at the first outcome or error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .errors import DeduplicationError, FetchError
from .matching import build_match_query
from .merging import MergeDirector, plan_merge
from .model import DedupStatus, company_id_key
from .outcome import DedupOutcome
from .ports import CompanyStoreError
from .resolution import resolve_duplicates

if TYPE_CHECKING:
    from collections.abc import Sequence

    from company_dedup.config.dedup import DedupConfig

    from .matching import MatchQuery
    from .model import CompanyId, CompanySnapshot
    from .ports import CompanyStore
    from .resolution import Resolution

log = getLogger(__name__)


@dataclass(slots=True)
class DedupContext:
    """Values handed from one step to the next during a single run."""

    company_id: CompanyId
    company: CompanySnapshot | None = None
    status: DedupStatus = DedupStatus.UNSET
    query: MatchQuery | None = None
    resolution: Resolution | None = None

    def require_company(self) -> CompanySnapshot:
        if self.company is None:
            raise RuntimeError("Company must be fetched before this step")
        return self.company

    def require_resolution(self) -> Resolution:
        if self.resolution is None:
            raise RuntimeError("Duplicates must be resolved before this step")
        return self.resolution


class PipelineStep(Protocol):
    """Contract implemented by each deduplication step."""

    name: str

    def run(self, context: DedupContext) -> DedupOutcome | None: ...


@dataclass(slots=True)
class FetchCompanyStep:
    store: CompanyStore
    config: DedupConfig
    name: str = "fetch"

    def run(self, context: DedupContext) -> DedupOutcome | None:
        try:
            company = self.store.get_company(
                context.company_id,
                properties=self.config.fetch_properties,
            )
        except CompanyStoreError as exc:
            raise FetchError(str(exc), company_id=context.company_id) from exc

        if company_id_key(company.company_id) != company_id_key(context.company_id):
            log.info(
                f"Company {context.company_id} resolves to company {company.company_id}; "
                "it was merged away, skipping"
            )
            return DedupOutcome.already_merged(context.company_id)

        context.company = company
        log.info(
            f"Looking for duplicates based on {self.config.identifying_attribute} = "
            f"{company.value(self.config.identifying_attribute)}"
        )
        for attribute in (*self.config.secondary_attributes, *self.config.logging_attributes):
            value = company.value(attribute)
            if value is not None:
                log.info(f"Company {attribute}: {value}")
        return None


@dataclass(slots=True)
class StatusGateStep:
    config: DedupConfig
    name: str = "status_gate"

    def run(self, context: DedupContext) -> DedupOutcome | None:
        company = context.require_company()
        context.status = DedupStatus.parse(company.value(self.config.status_attribute))

        match context.status:
            case DedupStatus.MERGED:
                log.info(f"Company {context.company_id} is already merged, skipping")
                return DedupOutcome.already_merged(context.company_id)
            case DedupStatus.PRIMARY:
                log.info(
                    f"Company {context.company_id} is primary, re-checking for new duplicates"
                )
                return None
            case DedupStatus.UNSET:
                return None


@dataclass(slots=True)
class BuildMatchQueryStep:
    config: DedupConfig
    name: str = "match_query"

    def run(self, context: DedupContext) -> DedupOutcome | None:
        context.query = build_match_query(context.require_company(), self.config)
        return None


@dataclass(slots=True)
class ResolveDuplicatesStep:
    store: CompanyStore
    config: DedupConfig
    name: str = "resolve"

    def run(self, context: DedupContext) -> DedupOutcome | None:
        context.resolution = resolve_duplicates(
            self.store,
            context.query,
            current_id=context.company_id,
            limit=self.config.search_limit,
        )
        return None


@dataclass(slots=True)
class MergeStep:
    store: CompanyStore
    config: DedupConfig
    name: str = "merge"

    def run(self, context: DedupContext) -> DedupOutcome | None:
        resolution = context.require_resolution()
        plan = plan_merge(resolution)
        director = MergeDirector(self.store, status_attribute=self.config.status_attribute)
        director.execute(plan)

        if not plan.merges:
            return DedupOutcome.no_duplicates(context.company_id)
        if plan.current_is_primary and plan.remaining_duplicates:
            log.info(
                f"{plan.remaining_duplicates} duplicate(s) remain for company {plan.primary_id}; "
                "they are merged on subsequent runs"
            )
        return DedupOutcome.merged(plan, resolution)


@dataclass(slots=True)
class DeduplicationPipeline:
    """Run the configured steps in order and always produce an outcome."""

    steps: Sequence[PipelineStep] = field(default_factory=tuple)

    def run(self, company_id: CompanyId) -> DedupOutcome:
        context = DedupContext(company_id=company_id)
        try:
            for step in self.steps:
                log.debug(f"Running step {step.name} for company {company_id}")
                outcome = step.run(context)
                if outcome is not None:
                    return outcome
        except DeduplicationError as exc:
            log.error(f"Deduplication of company {company_id} failed ({exc.kind}): {exc}")
            return DedupOutcome.from_error(exc, company_id=company_id)
        raise RuntimeError(f"No step produced an outcome for company {company_id}")


def build_pipeline(*, store: CompanyStore, config: DedupConfig) -> DeduplicationPipeline:
    return DeduplicationPipeline(
        steps=(
            FetchCompanyStep(store, config),
            StatusGateStep(config),
            BuildMatchQueryStep(config),
            ResolveDuplicatesStep(store, config),
            MergeStep(store, config),
        )
    )


def deduplicate_company(
    company_id: CompanyId,
    *,
    store: CompanyStore,
    config: DedupConfig,
) -> DedupOutcome:
    """Deduplicate ``company_id`` with the default step sequence."""

    return build_pipeline(store=store, config=config).run(company_id)
