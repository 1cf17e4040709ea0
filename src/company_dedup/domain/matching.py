"""Match-query construction for duplicate searches."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from company_dedup.config.dedup import DedupConfig

    from .model import CompanySnapshot

log = getLogger(__name__)

# HubSpot rejects searches with more than five filter groups.
MAX_FILTER_GROUPS: Final[int] = 5


@dataclass(frozen=True, slots=True)
class PropertyFilter:
    """Exact equality on one property."""

    property_name: str
    value: str

    def matches(self, properties: Mapping[str, str | None]) -> bool:
        return properties.get(self.property_name) == self.value


@dataclass(frozen=True, slots=True)
class FilterGroup:
    """Filters AND-ed together."""

    filters: tuple[PropertyFilter, ...]

    def matches(self, properties: Mapping[str, str | None]) -> bool:
        return all(f.matches(properties) for f in self.filters)


@dataclass(frozen=True, slots=True)
class MatchQuery:
    """Filter groups OR-ed together, as understood by the CRM search endpoint."""

    filter_groups: tuple[FilterGroup, ...]
    corroborating_attributes: tuple[str, ...] = ()

    @property
    def name_only(self) -> bool:
        return not self.corroborating_attributes

    def matches(self, properties: Mapping[str, str | None]) -> bool:
        return any(group.matches(properties) for group in self.filter_groups)


def build_match_query(company: CompanySnapshot, config: DedupConfig) -> MatchQuery | None:
    """Build the duplicate search for ``company``.

    Returns ``None`` when the identifying attribute is blank; no duplicates can be
    determined then. Each secondary attribute with a value becomes its own filter
    group paired with the identifying attribute, so a candidate must share the
    identifying value *and* at least one secondary value. Without any secondary
    values the query falls back to the identifying attribute alone.
    """

    identifying_value = company.value(config.identifying_attribute)
    if identifying_value is None:
        log.info(
            f"Company {company.company_id} has no {config.identifying_attribute}; "
            "duplicates cannot be determined"
        )
        return None

    base = PropertyFilter(config.identifying_attribute, identifying_value)
    groups: list[FilterGroup] = []
    corroborating: list[str] = []
    for attribute in config.secondary_attributes:
        if attribute == config.identifying_attribute:
            continue
        value = company.value(attribute)
        if value is None:
            continue
        if len(groups) >= MAX_FILTER_GROUPS:
            log.warning(
                f"Ignoring secondary attribute {attribute}: "
                f"search supports at most {MAX_FILTER_GROUPS} filter groups"
            )
            continue
        groups.append(FilterGroup((base, PropertyFilter(attribute, value))))
        corroborating.append(attribute)

    if not groups:
        log.info(
            "No secondary attributes set, using name-only matching on %s = %s",
            config.identifying_attribute,
            identifying_value,
        )
        return MatchQuery(filter_groups=(FilterGroup((base,)),))

    log.info(
        "Matching on %s = %s corroborated by any of: %s",
        config.identifying_attribute,
        identifying_value,
        ", ".join(corroborating),
    )
    return MatchQuery(filter_groups=tuple(groups), corroborating_attributes=tuple(corroborating))
