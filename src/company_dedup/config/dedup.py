"""Company deduplication settings.

The settings are frozen and handed to the pipeline when it is built, so a test
or a second workflow action can run with a different attribute set without
touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from .env import optional_env_int, optional_env_list, optional_env_var
from .errors import ConfigurationError

DEFAULT_IDENTIFYING_ATTRIBUTE: Final[str] = "name"
DEFAULT_SECONDARY_ATTRIBUTES: Final[tuple[str, ...]] = (
    "domain",
    "linkedin_company_page",
    "website",
)
DEFAULT_LOGGING_ATTRIBUTES: Final[tuple[str, ...]] = ("phone", "address", "city", "country")
DEFAULT_STATUS_ATTRIBUTE: Final[str] = "deduplication_status"
DEFAULT_SEARCH_LIMIT: Final[int] = 100


@dataclass(frozen=True, slots=True)
class DedupConfig:
    identifying_attribute: str = DEFAULT_IDENTIFYING_ATTRIBUTE
    secondary_attributes: tuple[str, ...] = DEFAULT_SECONDARY_ATTRIBUTES
    logging_attributes: tuple[str, ...] = DEFAULT_LOGGING_ATTRIBUTES
    status_attribute: str = DEFAULT_STATUS_ATTRIBUTE
    search_limit: int = DEFAULT_SEARCH_LIMIT

    def __post_init__(self) -> None:
        if not self.identifying_attribute.strip():
            raise ConfigurationError("identifying_attribute must not be blank")
        if not self.status_attribute.strip():
            raise ConfigurationError("status_attribute must not be blank")
        if not 1 <= self.search_limit <= DEFAULT_SEARCH_LIMIT:
            msg = (
                f"search_limit must be between 1 and {DEFAULT_SEARCH_LIMIT}, "
                f"got {self.search_limit}"
            )
            raise ConfigurationError(msg)

    @property
    def fetch_properties(self) -> tuple[str, ...]:
        """Every property the fetch step needs, in order and without repeats."""

        ordered = (
            self.identifying_attribute,
            *self.secondary_attributes,
            *self.logging_attributes,
            self.status_attribute,
        )
        return tuple(dict.fromkeys(ordered))

    def with_overrides(
        self,
        *,
        identifying_attribute: str | None = None,
        secondary_attributes: tuple[str, ...] | None = None,
        logging_attributes: tuple[str, ...] | None = None,
        status_attribute: str | None = None,
        search_limit: int | None = None,
    ) -> DedupConfig:
        changes: dict[str, object] = {
            "identifying_attribute": identifying_attribute,
            "secondary_attributes": secondary_attributes,
            "logging_attributes": logging_attributes,
            "status_attribute": status_attribute,
            "search_limit": search_limit,
        }
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def get_dedup_config() -> DedupConfig:
    """Build the settings from defaults, honouring ``COMPANY_DEDUP_*`` overrides."""

    return DedupConfig().with_overrides(
        identifying_attribute=optional_env_var("COMPANY_DEDUP_IDENTIFYING_ATTRIBUTE"),
        secondary_attributes=optional_env_list("COMPANY_DEDUP_SECONDARY_ATTRIBUTES"),
        logging_attributes=optional_env_list("COMPANY_DEDUP_LOGGING_ATTRIBUTES"),
        status_attribute=optional_env_var("COMPANY_DEDUP_STATUS_ATTRIBUTE"),
        search_limit=optional_env_int("COMPANY_DEDUP_SEARCH_LIMIT"),
    )
