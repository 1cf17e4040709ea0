#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from company_dedup.app import deduplicate_hubspot_company
from company_dedup.common import configure_logging
from company_dedup.config import ConfigurationError, get_dedup_config
from company_dedup.domain import DedupOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="company-dedup",
        description="Merge a HubSpot company into its oldest exact-match duplicate",
    )
    parser.add_argument("company_id", help="Id of the company to deduplicate")
    parser.add_argument(
        "--identifying-attribute",
        type=str,
        help="Property every duplicate must share (defaults to config)",
    )
    parser.add_argument(
        "--secondary-attribute",
        dest="secondary_attributes",
        action="append",
        metavar="NAME",
        help="Corroborating property; repeat for several (defaults to config)",
    )
    parser.add_argument(
        "--name-only",
        action="store_true",
        help="Match on the identifying attribute alone",
    )
    parser.add_argument(
        "--status-attribute",
        type=str,
        help="Property holding the deduplication status marker (defaults to config)",
    )
    parser.add_argument(
        "--search-limit",
        type=int,
        help="Maximum number of search results to consider (defaults to config)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _validate_company_id(value: str) -> str:
    normalized = value.strip()
    if not (normalized.isascii() and normalized.isdigit()):
        raise ValueError(f"Company id must be numeric: {value}")
    return normalized


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        company_id = _validate_company_id(parsed_args.company_id)
        secondary = () if parsed_args.name_only else parsed_args.secondary_attributes
        config = get_dedup_config().with_overrides(
            identifying_attribute=parsed_args.identifying_attribute,
            secondary_attributes=tuple(secondary) if secondary is not None else None,
            status_attribute=parsed_args.status_attribute,
            search_limit=parsed_args.search_limit,
        )
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        outcome = deduplicate_hubspot_company(company_id, config=config)
    except Exception as exc:  # noqa: BLE001
        log.exception(f"Unexpected failure while deduplicating company {company_id}")
        outcome = DedupOutcome.failed(str(exc), company_id=company_id)
    print(json.dumps(outcome.to_output_fields(), indent=2))
    if outcome.is_error:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
