"""Shared logging helpers for company deduplication."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format that stays readable in workflow action logs.
    Pass ``force=True`` to reconfigure during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )

    # httpx logs every request line at INFO, which drowns out the dedup decisions.
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
