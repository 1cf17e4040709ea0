from __future__ import annotations

import logging
from collections.abc import Iterator  # noqa: TC003

import pytest

from company_dedup.common import configure_logging


@pytest.fixture
def restore_httpx_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("httpx")
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_info_level_quiets_httpx(restore_httpx_logger: logging.Logger) -> None:
    restore_httpx_logger.setLevel(logging.NOTSET)

    configure_logging(level=logging.INFO)

    assert restore_httpx_logger.level == logging.WARNING


def test_debug_level_keeps_httpx_request_lines(restore_httpx_logger: logging.Logger) -> None:
    restore_httpx_logger.setLevel(logging.NOTSET)

    configure_logging(level=logging.DEBUG)

    assert restore_httpx_logger.level == logging.NOTSET
