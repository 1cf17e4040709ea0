from __future__ import annotations

import asyncio

import httpx

from company_dedup.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    build_retry,
)


def test_build_retry_only_replays_idempotent_methods() -> None:
    retry = build_retry(RetryPolicy())

    assert retry.is_retryable_method("GET")
    assert retry.is_retryable_method("PATCH")
    assert not retry.is_retryable_method("POST")


def test_clients_with_the_same_name_share_a_limiter() -> None:
    config = ResilienceConfig(
        name="shared-limiter-test",
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )

    first = ResilientClient(config)
    second = ResilientClient(config)

    assert first._limiter is not None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert first._limiter is second._limiter  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_client_without_ratelimit_has_no_limiter() -> None:
    client = ResilientClient(ResilienceConfig(name="unlimited-test"))

    assert client._limiter is None  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_request_passes_through_the_limiter() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="limited-request-test",
        base_url="https://api.example.test",
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url="https://api.example.test",
                transport=httpx.MockTransport(handler),
            )
            return await client.request("PATCH", "/things/1", json={"a": 1})

    response = asyncio.run(run())

    assert response.status_code == 200
    (request,) = seen
    assert request.method == "PATCH"
    assert str(request.url) == "https://api.example.test/things/1"
