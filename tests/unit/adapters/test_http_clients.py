"""Unit tests – HTTP adapter."""
from __future__ import annotations

import asyncio

import httpx
import pytest
import respx

from ub_dashboard.adapters.http import HttpxHttpClient, RetryingHttpClient
from ub_dashboard.kernel.errors import (
    ExternalServiceError,
    SerializationError,
    TimeoutError as AppTimeoutError,
)


# ---------------------------------------------------------------------------
# Authorization header
# ---------------------------------------------------------------------------

class TestAuthorization:
    @respx.mock
    def test_bearer_token_sent(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            async with HttpxHttpClient(auth_token="tok-1") as client:
                await client.get("http://svc/ok")

        asyncio.run(run())
        assert route.calls.last.request.headers["authorization"] == "Bearer tok-1"

    @respx.mock
    def test_no_token_no_header(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            async with HttpxHttpClient() as client:
                await client.get("http://svc/ok")

        asyncio.run(run())
        assert "authorization" not in route.calls.last.request.headers

    @respx.mock
    def test_token_can_be_swapped(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            async with HttpxHttpClient(auth_token="old") as client:
                client.set_auth_token("new")
                await client.get("http://svc/ok")

        asyncio.run(run())
        assert route.calls.last.request.headers["authorization"] == "Bearer new"

    @respx.mock
    def test_explicit_header_wins(self) -> None:
        route = respx.get("http://svc/ok").mock(return_value=httpx.Response(200))

        async def run() -> None:
            async with HttpxHttpClient(auth_token="tok") as client:
                await client.get("http://svc/ok", headers={"Authorization": "Basic abc"})

        asyncio.run(run())
        assert route.calls.last.request.headers["authorization"] == "Basic abc"


# ---------------------------------------------------------------------------
# JSON helper
# ---------------------------------------------------------------------------

class TestGetJson:
    @respx.mock
    def test_decodes_body_and_drops_none_params(self) -> None:
        route = respx.get(host="svc", path="/items").mock(
            return_value=httpx.Response(200, json={"items": [], "total": 0})
        )

        async def run() -> object:
            async with HttpxHttpClient("http://svc") as client:
                return await client.get_json("/items", params={"page": 1, "search": None})

        assert asyncio.run(run()) == {"items": [], "total": 0}
        params = route.calls.last.request.url.params
        assert params["page"] == "1"
        assert "search" not in params

    @respx.mock
    def test_invalid_json(self) -> None:
        respx.get("http://svc/items").mock(return_value=httpx.Response(200, text="<html>"))

        async def run() -> None:
            async with HttpxHttpClient("http://svc") as client:
                await client.get_json("/items")

        with pytest.raises(SerializationError):
            asyncio.run(run())


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

class TestErrorMapping:
    @respx.mock
    def test_status_error(self) -> None:
        respx.get("http://svc/missing").mock(return_value=httpx.Response(404))

        async def run() -> None:
            async with HttpxHttpClient() as client:
                await client.get("http://svc/missing")

        with pytest.raises(ExternalServiceError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.status_code == 404

    @respx.mock
    def test_timeout(self) -> None:
        respx.get("http://svc/slow").mock(side_effect=httpx.ReadTimeout("slow"))

        async def run() -> None:
            async with HttpxHttpClient() as client:
                await client.get("http://svc/slow")

        with pytest.raises(AppTimeoutError):
            asyncio.run(run())

    @respx.mock
    def test_connection_error(self) -> None:
        respx.get("http://svc/down").mock(side_effect=httpx.ConnectError("refused"))

        async def run() -> None:
            async with HttpxHttpClient() as client:
                await client.get("http://svc/down")

        with pytest.raises(ExternalServiceError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.root_cause, httpx.ConnectError)


# ---------------------------------------------------------------------------
# RetryingHttpClient
# ---------------------------------------------------------------------------

class TestRetryingHttpClient:
    @respx.mock
    def test_retries_transient_failure(self) -> None:
        route = respx.get("http://svc/flaky").mock(
            side_effect=[httpx.Response(503), httpx.Response(200, json={"ok": True})]
        )

        async def run() -> object:
            async with RetryingHttpClient(max_attempts=3, base_delay=0) as client:
                return await client.get_json("http://svc/flaky")

        assert asyncio.run(run()) == {"ok": True}
        assert route.call_count == 2

    @respx.mock
    def test_gives_up_after_max_attempts(self) -> None:
        route = respx.get("http://svc/down").mock(return_value=httpx.Response(500))

        async def run() -> None:
            async with RetryingHttpClient(max_attempts=2, base_delay=0) as client:
                await client.get("http://svc/down")

        with pytest.raises(ExternalServiceError):
            asyncio.run(run())
        assert route.call_count == 2
