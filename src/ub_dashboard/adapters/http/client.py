"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from ub_dashboard.kernel.errors import (
    ExternalServiceError,
    SerializationError,
    TimeoutError as AppTimeoutError,
)


class HttpxHttpClient:
    """Thin async httpx wrapper with structured error mapping.

    The bearer token is passed in explicitly (and can be swapped with
    :meth:`set_auth_token`); there is no process-wide session.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        auth_token: str | None = None,
        **kwargs: Any,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)
        self._token = auth_token

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_auth_token(self, token: str | None) -> None:
        self._token = token

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("POST", url, **kwargs)

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET *url* and decode the JSON body; ``None`` query values are dropped."""
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self.get(url, params=query)
        try:
            return response.json()
        except ValueError as exc:
            raise SerializationError(
                f"Response from GET {url} is not valid JSON",
                payload_type=response.headers.get("content-type"),
                cause=exc,
            ) from exc

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if self._token:
            headers.setdefault("Authorization", f"Bearer {self._token}")
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"HTTP request timed out: {method} {url}", cause=exc) from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {exc.response.status_code} from {method} {url}",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc), cause=exc) from exc


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
