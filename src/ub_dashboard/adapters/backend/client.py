"""Backend adapter – list endpoints of the benefits REST API as table queries."""
from __future__ import annotations

import dataclasses
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from ub_dashboard.adapters.http import HttpxHttpClient, RetryingHttpClient
from ub_dashboard.application.pagination import QueryResult, RequestParameters
from ub_dashboard.config.settings import BackendApiSettings
from ub_dashboard.kernel.errors import SerializationError
from ub_dashboard.ledger import LedgerEntry, LedgerFilters, page_offset, parse_ledger_entry
from ub_dashboard.observability.logging import get_logger

T = TypeVar("T")

RESOURCE_PATHS: dict[str, str] = {
    "benefits": "/api/v1/benefits",
    "employers": "/api/v1/employers",
    "members": "/api/v1/members",
    "plans": "/api/v1/plans",
}
LEDGER_ENTRIES_PATH = "/api/v1/members/{member_id}/ledger-entries"
LEDGER_ENTRY_TYPES_PATH = "/api/v1/ledger-entries/types"

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class LedgerEntryTypeOption:
    """One choice of the ledger entry-type filter."""
    value: str
    label: str


def parse_envelope(payload: Any, path: str) -> tuple[list[Any], int]:
    """Read ``{items, total, ...}`` from a list endpoint response."""
    if not isinstance(payload, Mapping):
        raise SerializationError(f"{path} returned {type(payload).__name__}, expected an object")
    items = payload.get("items")
    total = payload.get("total")
    if not isinstance(items, list):
        raise SerializationError(f"{path} response has no 'items' list")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise SerializationError(f"{path} response has invalid 'total': {total!r}")
    return items, total


class BackendApiClient:
    """Turns backend list endpoints into ``query_fn`` callables for tables.

    Usage::

        backend = BackendApiClient.from_settings(BackendApiSettings(), auth_token=token)
        table = TableQueryController(
            query_key=["members"],
            query_fn=backend.query_fn(RESOURCE_PATHS["members"]),
        )
    """

    def __init__(self, http: HttpxHttpClient) -> None:
        self._http = http

    @classmethod
    def from_settings(cls, settings: BackendApiSettings, auth_token: str | None = None) -> "BackendApiClient":
        if settings.max_attempts > 1:
            http: HttpxHttpClient = RetryingHttpClient(
                settings.url,
                settings.timeout,
                max_attempts=settings.max_attempts,
                auth_token=auth_token,
            )
        else:
            http = HttpxHttpClient(settings.url, settings.timeout, auth_token=auth_token)
        return cls(http)

    @property
    def http(self) -> HttpxHttpClient:
        return self._http

    async def __aenter__(self) -> "BackendApiClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._http.__aexit__(*args)

    @staticmethod
    def query_params(params: RequestParameters) -> dict[str, Any]:
        """Query string understood by the backend's paginated list endpoints."""
        query: dict[str, Any] = {"page": params.page, "limit": params.page_size}
        if params.sorting is not None:
            query["sortBy"] = params.sorting.field
            query["sortOrder"] = params.sorting.direction.value
        if params.global_filter:
            query["search"] = params.global_filter
        for key, value in params.filters.items():
            if value is not None:
                query[key] = value
        return query

    async def list_page(self, path: str, query: Mapping[str, Any]) -> QueryResult[dict[str, Any]]:
        payload = await self._http.get_json(path, params=dict(query))
        items, total = parse_envelope(payload, path)
        logger.debug("backend_list_page", path=path, rows=len(items), total=total)
        return QueryResult(items=items, total=total)

    def query_fn(
        self,
        path: str,
        item_parser: Callable[[dict[str, Any]], T] | None = None,
    ) -> Callable[[RequestParameters], Awaitable[QueryResult[Any]]]:
        """``query_fn`` for a table listing *path*, optionally mapping each row."""

        async def fetch(params: RequestParameters) -> QueryResult[Any]:
            result = await self.list_page(path, self.query_params(params))
            return result.map(item_parser) if item_parser is not None else result

        return fetch

    def ledger_query_fn(
        self, member_id: int | str
    ) -> Callable[[RequestParameters], Awaitable[QueryResult[LedgerEntry]]]:
        """``query_fn`` for a member's fund ledger.

        The ledger endpoint pages by ``offset``/``limit`` and reads the
        :class:`LedgerFilters` keys from the table's filter map.
        """
        path = LEDGER_ENTRIES_PATH.format(member_id=member_id)

        async def fetch(params: RequestParameters) -> QueryResult[LedgerEntry]:
            query: dict[str, Any] = {
                "offset": page_offset(params.page, params.page_size),
                "limit": params.page_size,
            }
            query.update(LedgerFilters.from_mapping(params.filters).to_params())
            result = await self.list_page(path, query)
            return result.map(parse_ledger_entry)

        return fetch

    async def ledger_entry_types(self) -> list[LedgerEntryTypeOption]:
        payload = await self._http.get_json(LEDGER_ENTRY_TYPES_PATH)
        if not isinstance(payload, list):
            raise SerializationError(f"{LEDGER_ENTRY_TYPES_PATH} returned {type(payload).__name__}, expected a list")
        try:
            return [LedgerEntryTypeOption(value=str(item["value"]), label=str(item["label"])) for item in payload]
        except (KeyError, TypeError) as exc:
            raise SerializationError(f"{LEDGER_ENTRY_TYPES_PATH} returned a malformed option", cause=exc) from exc


__all__ = [
    "BackendApiClient",
    "LEDGER_ENTRIES_PATH",
    "LEDGER_ENTRY_TYPES_PATH",
    "LedgerEntryTypeOption",
    "RESOURCE_PATHS",
    "parse_envelope",
]
