"""Application table – TableQueryController.

Single source of truth for "which page of which filtered, sorted data is this
list view showing".  Mutators are synchronous and immediately visible; the
fetches they trigger run as asyncio tasks on the running loop.

Every request is tagged with the cache key of its parameters and a
generation number.  A response is applied only when it belongs to the latest
request issued for the parameters currently on screen, so a slow response
for page 1 can never overwrite the page 2 the user already moved to.
"""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Awaitable, Callable, Generic, Mapping, Sequence, TypeVar

from ub_dashboard.application.cache import CacheKey, QueryCache
from ub_dashboard.application.debounce import Debouncer
from ub_dashboard.application.pagination import (
    Pagination,
    QueryResult,
    RequestParameters,
    Sorting,
    total_pages,
)
from ub_dashboard.application.table.options import QueryOptions
from ub_dashboard.config.settings import TableSettings
from ub_dashboard.kernel.errors import QueryFetchError, SerializationError
from ub_dashboard.kernel.time import Clock
from ub_dashboard.observability.logging import get_logger

T = TypeVar("T")

QueryFn = Callable[[RequestParameters], Awaitable[QueryResult[T]]]

DEFAULT_DEBOUNCE_MS = 300
GLOBAL_FILTER_KEY = "global_filter"


def _coerce_result(value: Any) -> QueryResult[Any]:
    if isinstance(value, QueryResult):
        return value
    if isinstance(value, Mapping) and "items" in value and "total" in value:
        return QueryResult(items=list(value["items"]), total=int(value["total"]))
    raise SerializationError(
        f"Query function returned {type(value).__name__}, expected QueryResult",
        payload_type=type(value).__name__,
    )


class TableQueryController(Generic[T]):
    """Pagination, sorting, filters and debounced search driving *query_fn*.

    Must be constructed while an event loop is running: unless
    ``query_options.enabled`` is false the first fetch is scheduled right
    away.  Use it as an async context manager (or call :meth:`aclose`) to
    cancel the debounce timer and outstanding fetches when the owning view
    goes away.

    Usage::

        async with TableQueryController(
            query_key=["employers"],
            query_fn=backend.query_fn("/api/v1/employers"),
            initial_sorting=Sorting("name"),
        ) as table:
            table.set_global_filter("acme")
            await table.wait_idle()
            rows = table.data
    """

    def __init__(
        self,
        query_key: Sequence[str],
        query_fn: QueryFn[T],
        *,
        initial_pagination: Pagination | None = None,
        initial_sorting: Sorting | None = None,
        initial_filters: Mapping[str, Any] | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        query_options: QueryOptions | None = None,
        clock: Clock | None = None,
    ) -> None:
        if not query_key:
            raise ValueError("query_key must not be empty")
        if debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")
        self._query_key = tuple(query_key)
        self._query_fn = query_fn
        self._options = query_options or QueryOptions()
        self._retry_policy = self._options.build_retry_policy()
        self._debouncer = Debouncer(debounce_ms / 1000)
        self._cache = QueryCache(clock, max_entries=self._options.cache_size)
        self._tag = CacheKey.namespace(self._query_key)
        self._log = get_logger(__name__, query_key=self._tag)

        self._initial_pagination = initial_pagination or Pagination()
        self._initial_sorting = initial_sorting
        self._initial_filters = dict(initial_filters or {})

        self._pagination = self._initial_pagination
        self._sorting = self._initial_sorting
        self._filters = dict(self._initial_filters)
        self._global_filter = ""
        self._applied_global_filter = ""

        self._enabled = self._options.enabled
        self._result: QueryResult[T] | None = None
        self._error: QueryFetchError | None = None
        self._is_loading = False
        self._current_key: str | None = None
        self._requested_key: str | None = None
        self._generation = 0
        self._latest_issued: dict[str, int] = {}
        self._in_flight: dict[str, asyncio.Task[None]] = {}
        self._closed = False

        self._sync()

    @classmethod
    def from_settings(
        cls,
        settings: TableSettings,
        query_key: Sequence[str],
        query_fn: QueryFn[T],
        *,
        initial_sorting: Sorting | None = None,
        initial_filters: Mapping[str, Any] | None = None,
        clock: Clock | None = None,
        **option_overrides: Any,
    ) -> "TableQueryController[T]":
        """Controller using the page size, debounce and query options of *settings*.

        Extra keyword arguments override individual :class:`QueryOptions` fields.
        """
        return cls(
            query_key,
            query_fn,
            initial_pagination=Pagination(page=1, page_size=settings.page_size),
            initial_sorting=initial_sorting,
            initial_filters=initial_filters,
            debounce_ms=settings.debounce_ms,
            query_options=QueryOptions.from_settings(settings, **option_overrides),
            clock=clock,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def query_key(self) -> tuple[str, ...]:
        return self._query_key

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    @property
    def sorting(self) -> Sorting | None:
        return self._sorting

    @property
    def filters(self) -> dict[str, Any]:
        return dict(self._filters)

    @property
    def global_filter(self) -> str:
        return self._global_filter

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def request_parameters(self) -> RequestParameters:
        """Parameters of the request the current state maps to.

        Uses the debounced global filter, so a keystroke still inside the
        debounce window is not part of it yet.
        """
        return RequestParameters(
            page=self._pagination.page,
            page_size=self._pagination.page_size,
            filters=dict(self._filters),
            sorting=self._sorting,
            global_filter=self._applied_global_filter,
        )

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_fetching(self) -> bool:
        return self._current_key is not None and self._current_key in self._in_flight

    @property
    def is_search_pending(self) -> bool:
        """A global filter change is still waiting out its debounce window."""
        return self._debouncer.pending(GLOBAL_FILTER_KEY)

    @property
    def data(self) -> list[T]:
        return list(self._result.items) if self._result is not None else []

    @property
    def total(self) -> int:
        return self._result.total if self._result is not None else 0

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self._pagination.page_size)

    @property
    def error(self) -> QueryFetchError | None:
        return self._error

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def set_pagination(self, pagination: Pagination) -> None:
        self._pagination = pagination
        self._sync()

    def set_page(self, page: int) -> None:
        self.set_pagination(dataclasses.replace(self._pagination, page=page))

    def set_page_size(self, page_size: int) -> None:
        self.set_pagination(Pagination(page=1, page_size=page_size))

    def next_page(self) -> None:
        # No upper clamp: the true page count is only known once a result arrives.
        self.set_page(self._pagination.page + 1)

    def previous_page(self) -> None:
        if self._pagination.page <= 1:
            return
        self.set_page(self._pagination.page - 1)

    # ------------------------------------------------------------------
    # Sorting and filters (all of these go back to page 1)
    # ------------------------------------------------------------------

    def set_sorting(self, sorting: Sorting | None) -> None:
        self._sorting = sorting
        self._pagination = self._pagination.first()
        self._sync()

    def toggle_sort(self, field: str) -> None:
        if self._sorting is None:
            self.set_sorting(Sorting(field))
        else:
            self.set_sorting(self._sorting.toggled(field))

    def set_filter(self, key: str, value: Any) -> None:
        filters = dict(self._filters)
        filters[key] = value
        self._replace_filters(filters)

    def set_filters(self, filters: Mapping[str, Any]) -> None:
        self._replace_filters(dict(filters))

    def clear_filter(self, key: str) -> None:
        filters = dict(self._filters)
        filters.pop(key, None)
        self._replace_filters(filters)

    def clear_all_filters(self) -> None:
        self._replace_filters({})

    def set_global_filter(self, value: str) -> None:
        """Update the search text now; fetch once typing pauses for ``debounce_ms``."""
        self._global_filter = value
        self._pagination = self._pagination.first()
        if self._closed:
            return
        self._debouncer.call(GLOBAL_FILTER_KEY, self._apply_global_filter)

    def _replace_filters(self, filters: dict[str, Any]) -> None:
        self._filters = filters
        self._pagination = self._pagination.first()
        self._sync()

    def _apply_global_filter(self) -> None:
        self._applied_global_filter = self._global_filter
        self._sync()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not enabled:
            # in-flight results are dropped once disabled
            for task in self._in_flight.values():
                task.cancel()
            self._in_flight.clear()
            self._requested_key = None
            self._is_loading = False
            return
        self._sync()

    def refetch(self) -> asyncio.Task[None] | None:
        """Call the query function again for the current state, even if fresh.

        A search still waiting out its debounce window is applied first.
        Returns the fetch task (``None`` once the controller is closed).
        """
        if self._debouncer.cancel(GLOBAL_FILTER_KEY):
            self._applied_global_filter = self._global_filter
        return self._sync(force=True)

    def invalidate(self) -> asyncio.Task[None] | None:
        """Mark every cached page of this table stale and refetch the visible one."""
        marked = self._cache.invalidate_tag(self._tag)
        self._log.debug("table_cache_invalidated", entries=marked)
        self._requested_key = None
        return self._sync()

    def reset(self) -> None:
        self._debouncer.cancel(GLOBAL_FILTER_KEY)
        self._pagination = self._initial_pagination
        self._sorting = self._initial_sorting
        self._filters = dict(self._initial_filters)
        self._global_filter = ""
        self._applied_global_filter = ""
        self._sync()

    async def wait_idle(self) -> None:
        """Wait for a pending search debounce and every in-flight fetch."""
        while True:
            if self._debouncer.pending(GLOBAL_FILTER_KEY):
                await self._debouncer.wait(GLOBAL_FILTER_KEY)
                continue
            tasks = list(self._in_flight.values())
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def close(self) -> list[asyncio.Task[None]]:
        """Stop the debounce timer and cancel in-flight fetches."""
        self._closed = True
        self._debouncer.cancel_all()
        tasks = list(self._in_flight.values())
        for task in tasks:
            task.cancel()
        self._in_flight.clear()
        self._is_loading = False
        return tasks

    async def aclose(self) -> None:
        tasks = self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "TableQueryController[T]":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _sync(self, force: bool = False) -> asyncio.Task[None] | None:
        params = self.request_parameters
        key = CacheKey.for_query(self._query_key, params)
        if key != self._current_key:
            self._show(key)
        if self._closed:
            return None
        if not self._enabled and not force:
            self._is_loading = False
            return None
        if not force:
            if key == self._requested_key:
                # Same parameters as the last request: nothing new to ask for.
                return self._in_flight.get(key)
            in_flight = self._in_flight.get(key)
            if in_flight is not None:
                self._requested_key = key
                self._is_loading = self._cache.get(key) is None
                return in_flight
            if self._cache.is_fresh(key, self._options.stale_time):
                self._requested_key = key
                self._is_loading = False
                return None
        return self._issue(params, key)

    def _show(self, key: str) -> None:
        self._current_key = key
        self._error = None
        entry = self._cache.get(key)
        if entry is not None:
            self._result = entry.value
        elif not self._options.keep_previous_data:
            self._result = None

    def _issue(self, params: RequestParameters, key: str) -> asyncio.Task[None]:
        loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        self._latest_issued[key] = generation
        self._requested_key = key
        self._is_loading = self._cache.get(key) is None and self._error is None
        task = loop.create_task(self._run(params, key, generation))
        self._in_flight[key] = task
        self._log.debug(
            "table_query_issued",
            page=params.page,
            page_size=params.page_size,
            generation=generation,
        )
        return task

    async def _fetch(self, params: RequestParameters) -> QueryResult[T]:
        async def attempt() -> QueryResult[T]:
            return _coerce_result(await self._query_fn(params))

        if self._retry_policy is None:
            return await attempt()
        return await self._retry_policy.execute_async(attempt)

    async def _run(self, params: RequestParameters, key: str, generation: int) -> None:
        try:
            result = await self._fetch(params)
        except Exception as exc:
            self._on_failure(params, key, generation, exc)
        else:
            self._on_success(params, key, generation, result)
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]
            if self._latest_issued.get(key) == generation:
                del self._latest_issued[key]

    def _is_latest(self, key: str, generation: int) -> bool:
        return self._latest_issued.get(key) == generation

    def _on_success(
        self,
        params: RequestParameters,
        key: str,
        generation: int,
        result: QueryResult[T],
    ) -> None:
        if not self._is_latest(key, generation):
            self._log.debug("table_query_stale_response_discarded", page=params.page, generation=generation)
            return
        self._cache.set(key, result, tags=[self._tag])
        if key != self._current_key:
            self._log.debug("table_query_stale_response_discarded", page=params.page, generation=generation)
            return
        self._result = result
        self._error = None
        self._is_loading = False
        self._log.debug("table_query_succeeded", page=params.page, total=result.total, rows=len(result.items))

    def _on_failure(
        self,
        params: RequestParameters,
        key: str,
        generation: int,
        exc: Exception,
    ) -> None:
        if not self._is_latest(key, generation) or key != self._current_key:
            self._log.debug("table_query_stale_response_discarded", page=params.page, generation=generation)
            return
        self._error = QueryFetchError(self._query_key, params.as_dict(), cause=exc)
        self._is_loading = False
        entry = self._cache.get(key)
        if entry is not None:
            self._result = entry.value
        elif not self._options.keep_previous_data:
            self._result = None
        self._log.warning(
            "table_query_failed",
            page=params.page,
            error=self._error.message,
            cause_type=type(self._error.root_cause).__name__,
        )


__all__ = ["DEFAULT_DEBOUNCE_MS", "GLOBAL_FILTER_KEY", "QueryFn", "TableQueryController"]
