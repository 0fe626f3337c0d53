"""Application-layer errors – failures surfaced to list views."""

from __future__ import annotations

from typing import Any, Sequence

from ub_dashboard.kernel.errors.base import BaseError, describe


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class QueryFetchError(ApplicationError):
    """A table query function rejected.

    The controller models exactly one failure kind; whatever the query
    function raised (network failure, non-2xx response, malformed payload)
    is kept as ``cause``.
    """

    default_code = "query_fetch_failed"

    def __init__(
        self,
        query_key: Sequence[str],
        parameters: dict[str, Any],
        *,
        cause: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        reason = describe(cause) if cause is not None else "unknown error"
        super().__init__(
            f"Query {'/'.join(query_key)} failed: {reason}",
            detail={"query_key": list(query_key), "parameters": parameters},
            cause=cause,
            **kwargs,
        )
        self.query_key = tuple(query_key)
        self.parameters = parameters


class TimeoutError(ApplicationError):  # noqa: A001
    """Operation timed out."""

    default_code = "timeout"


__all__ = ["ApplicationError", "QueryFetchError", "TimeoutError"]
