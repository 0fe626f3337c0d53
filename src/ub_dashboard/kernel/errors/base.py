"""Root error class for the ub-dashboard error hierarchy."""

from __future__ import annotations

import json
from typing import Any


def describe(exc: BaseException) -> str:
    """Short human text for *exc*: ``message`` for hierarchy errors, ``str()`` otherwise."""
    if isinstance(exc, BaseError):
        return exc.message
    return str(exc) or type(exc).__name__


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable text, shown as-is in a table's error panel.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context, JSON-serialisable.
        cause: Exception that triggered this one; also set as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def root_cause(self) -> BaseException:
        """Innermost exception reachable through ``cause`` links (``self`` if none)."""
        current: BaseException = self
        while isinstance(current, BaseError) and current.cause is not None:
            current = current.cause
        return current

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = {"type": type(self.cause).__name__, "message": describe(self.cause)}
        return payload


__all__ = ["BaseError", "describe"]
