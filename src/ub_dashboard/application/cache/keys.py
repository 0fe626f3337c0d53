"""Application cache – CacheKey builder."""
from __future__ import annotations

import hashlib
import json
from typing import Sequence

from ub_dashboard.application.pagination import RequestParameters

__all__ = ["CacheKey"]


class CacheKey:
    """Factory for deterministic cache key strings."""

    @staticmethod
    def namespace(query_key: Sequence[str]) -> str:
        return "/".join(query_key)

    @staticmethod
    def for_query(query_key: Sequence[str], params: RequestParameters) -> str:
        # deterministic: sort keys, JSON-encode, SHA-256 first 16 hex chars
        canonical = json.dumps(params.as_dict(), sort_keys=True, default=str)
        digest = hashlib.sha256(canonical.encode()).hexdigest()[:16]
        return f"query:{CacheKey.namespace(query_key)}:{digest}"
