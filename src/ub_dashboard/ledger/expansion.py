"""Ledger – expanded-row bookkeeping."""
from __future__ import annotations

from typing import Iterator


class ExpandedEntries:
    """Ids of the ledger rows currently showing their details."""

    def __init__(self) -> None:
        self._ids: set[int] = set()

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, entry_id: int) -> bool:
        """Flip *entry_id*; returns ``True`` when it is now expanded."""
        if entry_id in self._ids:
            self._ids.remove(entry_id)
            return False
        self._ids.add(entry_id)
        return True

    def reset(self) -> None:
        self._ids.clear()


__all__ = ["ExpandedEntries"]
