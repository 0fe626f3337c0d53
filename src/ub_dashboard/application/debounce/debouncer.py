"""Application debounce – keyed trailing-edge debouncer on the asyncio loop."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Hashable

__all__ = ["Debouncer"]


class Debouncer:
    """Run only the last callback scheduled per key within *delay* seconds.

    Each :meth:`call` for a key cancels the key's pending timer and starts a
    new one; when a timer finally expires its callback runs on the event loop.
    One instance serves any number of independent keys (a search box, a row
    of an editable grid, ...).

    Usage::

        debouncer = Debouncer(0.3)
        debouncer.call("search", lambda: apply_search(text))
        ...
        debouncer.cancel_all()   # on teardown
    """

    def __init__(self, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._delay = delay
        self._handles: dict[Hashable, asyncio.TimerHandle] = {}
        self._callbacks: dict[Hashable, Callable[[], Any]] = {}
        self._waiters: dict[Hashable, asyncio.Future[bool]] = {}

    @property
    def delay(self) -> float:
        return self._delay

    def __len__(self) -> int:
        return len(self._handles)

    def pending(self, key: Hashable) -> bool:
        return key in self._handles

    def call(self, key: Hashable, fn: Callable[[], Any]) -> None:
        """(Re)schedule *fn* for *key*, replacing any pending callback."""
        loop = asyncio.get_running_loop()
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()
        self._callbacks[key] = fn
        if key not in self._waiters:
            self._waiters[key] = loop.create_future()
        self._handles[key] = loop.call_later(self._delay, self._fire, key)

    def flush(self, key: Hashable) -> bool:
        """Run the pending callback for *key* now. Returns ``False`` if none."""
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        self._fire(key, scheduled=False)
        return True

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending callback for *key* without running it."""
        handle = self._handles.pop(key, None)
        self._callbacks.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        self._resolve(key, fired=False)
        return True

    def cancel_all(self) -> None:
        for key in list(self._handles):
            self.cancel(key)

    async def wait(self, key: Hashable) -> bool:
        """Wait until *key*'s pending callback runs (``True``) or is cancelled (``False``)."""
        waiter = self._waiters.get(key)
        if waiter is None:
            return False
        return await asyncio.shield(waiter)

    def _fire(self, key: Hashable, scheduled: bool = True) -> None:
        if scheduled:
            self._handles.pop(key, None)
        fn = self._callbacks.pop(key, None)
        try:
            if fn is not None:
                fn()
        finally:
            self._resolve(key, fired=fn is not None)

    def _resolve(self, key: Hashable, fired: bool) -> None:
        waiter = self._waiters.pop(key, None)
        if waiter is not None and not waiter.done():
            waiter.set_result(fired)
