"""Unit tests for the keyed Debouncer."""
import asyncio

import pytest

from ub_dashboard.application.debounce import Debouncer


class TestDebouncer:
    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Debouncer(-0.1)

    def test_only_last_call_runs(self):
        async def run():
            out = []
            debouncer = Debouncer(0.01)
            debouncer.call("search", lambda: out.append("a"))
            debouncer.call("search", lambda: out.append("ab"))
            debouncer.call("search", lambda: out.append("abc"))
            assert out == []
            assert await debouncer.wait("search") is True
            assert out == ["abc"]
            assert not debouncer.pending("search")

        asyncio.run(run())

    def test_callback_waits_for_delay(self):
        async def run():
            out = []
            debouncer = Debouncer(0.2)
            debouncer.call("k", lambda: out.append(1))
            await asyncio.sleep(0.02)
            assert out == []
            assert debouncer.pending("k")
            debouncer.cancel_all()

        asyncio.run(run())

    def test_keys_are_independent(self):
        async def run():
            out = []
            debouncer = Debouncer(0.01)
            debouncer.call("a", lambda: out.append("a"))
            debouncer.call("b", lambda: out.append("b"))
            assert len(debouncer) == 2
            await debouncer.wait("a")
            await debouncer.wait("b")
            assert sorted(out) == ["a", "b"]
            assert len(debouncer) == 0

        asyncio.run(run())

    def test_cancel(self):
        async def run():
            out = []
            debouncer = Debouncer(0.01)
            debouncer.call("k", lambda: out.append(1))
            waiter = asyncio.ensure_future(debouncer.wait("k"))
            await asyncio.sleep(0)
            assert debouncer.cancel("k") is True
            assert await waiter is False
            await asyncio.sleep(0.03)
            assert out == []
            assert debouncer.cancel("k") is False

        asyncio.run(run())

    def test_flush_runs_now(self):
        async def run():
            out = []
            debouncer = Debouncer(10)
            debouncer.call("k", lambda: out.append(1))
            assert debouncer.flush("k") is True
            assert out == [1]
            assert debouncer.flush("k") is False

        asyncio.run(run())

    def test_wait_without_pending_call(self):
        async def run():
            assert await Debouncer(0.01).wait("nothing") is False

        asyncio.run(run())

    def test_call_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            Debouncer(0.01).call("k", lambda: None)
