"""Unit tests for frame schedulers."""

import asyncio

from dlcnet.core.types import Node
from dlcnet.layout.scheduler import AsyncioFrameScheduler, ManualScheduler
from dlcnet.layout.simulation import LayoutEngine


class TestManualScheduler:
    def test_runs_in_order_and_cancels(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(lambda: calls.append("a"))
        handle = scheduler.schedule(lambda: calls.append("b"))
        scheduler.schedule(lambda: calls.append("c"))
        scheduler.cancel(handle)

        assert scheduler.run_until_idle() == 2
        assert calls == ["a", "c"]
        assert scheduler.run_next() is False


class TestAsyncioFrameScheduler:
    def test_engine_settles_on_event_loop(self):
        async def scenario():
            nodes = [Node(id=n, label=n, region="US", full_name=n) for n in ("A", "B")]
            engine = LayoutEngine(nodes, [], scheduler=AsyncioFrameScheduler(interval=0))
            done = asyncio.Event()
            engine.add_tick_listener(lambda eng: None if eng.is_running else done.set())
            engine.start()
            await asyncio.wait_for(done.wait(), timeout=10)
            return engine

        engine = asyncio.run(scenario())

        assert not engine.is_running
        assert engine.alpha < engine.settings.alpha_min

    def test_stop_cancels_pending_handle(self):
        async def scenario():
            nodes = [Node(id="A", label="A", region="US", full_name="A")]
            engine = LayoutEngine(nodes, [], scheduler=AsyncioFrameScheduler(interval=0.05))
            engine.start()
            engine.stop()
            await asyncio.sleep(0.1)
            return engine

        engine = asyncio.run(scenario())

        assert engine.tick_count == 0
