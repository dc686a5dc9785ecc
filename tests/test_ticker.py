# tests/test_ticker.py

from __future__ import annotations

import asyncio
import threading

import pytest

from quest_autopilot.quests.ticker import AsyncioTicker, start_ticker_in_background


@pytest.mark.asyncio
async def test_ticker_calls_back_until_cancelled() -> None:
    calls: list[int] = []
    ticker = AsyncioTicker(asyncio.get_running_loop())

    handle = ticker.call_every(0.01, lambda: calls.append(1))
    assert calls == []

    await asyncio.sleep(0.08)
    handle.cancel()
    await asyncio.sleep(0)
    seen = len(calls)
    assert seen >= 2

    await asyncio.sleep(0.05)
    assert len(calls) == seen
    assert handle.done


@pytest.mark.asyncio
async def test_ticker_survives_failing_callback() -> None:
    calls: list[int] = []

    def flaky() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")

    handle = AsyncioTicker(asyncio.get_running_loop()).call_every(0.01, flaky)
    await asyncio.sleep(0.08)
    handle.cancel()

    assert len(calls) >= 2


def test_background_ticker_runs_callbacks_from_other_thread() -> None:
    background = start_ticker_in_background()
    assert background is not None

    fired = threading.Event()
    try:
        handle = background.ticker.call_every(0.01, fired.set)
        assert fired.wait(timeout=2.0)
        handle.cancel()
    finally:
        background.stop()
        background.join(timeout=2.0)

    assert not background.thread.is_alive()
