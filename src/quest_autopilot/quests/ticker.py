# src/quest_autopilot/quests/ticker.py

from __future__ import annotations

"""
Asyncio-backed Ticker.

Each call_every() spawns a small polling coroutine on the given event loop:
sleep one period, run the callback, repeat. Cancelling the handle cancels the
coroutine. The loop can live in a background thread (see start_ticker_in_background)
so the console REPL can keep the main thread.
"""

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


async def run_every(period_seconds: float, callback: Callable[[], None]) -> None:
    """
    Call callback every period_seconds until cancelled.

    A failing callback is logged and the loop keeps going; the next period is the retry.
    """
    sleep_s = max(0.01, float(period_seconds))

    while True:
        await asyncio.sleep(sleep_s)
        try:
            callback()
        except Exception:
            logger.exception("Tick callback failed")


class AsyncioTickHandle:
    def __init__(
            self,
            loop: asyncio.AbstractEventLoop,
            future: asyncio.Future[None] | concurrent.futures.Future[None],
    ) -> None:
        self._loop = loop
        self._future = future

    def cancel(self) -> None:
        fut = self._future
        if isinstance(fut, concurrent.futures.Future):
            # Thread-safe: cancellation is forwarded to the loop by asyncio.
            fut.cancel()
            return

        # asyncio futures are not thread-safe: cancel from the loop thread.
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            fut.cancel()
        elif not self._loop.is_closed():
            self._loop.call_soon_threadsafe(fut.cancel)

    @property
    def done(self) -> bool:
        return self._future.done()


class AsyncioTicker:
    """Ticker port implementation for an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def call_every(self, period_seconds: float, callback: Callable[[], None]) -> AsyncioTickHandle:
        coro = run_every(period_seconds, callback)

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self.loop:
            return AsyncioTickHandle(self.loop, self.loop.create_task(coro))

        # Called from another thread (console REPL): hand the coroutine to the loop thread.
        return AsyncioTickHandle(self.loop, asyncio.run_coroutine_threadsafe(coro, self.loop))


@dataclass(slots=True)
class BackgroundTicker:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    ticker: AsyncioTicker

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.loop.stop)
        except Exception:
            logger.debug("Failed to signal ticker loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_ticker_in_background() -> BackgroundTicker | None:
    """
    Run an asyncio loop in a daemon thread and return a Ticker bound to it.

    Why a thread: the console REPL is blocking (input()), while ticks are scheduled
    on an event loop.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        holder["loop"] = loop
        ready.set()

        try:
            loop.run_forever()
        finally:
            with contextlib.suppress(Exception):
                pending = asyncio.all_tasks(loop)
                for task in pending:
                    task.cancel()
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="quest-ticker", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")

    if not isinstance(loop, asyncio.AbstractEventLoop):
        logger.error("Ticker thread did not initialize properly.")
        return None

    logger.info("Ticker background thread started.")
    return BackgroundTicker(thread=t, loop=loop, ticker=AsyncioTicker(loop))
