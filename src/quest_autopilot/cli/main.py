# src/quest_autopilot/cli/main.py

"""
CLI entrypoint.

Initializes logging, starts the ticker loop in a background thread, builds
AppState, registers the passive quest toggle, then runs the console REPL in
the main thread.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..cli.commands import CommandMenu, registry
from ..config import get_settings
from ..connectors.console_connector import print_ts, run_console_loop
from ..logging_setup import setup_logging
from ..quests.ticker import start_ticker_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        verbose_ticks=settings.log_ticks,
    )

    logger.info("Starting %s...", settings.app_name)

    background = start_ticker_in_background()
    if background is None:
        raise SystemExit("Could not start the ticker loop.")

    state = create_initial_state(ticker=background.ticker, settings=settings, emit=print_ts)

    state.controller.initialize(CommandMenu(registry, state.store))
    # Applies the persisted feature flag (off unless something set it).
    state.controller.toggle()

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            stop_main = threading.Event()

            def _handle_signal(signum, _frame) -> None:
                logger.info("Signal %s received, shutting down...", signum)
                stop_main.set()

            try:
                signal.signal(signal.SIGINT, _handle_signal)
                signal.signal(signal.SIGTERM, _handle_signal)
            except (ValueError, OSError):
                # Some platforms may not support SIGTERM, etc.
                pass

            logger.info("Console disabled. Starting passive quests headless. Press Ctrl+C to stop.")
            state.controller.toggle(True)
            stop_main.wait()
    finally:
        state.controller.stop()
        background.stop()
        background.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
