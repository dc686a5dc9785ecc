# src/quest_autopilot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the simulated quest board and services into AppState,
- builds the passive quest controller on top of them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..config import get_settings
from ..core.ports import Ticker
from ..core.state import AppState
from ..quests.passive_controller import PassiveQuestController
from ..sim.quest_board import InMemoryQuestBoard
from ..sim.services import IdleMoneyFarmer, LoggingNotifier, MemorySettingsStore, ToggleService

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    ticker: Ticker,
    settings=None,
    emit: Callable[[str], None] | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    board = InMemoryQuestBoard(
        max_slots=settings.sim_max_slots,
        quests_per_refresh=settings.sim_quests_per_refresh,
        money=settings.sim_starting_money,
        refresh_cost=settings.sim_refresh_cost,
        daily_quests_unlocked=settings.sim_daily_quests_unlocked,
        seed=settings.sim_seed,
    )
    hatchery = ToggleService("Hatchery")
    underground = ToggleService("Underground")
    store = MemorySettingsStore()
    notifier = LoggingNotifier(emit=emit)
    farmer = IdleMoneyFarmer()
    lock = threading.RLock()

    controller = PassiveQuestController(
        board,
        hatchery=hatchery,
        underground=underground,
        store=store,
        notifier=notifier,
        farmer=farmer,
        ticker=ticker,
        settings=settings,
        lock=lock,
    )

    logger.debug("Quest board ready: %d quests, %d slot(s)", len(board.quests), board.max_slots)

    return AppState(
        settings=settings,
        board=board,
        hatchery=hatchery,
        underground=underground,
        store=store,
        notifier=notifier,
        farmer=farmer,
        controller=controller,
        lock=lock,
    )
