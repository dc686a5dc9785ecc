# src/quest_autopilot/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..quests.passive_controller import PassiveQuestController
from ..sim.quest_board import InMemoryQuestBoard
from ..sim.services import IdleMoneyFarmer, LoggingNotifier, MemorySettingsStore, ToggleService


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    board: InMemoryQuestBoard
    hatchery: ToggleService
    underground: ToggleService
    store: MemorySettingsStore
    notifier: LoggingNotifier
    farmer: IdleMoneyFarmer
    controller: PassiveQuestController

    # Shared with the controller: console commands and ticks never interleave.
    lock: threading.RLock = field(default_factory=threading.RLock)
