# src/quest_autopilot/quests/passive_controller.py

from __future__ import annotations

"""
Passive quest automation.

Completes the daily quests that need no game control (egg hatching, underground
mining) by running a small loop every tick:
1) claim completed quests,
2) fill free quest slots with passive quests,
3) if nothing the player wants is left in the slots, refresh the quest pool.

The background hatchery/underground services do the actual work; this loop only
manages the quest lifecycle around them.
"""

import logging
import threading
from collections.abc import Iterable

from ..core.ports import (
    BackgroundService,
    Menu,
    MoneyFarmer,
    Notifier,
    QuestBoard,
    SettingsStore,
    Ticker,
    TickHandle,
)
from .quest_models import MINING_KINDS, Quest, QuestKind, has_kind, is_passive_kind
from .quest_priority import DEFAULT_PRIORITY, PriorityPolicy

logger = logging.getLogger(__name__)

MENU_LABEL = "Free Quests"
MENU_TOOLTIP = (
    "Passively automates non-intrusive quests\n"
    "-----\n"
    "- Hatch Eggs quests\n"
    "- Underground mining quests\n\n"
    "This mode uses the Focus Quest logic\n"
    "without taking control of the game."
)


class PassiveQuestController:
    def __init__(
            self,
            board: QuestBoard,
            *,
            hatchery: BackgroundService,
            underground: BackgroundService,
            store: SettingsStore,
            notifier: Notifier,
            farmer: MoneyFarmer,
            ticker: Ticker,
            settings,
            priority: PriorityPolicy = DEFAULT_PRIORITY,
            lock: threading.RLock | None = None,
    ) -> None:
        self.board = board
        self.hatchery = hatchery
        self.underground = underground
        self.store = store
        self.notifier = notifier
        self.farmer = farmer
        self.ticker = ticker
        self.settings = settings
        self.priority = priority

        self._handle: TickHandle | None = None
        self._generation = 0
        # start/stop come from the console thread, ticks from the ticker thread.
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def running(self) -> bool:
        return self._handle is not None

    # ------------------------------------------------------------------
    # Menu integration / lifecycle
    # ------------------------------------------------------------------

    def initialize(self, menu: Menu) -> None:
        self.store.set_default(self.settings.feature_enabled_key, "false")
        for kind in QuestKind:
            if kind is QuestKind.UNKNOWN:
                continue
            self.store.set_default(self._quest_enabled_key(kind), "true")

        menu.add_automation_button(
            MENU_LABEL,
            self.settings.feature_enabled_key,
            MENU_TOOLTIP,
            self.toggle,
        )

    def toggle(self, enable: bool | None = None) -> None:
        """
        Start or stop the loop.

        Without an explicit bool, the persisted feature flag decides (the menu
        button flips the flag before calling this).
        """
        if not isinstance(enable, bool):
            enable = self.store.get_value(self.settings.feature_enabled_key) == "true"

        if enable:
            self.start()
        else:
            self.stop()

    def start(self) -> None:
        with self._lock:
            if self._handle is not None:
                return
            if not self.board.is_daily_quests_unlocked():
                logger.debug("Daily quests are locked; passive quests not started")
                return

            # Both services run from the start so either quest kind progresses
            # as soon as it is picked.
            self.hatchery.set_auto_enabled(True)
            self.underground.set_auto_enabled(True)

            self._generation += 1
            generation = self._generation
            self._handle = self.ticker.call_every(
                self.settings.tick_interval_seconds,
                lambda: self._on_tick(generation),
            )
            logger.info("Passive quests started (every %.2fs)", self.settings.tick_interval_seconds)

            self.tick()

    def stop(self) -> None:
        with self._lock:
            if self._handle is None:
                return
            self._handle.cancel()
            self._handle = None
            logger.info("Passive quests stopped")

    # ------------------------------------------------------------------
    # Loop body
    # ------------------------------------------------------------------

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            # Only the timer installed by the latest start() may run a tick.
            if self._handle is None or generation != self._generation:
                return
            self.tick()

    def tick(self) -> None:
        with self._lock:
            self.claim_completed_quests()
            self.select_new_quests()

            if not self.filtered_current_quests():
                self.skip_remaining_quests()

    def claim_completed_quests(self) -> int:
        claimed = 0
        for index, quest in enumerate(self.board.quest_list()):
            if quest.completed and not quest.claimed:
                self.board.claim_quest(index)
                claimed += 1
                logger.info("Claimed quest #%d (%s)", index, quest.kind.value)
        return claimed

    def select_new_quests(self) -> int:
        """Start passive quests until the board has no free slot left."""
        if not self.board.can_start_new_quest():
            return 0

        candidates = [
            (index, quest)
            for index, quest in enumerate(self.board.quest_list())
            if not quest.completed
            and not quest.in_progress
            and is_passive_kind(quest.kind)
            # Kinds the user switched off are never started.
            and self.is_quest_enabled(quest)
        ]

        # Stable sort: equal keys keep quest-list order.
        key = self.priority(self.board.current_quests())
        candidates.sort(key=lambda pair: key(pair[1]))

        started = 0
        for index, quest in candidates:
            if not self.board.can_start_new_quest():
                break
            self.board.begin_quest(index)
            started += 1
            logger.info("Started quest #%d (%s)", index, quest.kind.value)
        return started

    def skip_remaining_quests(self) -> bool:
        """
        Refresh the quest pool when the remaining quests are ones the loop won't do.

        Returns True if a refresh happened.
        """
        remaining = [q for q in self.board.quest_list() if not q.completed and not q.in_progress]
        if not remaining:
            return False

        free = self.board.free_refresh()
        if not free and not self.board.can_afford_refresh():
            logger.debug("Quest refresh not affordable; farming money")
            self.farmer.farm_money()
            return False

        cost = "free" if free else f"{self.board.refresh_cost()} {self.settings.currency_label}"

        self.board.refresh_quests()
        logger.info("Refreshed quests (%s)", cost)

        self.notifier.send(
            f"Skipped disabled quests for {cost}",
            self.settings.notify_category,
            self.settings.notify_subcategory,
        )
        return True

    def filtered_current_quests(self) -> list[Quest]:
        """Current quests without the ones the user disabled."""
        return [q for q in self.board.current_quests() if self.is_quest_enabled(q)]

    def is_quest_enabled(self, quest: Quest) -> bool:
        return self.store.get_value(self._quest_enabled_key(quest.kind)) == "true"

    def ensure_automation_for_quests(self, quests: Iterable[Quest]) -> None:
        """Enable the background services needed by the given quests."""
        quests = list(quests)
        if has_kind(quests, QuestKind.HATCH_EGGS):
            self.hatchery.set_auto_enabled(True)
        if has_kind(quests, *MINING_KINDS):
            self.underground.set_auto_enabled(True)

    def _quest_enabled_key(self, kind: QuestKind) -> str:
        return self.settings.quest_enabled_key_template.format(kind=kind.value)
