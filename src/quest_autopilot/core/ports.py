# src/quest_autopilot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of the game objects themselves.
This keeps the quest board, background services and UI swappable and makes
testing easier (see tests/fakes.py).
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..quests.quest_models import Quest


class QuestBoard(Protocol):
    """
    The game's daily quest system.

    Owns quest state, slot capacity and refresh pricing. Indices passed to
    claim_quest/begin_quest refer to positions in quest_list().
    """

    def is_daily_quests_unlocked(self) -> bool: ...
    def quest_list(self) -> Sequence[Quest]: ...
    def current_quests(self) -> Sequence[Quest]: ...
    def claim_quest(self, index: int) -> None: ...
    def can_start_new_quest(self) -> bool: ...
    def begin_quest(self, index: int) -> None: ...

    def refresh_quests(self) -> None: ...
    def free_refresh(self) -> bool: ...
    def can_afford_refresh(self) -> bool: ...
    def refresh_cost(self) -> int: ...


class BackgroundService(Protocol):
    """Hatchery / underground automation. Enabling an enabled service is a no-op."""
    def set_auto_enabled(self, enabled: bool) -> None: ...


class SettingsStore(Protocol):
    """String key/value flags ("true"/"false"), as the game's local storage keeps them."""
    def get_value(self, key: str) -> str | None: ...
    def set_value(self, key: str, value: str) -> None: ...
    def set_default(self, key: str, value: str) -> None: ...


class Notifier(Protocol):
    def send(self, message: str, category: str, subcategory: str) -> None: ...


class MoneyFarmer(Protocol):
    """Fallback run when a quest refresh is not affordable yet."""
    def farm_money(self) -> None: ...


class Menu(Protocol):
    def add_automation_button(
            self,
            label: str,
            setting_key: str,
            tooltip: str,
            on_click: Callable[[], None],
    ) -> None: ...


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class Ticker(Protocol):
    """
    Fixed-period scheduler.

    call_every() must not run the callback synchronously; the first call happens
    one period later. Cancelling a handle stops all further calls.
    """

    def call_every(self, period_seconds: float, callback: Callable[[], None]) -> TickHandle: ...
