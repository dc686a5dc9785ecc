# src/quest_autopilot/sim/services.py

"""Small concrete adapters for the remaining ports (services, settings, notifications)."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ToggleService:
    """A background service that only remembers whether it is enabled."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.enabled = False

    def set_auto_enabled(self, enabled: bool) -> None:
        if self.enabled == enabled:
            return
        self.enabled = enabled
        logger.info("%s automation %s", self.name, "enabled" if enabled else "disabled")


class MemorySettingsStore:
    """In-process settings store; values are strings, like the game's local storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get_value(self, key: str) -> str | None:
        return self._values.get(key)

    def set_value(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def set_default(self, key: str, value: str) -> None:
        self._values.setdefault(key, str(value))


class LoggingNotifier:
    """
    Notification sink.

    Messages go to the log; an optional emit callback also shows them to the user
    (the console connector passes its printer).
    """

    def __init__(self, emit: Callable[[str], None] | None = None) -> None:
        self.emit = emit

    def send(self, message: str, category: str, subcategory: str) -> None:
        logger.info("[%s/%s] %s", category, subcategory, message)
        if self.emit is not None:
            self.emit(f"[{category}/{subcategory}] {message}")


class IdleMoneyFarmer:
    """
    Farming fallback for the simulation.

    The game would send the player to a good money route; here we can only note
    that money is needed. Calls are counted so status output can show them.
    """

    def __init__(self) -> None:
        self.calls = 0

    def farm_money(self) -> None:
        self.calls += 1
        if self.calls == 1 or self.calls % 100 == 0:
            logger.info("Not enough money to refresh quests; waiting for funds (%d checks)", self.calls)
