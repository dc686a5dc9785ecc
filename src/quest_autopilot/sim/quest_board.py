# src/quest_autopilot/sim/quest_board.py

from __future__ import annotations

"""
In-memory quest board.

A stand-in for the game's daily quest system so the passive loop can run
end-to-end from the console. Quest progress is driven explicitly (progress());
nothing here hatches eggs or digs.
"""

import logging
import random
from collections.abc import Sequence

from ..quests.quest_models import Quest, QuestKind

logger = logging.getLogger(__name__)

_DESCRIPTIONS: dict[QuestKind, str] = {
    QuestKind.HATCH_EGGS: "Hatch {n} eggs.",
    QuestKind.MINE_ITEMS: "Mine {n} items in the Underground.",
    QuestKind.MINE_LAYERS: "Mine {n} layers in the Underground.",
    QuestKind.DEFEAT_POKEMONS: "Defeat {n} Pokemon.",
    QuestKind.CAPTURE_POKEMONS: "Capture {n} Pokemon.",
    QuestKind.CAPTURE_POKEMON_TYPES: "Capture {n} Pokemon of a type.",
    QuestKind.CATCH_SHINIES: "Catch {n} shiny Pokemon.",
    QuestKind.DEFEAT_GYM: "Defeat a gym {n} times.",
    QuestKind.DEFEAT_DUNGEON_BOSS: "Defeat a dungeon boss {n} times.",
    QuestKind.CLEAR_DUNGEON: "Clear a dungeon {n} times.",
    QuestKind.GAIN_MONEY: "Gain {n} money.",
    QuestKind.GAIN_TOKENS: "Gain {n} dungeon tokens.",
    QuestKind.GAIN_FARM_POINTS: "Gain {n} farm points.",
    QuestKind.GAIN_GEMS: "Gain {n} gems.",
    QuestKind.HARVEST_BERRY: "Harvest {n} berries.",
    QuestKind.USE_OAK_ITEM: "Use an Oak item {n} times.",
    QuestKind.USE_POKEBALL: "Use {n} Pokeballs.",
    QuestKind.BUY_POKEBALLS: "Buy {n} Pokeballs.",
}


class InMemoryQuestBoard:
    def __init__(
            self,
            *,
            quests: Sequence[Quest] | None = None,
            max_slots: int = 1,
            quests_per_refresh: int = 10,
            money: int = 0,
            refresh_cost: int = 2500,
            daily_quests_unlocked: bool = True,
            seed: int | None = None,
    ) -> None:
        self.max_slots = max(1, int(max_slots))
        self.quests_per_refresh = max(1, int(quests_per_refresh))
        self.money = max(0, int(money))
        self.cost = max(0, int(refresh_cost))
        self.daily_quests_unlocked = daily_quests_unlocked
        self.free = False
        self.refresh_count = 0
        self._rng = random.Random(seed)

        self.quests: list[Quest] = list(quests) if quests is not None else self._generate()

    # ---- QuestBoard port ----

    def is_daily_quests_unlocked(self) -> bool:
        return self.daily_quests_unlocked

    def quest_list(self) -> Sequence[Quest]:
        return list(self.quests)

    def current_quests(self) -> Sequence[Quest]:
        return [q for q in self.quests if q.in_progress and not q.claimed]

    def claim_quest(self, index: int) -> None:
        quest = self.quests[index]
        if not quest.completed or quest.claimed:
            return
        quest.claimed = True
        quest.in_progress = False
        self.money += quest.reward
        logger.debug("Quest #%d claimed, +%d money", index, quest.reward)

        # Clearing the whole pool earns a free refresh.
        if all(q.claimed for q in self.quests):
            self.free = True
            logger.debug("Quest pool fully claimed; next refresh is free")

    def can_start_new_quest(self) -> bool:
        return len(self.current_quests()) < self.max_slots

    def begin_quest(self, index: int) -> None:
        quest = self.quests[index]
        if quest.in_progress or quest.completed or not self.can_start_new_quest():
            return
        quest.in_progress = True

    def refresh_quests(self) -> None:
        if not self.free:
            if self.money < self.cost:
                logger.warning("Refresh requested without enough money (%d < %d)", self.money, self.cost)
                return
            self.money -= self.cost
        self.free = False
        self.refresh_count += 1
        self.quests = self._generate()

    def free_refresh(self) -> bool:
        return self.free

    def can_afford_refresh(self) -> bool:
        return self.money >= self.cost

    def refresh_cost(self) -> int:
        return self.cost

    # ---- Simulation controls ----

    def progress(self, index: int, amount: int = 1) -> None:
        """Advance an in-progress quest; what the background services would do in the game."""
        quest = self.quests[index]
        if not quest.in_progress or quest.claimed:
            return
        quest.progress = min(quest.amount, quest.progress + max(0, int(amount)))

    def add_money(self, amount: int) -> None:
        self.money = max(0, self.money + int(amount))

    def grant_free_refresh(self) -> None:
        self.free = True

    def _generate(self) -> list[Quest]:
        kinds = [k for k in QuestKind if k is not QuestKind.UNKNOWN]
        out: list[Quest] = []
        for _ in range(self.quests_per_refresh):
            kind = self._rng.choice(kinds)
            amount = self._rng.randint(1, 10) * 10
            out.append(
                Quest(
                    kind=kind,
                    description=_DESCRIPTIONS.get(kind, "{n}").format(n=amount),
                    amount=amount,
                    reward=amount * 25,
                )
            )
        return out
