# src/quest_autopilot/quests/quest_models.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class QuestKind(StrEnum):
    """
    Closed set of daily quest kinds known to the simulation.

    Only HATCH_EGGS, MINE_ITEMS and MINE_LAYERS are passive: they progress through
    background services and never need the player's input.
    """

    HATCH_EGGS = "HatchEggs"
    MINE_ITEMS = "MineItems"
    MINE_LAYERS = "MineLayers"

    DEFEAT_POKEMONS = "DefeatPokemons"
    CAPTURE_POKEMONS = "CapturePokemons"
    CAPTURE_POKEMON_TYPES = "CapturePokemonTypes"
    CATCH_SHINIES = "CatchShinies"
    DEFEAT_GYM = "DefeatGym"
    DEFEAT_DUNGEON_BOSS = "DefeatDungeonBoss"
    CLEAR_DUNGEON = "ClearDungeon"
    GAIN_MONEY = "GainMoney"
    GAIN_TOKENS = "GainTokens"
    GAIN_FARM_POINTS = "GainFarmPoints"
    GAIN_GEMS = "GainGems"
    HARVEST_BERRY = "HarvestBerry"
    USE_OAK_ITEM = "UseOakItem"
    USE_POKEBALL = "UsePokeball"
    BUY_POKEBALLS = "BuyPokeballs"

    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, raw: str | None) -> QuestKind:
        """Accepts "HatchEggs" as well as the class-style "HatchEggsQuest"."""
        if not raw:
            return cls.UNKNOWN
        name = raw.strip()
        if name.endswith("Quest"):
            name = name[: -len("Quest")]
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


PASSIVE_KINDS: tuple[QuestKind, ...] = (
    QuestKind.HATCH_EGGS,
    QuestKind.MINE_ITEMS,
    QuestKind.MINE_LAYERS,
)

MINING_KINDS: frozenset[QuestKind] = frozenset({QuestKind.MINE_ITEMS, QuestKind.MINE_LAYERS})


def is_passive_kind(kind: QuestKind | str | None) -> bool:
    if not isinstance(kind, QuestKind):
        kind = QuestKind.from_name(kind)
    return kind in PASSIVE_KINDS


@dataclass(slots=True)
class Quest:
    kind: QuestKind
    description: str = ""
    amount: int = 1
    reward: int = 0

    progress: int = 0
    in_progress: bool = False
    claimed: bool = False

    @property
    def completed(self) -> bool:
        return self.progress >= self.amount


def has_kind(quests: Iterable[Quest], *kinds: QuestKind) -> bool:
    wanted = set(kinds)
    return any(q.kind in wanted for q in quests)
