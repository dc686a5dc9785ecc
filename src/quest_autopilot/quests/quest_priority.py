# src/quest_autopilot/quests/quest_priority.py

"""
Quest priority policies.

A policy receives the quests currently in slots and returns a sort key for
candidate quests. The controller sorts candidates with it (stable sort), so
quests with equal keys keep their quest-list order.

Every policy shipped here keeps quests of the same kind contiguous, so that
consecutive starts finish one kind before switching to another.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .quest_models import PASSIVE_KINDS, Quest, QuestKind

SortKey = Callable[[Quest], Any]
PriorityPolicy = Callable[[Sequence[Quest]], SortKey]


def _kind_rank(kind: QuestKind) -> int:
    try:
        return PASSIVE_KINDS.index(kind)
    except ValueError:
        return len(PASSIVE_KINDS)


def group_by_kind(current: Sequence[Quest]) -> SortKey:
    """Group by kind, fixed passive order (hatching, then mining items, then mining layers)."""
    return lambda quest: _kind_rank(quest.kind)


def prefer_current_kinds(current: Sequence[Quest]) -> SortKey:
    """
    Default policy.

    Kinds already being worked on come first, so the background service that is
    already busy keeps being useful; the fixed passive order breaks ties.
    """
    active = {q.kind for q in current}

    def key(quest: Quest) -> tuple[int, int]:
        return (0 if quest.kind in active else 1, _kind_rank(quest.kind))

    return key


DEFAULT_PRIORITY: PriorityPolicy = prefer_current_kinds
