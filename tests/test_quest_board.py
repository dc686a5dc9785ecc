# tests/test_quest_board.py

from __future__ import annotations

from quest_autopilot.cli.bootstrap import create_initial_state
from quest_autopilot.quests.quest_models import Quest, QuestKind
from quest_autopilot.sim.quest_board import InMemoryQuestBoard
from quest_autopilot.sim.services import LoggingNotifier, MemorySettingsStore, ToggleService

from .fakes import FakeMenu, ManualTicker


def _board(**kwargs) -> InMemoryQuestBoard:
    quests = [
        Quest(kind=QuestKind.HATCH_EGGS, amount=5, reward=100),
        Quest(kind=QuestKind.DEFEAT_POKEMONS, amount=5, reward=100),
        Quest(kind=QuestKind.MINE_ITEMS, amount=5, reward=100),
    ]
    return InMemoryQuestBoard(quests=quests, **kwargs)


def test_generated_board_is_deterministic_per_seed() -> None:
    a = InMemoryQuestBoard(seed=3, quests_per_refresh=8)
    b = InMemoryQuestBoard(seed=3, quests_per_refresh=8)

    assert len(a.quests) == 8
    assert [(q.kind, q.amount) for q in a.quests] == [(q.kind, q.amount) for q in b.quests]
    assert all(q.kind is not QuestKind.UNKNOWN for q in a.quests)


def test_slots_limit_begin() -> None:
    board = _board(max_slots=1)

    board.begin_quest(0)
    board.begin_quest(2)

    assert [q.in_progress for q in board.quests] == [True, False, False]
    assert not board.can_start_new_quest()


def test_claim_requires_completion_and_pays_reward() -> None:
    board = _board(max_slots=2)
    board.begin_quest(0)

    board.claim_quest(0)
    assert not board.quests[0].claimed

    board.progress(0, 10)
    assert board.quests[0].progress == 5
    board.claim_quest(0)
    board.claim_quest(0)

    assert board.quests[0].claimed
    assert board.money == 100
    assert board.can_start_new_quest()


def test_progress_ignores_quests_not_in_progress() -> None:
    board = _board()
    board.progress(1, 3)
    assert board.quests[1].progress == 0


def test_paid_and_free_refresh() -> None:
    board = _board(money=3000, refresh_cost=2500, quests_per_refresh=4, seed=1)
    assert board.can_afford_refresh()

    board.refresh_quests()
    assert board.money == 500
    assert len(board.quests) == 4
    assert not board.can_afford_refresh()

    board.refresh_quests()
    assert board.refresh_count == 1

    board.grant_free_refresh()
    assert board.free_refresh()
    board.refresh_quests()
    assert board.money == 500
    assert board.refresh_count == 2
    assert not board.free_refresh()


def test_claiming_whole_pool_grants_free_refresh() -> None:
    board = InMemoryQuestBoard(quests=[Quest(kind=QuestKind.HATCH_EGGS, amount=1, reward=50)], money=0)
    board.begin_quest(0)
    board.progress(0, 1)

    board.claim_quest(0)

    assert board.free_refresh()
    money = board.money
    board.refresh_quests()
    assert board.money == money
    assert board.refresh_count == 1
    assert not board.free_refresh()


def test_partly_claimed_pool_keeps_paid_refresh() -> None:
    board = _board()
    board.begin_quest(0)
    board.progress(0, 5)

    board.claim_quest(0)

    assert not board.free_refresh()


def test_toggle_service_and_settings_store() -> None:
    service = ToggleService("Hatchery")
    service.set_auto_enabled(True)
    service.set_auto_enabled(True)
    assert service.enabled

    store = MemorySettingsStore({"a": "true"})
    store.set_default("a", "false")
    store.set_default("b", "false")
    assert store.get_value("a") == "true"
    assert store.get_value("b") == "false"
    assert store.get_value("c") is None


def test_logging_notifier_emits() -> None:
    seen: list[str] = []
    LoggingNotifier(emit=seen.append).send("hi", "Focus", "Quests")
    assert seen == ["[Focus/Quests] hi"]


def test_passive_loop_end_to_end(settings) -> None:
    ticker = ManualTicker()
    state = create_initial_state(ticker=ticker, settings=settings)
    board = state.board
    board.quests = [
        Quest(kind=QuestKind.MINE_LAYERS, amount=2, reward=600),
        Quest(kind=QuestKind.DEFEAT_POKEMONS, amount=2, reward=0),
        Quest(kind=QuestKind.HATCH_EGGS, amount=2, reward=600),
    ]
    board.max_slots = 2
    board.cost = 2500

    state.controller.initialize(FakeMenu())
    state.controller.toggle(True)

    assert state.hatchery.enabled and state.underground.enabled
    assert [q.in_progress for q in board.quests] == [True, False, True]

    board.progress(0, 2)
    board.progress(2, 2)
    ticker.advance(0.5)

    # Both passive quests claimed; only the non-passive one is left, but money is short.
    assert board.quests[0].claimed and board.quests[2].claimed
    assert board.money == 1200
    assert state.farmer.calls == 1
    assert board.refresh_count == 0

    board.add_money(1300)
    ticker.advance(0.5)

    assert board.refresh_count == 1
    assert board.money == 0
    assert len(board.quests) == settings.sim_quests_per_refresh
