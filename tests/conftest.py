# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from quest_autopilot.quests.passive_controller import PassiveQuestController
from quest_autopilot.quests.quest_models import QuestKind
from quest_autopilot.sim.services import MemorySettingsStore

from .fakes import FakeFarmer, FakeNotifier, FakeQuestBoard, FakeService, ManualTicker


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the controller and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="test",
        log_level="DEBUG",
        log_ticks=False,
        data_dir=tmp_path / "autopilot",
        tick_interval_seconds=0.5,
        feature_enabled_key="Passive-Quests-Enabled",
        quest_enabled_key_template="Focus-{kind}Quest-Enabled",
        notify_category="Focus",
        notify_subcategory="Quests",
        currency_label="pokedollars",
        console_enabled=False,
        sim_daily_quests_unlocked=True,
        sim_max_slots=2,
        sim_quests_per_refresh=6,
        sim_starting_money=0,
        sim_refresh_cost=1000,
        sim_seed=7,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> MemorySettingsStore:
    """Settings store with every quest kind enabled."""
    values = {
        settings.quest_enabled_key_template.format(kind=k.value): "true"
        for k in QuestKind
        if k is not QuestKind.UNKNOWN
    }
    return MemorySettingsStore(values)


@pytest.fixture()
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture()
def board() -> FakeQuestBoard:
    return FakeQuestBoard([])


@pytest.fixture()
def hatchery() -> FakeService:
    return FakeService()


@pytest.fixture()
def underground() -> FakeService:
    return FakeService()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def farmer() -> FakeFarmer:
    return FakeFarmer()


@pytest.fixture()
def controller(
    board: FakeQuestBoard,
    hatchery: FakeService,
    underground: FakeService,
    store: MemorySettingsStore,
    notifier: FakeNotifier,
    farmer: FakeFarmer,
    ticker: ManualTicker,
    settings: SimpleNamespace,
) -> PassiveQuestController:
    return PassiveQuestController(
        board,
        hatchery=hatchery,
        underground=underground,
        store=store,
        notifier=notifier,
        farmer=farmer,
        ticker=ticker,
        settings=settings,
    )
