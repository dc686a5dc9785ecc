# src/quest_autopilot/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "AUTOPILOT"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_ticks: bool  # show per-tick DEBUG lines on the console
    data_dir: Path

    # ---- Passive quest loop ----
    tick_interval_seconds: float
    feature_enabled_key: str
    quest_enabled_key_template: str  # formatted with kind=<QuestKind value>
    notify_category: str
    notify_subcategory: str
    currency_label: str

    # ---- Connectors ----
    console_enabled: bool

    # ---- Simulated quest board ----
    sim_daily_quests_unlocked: bool
    sim_max_slots: int
    sim_quests_per_refresh: int
    sim_starting_money: int
    sim_refresh_cost: int
    sim_seed: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "quest-autopilot")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_ticks = _env_bool(_k("LOG_TICKS"), False)
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/autopilot"))

        # The loop period is 500 ms unless overridden.
        tick_interval_seconds = max(0.05, _env_float(_k("TICK_INTERVAL_SECONDS"), 0.5))

        feature_enabled_key = _env(_k("FEATURE_KEY"), "Passive-Quests-Enabled")
        quest_enabled_key_template = _env(_k("QUEST_KEY_TEMPLATE"), "Focus-{kind}Quest-Enabled")
        notify_category = _env(_k("NOTIFY_CATEGORY"), "Focus")
        notify_subcategory = _env(_k("NOTIFY_SUBCATEGORY"), "Quests")
        currency_label = _env(_k("CURRENCY_LABEL"), "pokedollars")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        sim_daily_quests_unlocked = _env_bool(_k("SIM_DAILY_QUESTS_UNLOCKED"), True)
        sim_max_slots = max(1, _env_int(_k("SIM_MAX_SLOTS"), 1))
        sim_quests_per_refresh = max(1, _env_int(_k("SIM_QUESTS_PER_REFRESH"), 10))
        sim_starting_money = max(0, _env_int(_k("SIM_STARTING_MONEY"), 0))
        sim_refresh_cost = max(0, _env_int(_k("SIM_REFRESH_COST"), 2500))
        sim_seed = _env_int(_k("SIM_SEED"), 0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_ticks=log_ticks,
            data_dir=data_dir,
            tick_interval_seconds=tick_interval_seconds,
            feature_enabled_key=feature_enabled_key,
            quest_enabled_key_template=quest_enabled_key_template,
            notify_category=notify_category,
            notify_subcategory=notify_subcategory,
            currency_label=currency_label,
            console_enabled=console_enabled,
            sim_daily_quests_unlocked=sim_daily_quests_unlocked,
            sim_max_slots=sim_max_slots,
            sim_quests_per_refresh=sim_quests_per_refresh,
            sim_starting_money=sim_starting_money,
            sim_refresh_cost=sim_refresh_cost,
            sim_seed=sim_seed,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
