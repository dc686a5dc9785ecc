# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from quest_autopilot.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) or any(isinstance(f, _ConsoleNoiseFilter) for f in h.filters):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_filter_quiets_per_tick_loggers() -> None:
    f = _ConsoleNoiseFilter()

    assert not f.filter(_record("quest_autopilot.quests.passive_controller", logging.DEBUG))
    assert f.filter(_record("quest_autopilot.quests.passive_controller", logging.INFO))
    assert not f.filter(_record("quest_autopilot.quests.ticker", logging.INFO))
    assert f.filter(_record("quest_autopilot.quests.ticker", logging.WARNING))
    assert f.filter(_record("quest_autopilot.cli.commands", logging.DEBUG))


def test_console_filter_holds_foreign_loggers_to_errors() -> None:
    f = _ConsoleNoiseFilter()

    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))


def test_console_filter_without_tick_levels_lets_debug_through() -> None:
    f = _ConsoleNoiseFilter({})

    assert f.filter(_record("quest_autopilot.quests.passive_controller", logging.DEBUG))
    assert not f.filter(_record("asyncio", logging.INFO))


def test_setup_logging_writes_full_file(restore_root_logging, tmp_path: Path) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)

    logging.getLogger("quest_autopilot.quests.passive_controller").debug("per-tick detail")
    for h in restore_root_logging.handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "autopilot.log"
    assert "per-tick detail" in log_file.read_text(encoding="utf-8")
    assert len(restore_root_logging.handlers) == 2
