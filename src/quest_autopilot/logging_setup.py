# src/quest_autopilot/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Loggers that write on every tick, with the lowest level the console shows
# for them. The log file always gets everything.
TICK_LOGGERS: dict[str, int] = {
    "quest_autopilot.quests.ticker": logging.WARNING,
    "quest_autopilot.quests.passive_controller": logging.INFO,
}


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable while the loop runs twice a second.

    Per-tick loggers are capped at their TICK_LOGGERS level, other
    quest_autopilot loggers pass, and everything else (third-party libraries,
    captured warnings) needs ERROR+.
    """

    def __init__(self, tick_levels: dict[str, int] | None = None) -> None:
        super().__init__()
        self.tick_levels = dict(TICK_LOGGERS if tick_levels is None else tick_levels)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("quest_autopilot."):
            return record.levelno >= logging.ERROR

        for prefix, level in self.tick_levels.items():
            if name == prefix or name.startswith(prefix + "."):
                return record.levelno >= level
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/autopilot",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    verbose_ticks: bool = False,
) -> Path:
    """
    Install a filtered console handler and a full file handler on the root logger.

    With verbose_ticks the per-tick loggers follow console_level like the rest.
    Call this once, before the first log line. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "autopilot.log"

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter({} if verbose_ticks else None))
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # warnings.warn(...) arrives as 'py.warnings' and is held to ERROR+ on the console.
    logging.captureWarnings(True)
    return log_file
