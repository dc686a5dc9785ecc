# src/quest_autopilot/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import cast

from ..core.ports import SettingsStore
from ..core.state import AppState
from ..quests.quest_models import Quest, QuestKind, is_passive_kind

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /quests, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


class CommandMenu:
    """
    Menu port backed by the command registry.

    Each automation button becomes a command named after its label
    ("Free Quests" -> /free-quests). The command updates the button's setting
    and then calls the button's click handler, like a real toggle button would.
    """

    def __init__(self, registry: CommandRegistry, store: SettingsStore) -> None:
        self.registry = registry
        self.store = store

    def add_automation_button(
        self,
        label: str,
        setting_key: str,
        tooltip: str,
        on_click: Callable[[], None],
    ) -> None:
        name = "-".join(label.lower().split())

        def handler(state: AppState, args: list[str]) -> str:
            current = self.store.get_value(setting_key) == "true"
            if not args:
                enabled = not current
            elif args[0].lower() in _ON:
                enabled = True
            elif args[0].lower() in _OFF:
                enabled = False
            else:
                return f"Usage: /{name} [on|off]\n{tooltip}"

            self.store.set_value(setting_key, "true" if enabled else "false")
            on_click()
            return f"{label}: {'ON' if enabled else 'OFF'}"

        first_line = tooltip.splitlines()[0] if tooltip else label
        self.registry.register(name, handler, help_text=f"{first_line}: /{name} [on|off].")


registry = CommandRegistry()


def describe_quests(quests: Sequence[Quest]) -> list[str]:
    lines: list[str] = []
    for i, q in enumerate(quests):
        if q.claimed:
            status = "claimed"
        elif q.completed:
            status = "completed"
        elif q.in_progress:
            status = f"in progress {q.progress}/{q.amount}"
        else:
            status = "available"
        passive = " [passive]" if is_passive_kind(q.kind) else ""
        lines.append(f"#{i} {q.kind.value}{passive}: {q.description or '-'} ({status})")
    return lines


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    board = state.board
    return (
        "Status:\n"
        f"  Passive quests: {'RUNNING' if state.controller.running else 'STOPPED'}\n"
        f"  Hatchery: {'ON' if state.hatchery.enabled else 'OFF'}, "
        f"Underground: {'ON' if state.underground.enabled else 'OFF'}\n"
        f"  Slots: {len(board.current_quests())}/{board.max_slots}\n"
        f"  Money: {board.money} (refresh: {'free' if board.free_refresh() else board.refresh_cost()})\n"
        f"  Refreshes: {board.refresh_count}, money checks: {state.farmer.calls}"
    )


def cmd_quests(state: AppState, args: list[str]) -> str:
    lines = describe_quests(state.board.quest_list())
    if not lines:
        return "No quests."
    return "Quests:\n" + "\n".join(f"  {line}" for line in lines)


def cmd_progress(state: AppState, args: list[str]) -> str:
    """
    /progress <index>          -> advance a quest by 1
    /progress <index> <amount> -> advance a quest by amount
    /progress <index> all      -> complete a quest
    """
    if not args:
        return "Usage: /progress <index> [amount|all]"

    try:
        index = int(args[0])
        quest = state.board.quest_list()[index]
    except (ValueError, IndexError):
        return f"No quest #{args[0]}."

    if not quest.in_progress:
        return f"Quest #{index} is not in progress."

    if len(args) > 1 and args[1].lower() == "all":
        amount = quest.amount
    else:
        try:
            amount = int(args[1]) if len(args) > 1 else 1
        except ValueError:
            return "Usage: /progress <index> [amount|all]"

    state.board.progress(index, amount)
    return f"Quest #{index}: {quest.progress}/{quest.amount}"


def cmd_money(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Money: {state.board.money}"
    if args[0].lower() == "free":
        state.board.grant_free_refresh()
        return "Next quest refresh is free."
    try:
        amount = int(args[0])
    except ValueError:
        return "Usage: /money [amount|free]"
    state.board.add_money(amount)
    return f"Money: {state.board.money}"


def cmd_enable(state: AppState, args: list[str]) -> str:
    """
    /enable               -> list per-kind flags
    /enable <kind> on|off -> enable/disable a quest kind
    """
    template = state.settings.quest_enabled_key_template

    if not args:
        lines = ["Quest kinds:"]
        for kind in QuestKind:
            if kind is QuestKind.UNKNOWN:
                continue
            value = state.store.get_value(template.format(kind=kind.value))
            lines.append(f"  {kind.value}: {'ON' if value == 'true' else 'OFF'}")
        return "\n".join(lines)

    kind = QuestKind.from_name(args[0])
    if kind is QuestKind.UNKNOWN:
        return f"Unknown quest kind: {args[0]}."
    if len(args) < 2 or args[1].lower() not in _ON + _OFF:
        return "Usage: /enable <kind> on|off"

    enabled = args[1].lower() in _ON
    state.store.set_value(template.format(kind=kind.value), "true" if enabled else "false")
    logger.debug("Quest kind %s enabled=%s", kind.value, enabled)
    return f"{kind.value} quests: {'ON' if enabled else 'OFF'}"


def cmd_tick(state: AppState, args: list[str]) -> str:
    state.controller.tick()
    return "Tick done."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show loop, services, slots and money.")
registry.register("quests", cmd_quests, help_text="List the quest board.", aliases=["q"])
registry.register("progress", cmd_progress, help_text="Advance a quest: /progress <index> [amount|all].")
registry.register("money", cmd_money, help_text="Show/add money: /money [amount|free].")
registry.register("enable", cmd_enable, help_text="Per-kind flags: /enable <kind> on|off.")
registry.register("tick", cmd_tick, help_text="Run one loop tick now.")
