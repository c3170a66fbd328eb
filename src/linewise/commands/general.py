"""Built-in general commands: help, history, clear, exit, version, echo, shortcuts."""

from __future__ import annotations

from typing import Optional

from .. import __version__, error_messages
from ..constants import APP_DISPLAY_NAME, HISTORY_DISPLAY_LIMIT, KEY_SHORTCUTS
from .context import ExecutionContext
from .prompts import confirm
from .registry import CommandRegistry, RegistrationResult
from .types import CommandCategory, CommandDescriptor, Continuation


def _display_name(registry: CommandRegistry, command: CommandDescriptor) -> str:
    """Name with its live aliases, e.g. ``history (hist)``."""
    aliases = registry.aliases_for(command.name)
    if not aliases:
        return command.name
    return f"{command.name} ({', '.join(aliases)})"


def _show_command_help(
    ctx: ExecutionContext, registry: CommandRegistry, command: CommandDescriptor
) -> None:
    lines = [
        f"Command: {_display_name(registry, command)}",
        f"Description: {command.description}",
        f"Usage: {command.usage}",
    ]
    if command.requires_auth:
        lines.append("* This command requires login.")
    ctx.text("\n".join(lines))


def _show_all_commands(ctx: ExecutionContext, registry: CommandRegistry) -> None:
    ctx.text("Available commands:")
    for category, commands in registry.all().items():
        if not commands:
            continue
        ctx.text(f"\n[ {category.display_name} ]")
        ctx.table(
            ["Command", "Description"],
            [[_display_name(registry, cmd), cmd.description] for cmd in commands],
        )
    ctx.text("\nType 'help <command>' for details on one command.")


def help_command(ctx: ExecutionContext) -> None:
    registry = ctx.registry
    if registry is None:
        ctx.error(error_messages.feature_unavailable("Help"))
        return

    if ctx.args:
        name = ctx.args[0].lower()
        command = registry.resolve(name)
        if command is None:
            ctx.error(error_messages.command_not_found(name))
            return
        _show_command_help(ctx, registry, command)
        return

    _show_all_commands(ctx, registry)


def history_command(ctx: ExecutionContext) -> Optional[Continuation]:
    history = ctx.history
    if history is None:
        ctx.error(error_messages.feature_unavailable("Command history"))
        return None

    if ctx.args and ctx.args[0].lower() == "clear":
        if not len(history):
            ctx.text("Command history is already empty.")
            return None

        def _clear() -> None:
            history.clear()
            ctx.text("Command history cleared.")

        return confirm(ctx.emit, f"Clear {len(history)} history entries?", _clear)

    if ctx.args:
        ctx.error(error_messages.invalid_argument(ctx.command, "Usage: history [clear]"))
        return None

    entries = history.all()
    if not entries:
        ctx.text("No command history.")
        return None

    shown = entries[-HISTORY_DISPLAY_LIMIT:]
    first_number = len(entries) - len(shown) + 1
    ctx.text("Command history:")
    ctx.table(
        ["#", "Command"],
        [[str(first_number + index), entry] for index, entry in enumerate(shown)],
    )
    ctx.text("\nType 'history clear' to clear the history. Use the up/down keys to recall entries.")
    return None


def clear_command(ctx: ExecutionContext) -> None:
    if ctx.reset is None:
        ctx.error(error_messages.feature_unavailable("Clearing the screen"))
        return
    ctx.reset()


def exit_command(ctx: ExecutionContext) -> None:
    ctx.text("Goodbye!")
    if ctx.end_session is not None:
        ctx.end_session()


def version_command(ctx: ExecutionContext) -> None:
    ctx.text(f"{APP_DISPLAY_NAME} v{__version__}")


def echo_command(ctx: ExecutionContext) -> None:
    ctx.text(" ".join(ctx.args))


def shortcuts_command(ctx: ExecutionContext) -> None:
    ctx.text("Available shortcuts:")
    ctx.table(["Shortcut", "Description"], KEY_SHORTCUTS)


GENERAL_COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        "help",
        help_command,
        description="Show available commands",
        usage="help [command]",
        aliases=("?",),
    ),
    CommandDescriptor(
        "history",
        history_command,
        description="Show previously entered commands",
        usage="history [clear]",
        aliases=("hist",),
    ),
    CommandDescriptor("clear", clear_command, description="Clear the screen", aliases=("cls",)),
    CommandDescriptor("exit", exit_command, description="End the session", aliases=("quit",)),
    CommandDescriptor("version", version_command, description="Show version information", aliases=("ver",)),
    CommandDescriptor("echo", echo_command, description="Print the arguments", usage="echo [text...]"),
    CommandDescriptor(
        "shortcuts",
        shortcuts_command,
        description="List keyboard shortcuts",
        aliases=("shortcut", "keys"),
    ),
)


def register_general_commands(registry: CommandRegistry) -> list[RegistrationResult]:
    """Install the built-in commands in the general category."""
    return registry.register_all(GENERAL_COMMANDS, CommandCategory.GENERAL)
