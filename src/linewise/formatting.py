"""Plain-text formatters for output events."""

from __future__ import annotations

from .output import CommandEcho, ErrorEvent, MarkdownEvent, OutputEvent, TableEvent, TextEvent


def format_table(event: TableEvent) -> str:
    """Render a table with left-aligned, space-padded columns."""
    column_count = max([len(event.headers), *(len(row) for row in event.rows)])
    if column_count == 0:
        return ""

    def _cells(row: tuple[str, ...]) -> list[str]:
        return list(row) + [""] * (column_count - len(row))

    header = _cells(event.headers)
    body = [_cells(row) for row in event.rows]
    widths = [
        max(len(line[i]) for line in [header, *body]) for i in range(column_count)
    ]

    def _line(cells: list[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [_line(header), _line(["-" * width for width in widths])]
    lines.extend(_line(row) for row in body)
    return "\n".join(lines)


def format_error(event: ErrorEvent) -> str:
    if event.hint:
        return f"Error: {event.message}\nHint: {event.hint}"
    return f"Error: {event.message}"


def format_event(event: OutputEvent) -> str:
    """Render any output event to CLI text."""
    if isinstance(event, TextEvent):
        return event.text
    if isinstance(event, CommandEcho):
        return f"> {event.line}"
    if isinstance(event, ErrorEvent):
        return format_error(event)
    if isinstance(event, TableEvent):
        return format_table(event)
    if isinstance(event, MarkdownEvent):
        return event.text
    raise TypeError(f"Unsupported output event: {type(event).__name__}")
