"""Input line tokenizing."""

from __future__ import annotations


def tokenize(line: str) -> list[str]:
    """Split a raw line into tokens.

    Whitespace separates tokens except inside double quotes, which are
    stripped from the output. An unterminated quote runs to end of line.
    Other characters (backslashes, single quotes) are literal.
    """
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))

    return tokens


def parse_command(line: str) -> tuple[str, list[str]]:
    """Parse a line into (lower-cased command name, positional arguments)."""
    parts = tokenize(line)
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]
