"""Command descriptors and the typed continuation protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, TypeAlias, Union

if TYPE_CHECKING:
    from .context import ExecutionContext


class CommandCategory(str, Enum):
    """Grouping used by help listings only."""

    GENERAL = "general"
    POST = "post"
    COMMENT = "comment"
    AUTH = "auth"
    BOOKMARK = "bookmark"
    SEARCH = "search"

    @property
    def display_name(self) -> str:
        return _CATEGORY_TITLES[self]


_CATEGORY_TITLES = {
    CommandCategory.GENERAL: "General commands",
    CommandCategory.POST: "Post commands",
    CommandCategory.COMMENT: "Comment commands",
    CommandCategory.AUTH: "Authentication commands",
    CommandCategory.BOOKMARK: "Bookmark commands",
    CommandCategory.SEARCH: "Search commands",
}


@dataclass(frozen=True, slots=True)
class Done:
    """The multi-turn interaction is complete."""


DONE = Done()


@dataclass(frozen=True, slots=True)
class NextStep:
    """The interaction continues; ``continuation`` receives the next raw line."""

    continuation: "Continuation"


Step: TypeAlias = Union[Done, NextStep]

# What handlers and continuations may return: an explicit step, a bare
# continuation callable, or None for "done".
StepResult: TypeAlias = Union[Step, Callable[[str], Any], None]

Continuation: TypeAlias = Callable[[str], Union[StepResult, Awaitable[StepResult]]]

Handler: TypeAlias = Callable[["ExecutionContext"], Union[StepResult, Awaitable[StepResult]]]


def to_step(result: Any) -> Step:
    """Normalize a handler or continuation return value into a Step."""
    if result is None or isinstance(result, Done):
        return DONE
    if isinstance(result, NextStep):
        return result
    if callable(result):
        return NextStep(result)
    raise TypeError(
        f"Handlers must return None, a Step, or a continuation callable, "
        f"not {type(result).__name__}"
    )


def _normalize_key(value: str, what: str) -> str:
    key = value.strip().lower()
    if not key or any(ch.isspace() for ch in key):
        raise ValueError(f"Invalid command {what}: {value!r}")
    return key


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Immutable definition of one command.

    ``name`` and ``aliases`` are lower-cased on construction so lookups can
    match lower-cased input tokens exactly.
    """

    name: str
    handler: Handler = field(repr=False, compare=False)
    description: str = ""
    usage: str = ""
    aliases: tuple[str, ...] = ()
    requires_auth: bool = False
    category: Optional[CommandCategory] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _normalize_key(self.name, "name"))
        object.__setattr__(
            self,
            "aliases",
            tuple(_normalize_key(alias, "alias") for alias in self.aliases),
        )
        if not self.usage:
            object.__setattr__(self, "usage", self.name)
