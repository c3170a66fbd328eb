"""Command registry: descriptors indexed by name, alias and category."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from ..errors import RegistrationError
from ..logging import log_event
from .types import CommandCategory, CommandDescriptor

CollisionKind = Literal[
    "name_replaced",
    "name_shadows_alias",
    "alias_shadowed_by_name",
    "alias_reassigned",
]


@dataclass(frozen=True, slots=True)
class Collision:
    """One key that already meant something before a registration."""

    key: str
    kind: CollisionKind
    previous: str


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    """Outcome of registering one descriptor."""

    descriptor: CommandDescriptor
    collisions: tuple[Collision, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.collisions


class CommandRegistry:
    """Single source of truth for which commands exist.

    Registration never fails by default: the last registration of a name or
    alias wins, and every overwrite is reported in the returned
    ``RegistrationResult`` and logged. Pass ``strict=True`` to reject
    collisions with ``RegistrationError`` instead.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandDescriptor] = {}
        self._aliases: dict[str, str] = {}
        self._categories: dict[CommandCategory, list[CommandDescriptor]] = {}

    # ---------------- Registration ----------------

    def _find_collisions(self, descriptor: CommandDescriptor) -> list[Collision]:
        name = descriptor.name
        collisions: list[Collision] = []

        if name in self._commands:
            collisions.append(Collision(name, "name_replaced", name))
        if name in self._aliases and self._aliases[name] != name:
            collisions.append(Collision(name, "name_shadows_alias", self._aliases[name]))

        for alias in descriptor.aliases:
            if alias == name:
                continue
            if alias in self._commands:
                collisions.append(Collision(alias, "alias_shadowed_by_name", alias))
            previous = self._aliases.get(alias)
            if previous is not None and previous != name:
                collisions.append(Collision(alias, "alias_reassigned", previous))

        return collisions

    def register(
        self,
        descriptor: CommandDescriptor,
        category: Optional[CommandCategory] = None,
        *,
        strict: bool = False,
    ) -> RegistrationResult:
        """Insert or overwrite a command and its aliases."""
        resolved_category = category or descriptor.category or CommandCategory.GENERAL
        if descriptor.category != resolved_category:
            descriptor = dataclasses.replace(descriptor, category=resolved_category)

        collisions = self._find_collisions(descriptor)
        if strict and collisions:
            first = collisions[0]
            raise RegistrationError(
                f"Cannot register '{descriptor.name}': '{first.key}' already "
                f"refers to '{first.previous}' ({first.kind})"
            )

        replaced = self._commands.get(descriptor.name)
        if replaced is not None:
            self._remove_from_category(replaced)

        self._commands[descriptor.name] = descriptor
        for alias in descriptor.aliases:
            if alias != descriptor.name:
                self._aliases[alias] = descriptor.name
        self._categories.setdefault(resolved_category, []).append(descriptor)

        for collision in collisions:
            log_event(
                "command_collision",
                level=logging.WARNING,
                key=collision.key,
                collision=collision.kind,
                previous=collision.previous,
                command=descriptor.name,
            )

        return RegistrationResult(descriptor=descriptor, collisions=tuple(collisions))

    def register_all(
        self,
        descriptors: Iterable[CommandDescriptor],
        category: Optional[CommandCategory] = None,
        *,
        strict: bool = False,
    ) -> list[RegistrationResult]:
        """Register descriptors in order; later entries override earlier ones."""
        return [self.register(d, category, strict=strict) for d in descriptors]

    def _remove_from_category(self, descriptor: CommandDescriptor) -> None:
        if descriptor.category is None:
            return
        members = self._categories.get(descriptor.category, [])
        self._categories[descriptor.category] = [d for d in members if d is not descriptor]

    # ---------------- Lookup ----------------

    def resolve(self, token: str) -> Optional[CommandDescriptor]:
        """Return the command for a primary name or alias (exact match)."""
        command = self._commands.get(token)
        if command is not None:
            return command
        name = self._aliases.get(token)
        return self._commands.get(name) if name is not None else None

    def by_category(self, category: CommandCategory) -> list[CommandDescriptor]:
        """Return the commands of one category in registration order."""
        return list(self._categories.get(category, []))

    def all(self) -> dict[CommandCategory, list[CommandDescriptor]]:
        """Return every category's commands, categories in first-use order."""
        return {category: list(members) for category, members in self._categories.items()}

    def aliases(self) -> dict[str, str]:
        """Return the live alias table (alias -> primary name).

        Aliases shadowed by a primary name of the same spelling are left out,
        since resolve() never reaches them.
        """
        return {
            alias: target for alias, target in self._aliases.items() if alias not in self._commands
        }

    def aliases_for(self, name: str) -> list[str]:
        """Return the aliases that currently resolve to name."""
        return [alias for alias, target in self.aliases().items() if target == name]

    def names(self) -> list[str]:
        """Return primary names in registration order."""
        return list(self._commands.keys())

    def count(self) -> int:
        """Return the number of distinct command names (aliases excluded)."""
        return len(self._commands)
