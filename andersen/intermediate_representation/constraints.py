from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class ConstraintKind(Enum):
    """The four pointer assignment forms of the constraint language."""

    ADDR = "addr"  # left = &right
    EQUAL = "equal"  # left = right
    DEREF_RIGHT = "deref_right"  # left = *right
    DEREF_LEFT = "deref_left"  # *left = right


_TEMPLATES = {
    ConstraintKind.ADDR: "{left} = &{right}",
    ConstraintKind.EQUAL: "{left} = {right}",
    ConstraintKind.DEREF_RIGHT: "{left} = *{right}",
    ConstraintKind.DEREF_LEFT: "*{left} = {right}",
}


@dataclass(frozen=True)
class Constraint:
    """
    One parsed assignment statement.

    Identifiers are opaque strings: there is no scoping and no declaration,
    any name that occurs in a constraint is a variable. ``line`` only feeds
    diagnostics and does not take part in equality.
    """

    left: str
    right: str
    kind: ConstraintKind
    line: int | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return _TEMPLATES[self.kind].format(left=self.left, right=self.right)


@dataclass(frozen=True)
class ConstraintProgram:
    """Ordered constraint sequence produced by the parser."""

    constraints: tuple[Constraint, ...] = ()
    source: str | None = None

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)

    def variables(self) -> list[str]:
        """Every identifier, in order of first appearance."""
        seen: dict[str, None] = {}
        for constraint in self.constraints:
            seen.setdefault(constraint.left)
            seen.setdefault(constraint.right)
        return list(seen)

    def address_taken(self) -> set[str]:
        """Identifiers that may appear inside some points-to set."""
        return {c.right for c in self.constraints if c.kind is ConstraintKind.ADDR}

    def by_kind(self, kind: ConstraintKind) -> list[Constraint]:
        return [c for c in self.constraints if c.kind is kind]
