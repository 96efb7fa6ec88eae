from __future__ import annotations

from dataclasses import dataclass

from ..intermediate_representation.constraints import ConstraintProgram
from ..intermediate_representation.graph import ConstraintGraph
from .solver import IterationHook, SolverStats, solve


@dataclass
class PointerAnalysisResult:
    """Solved constraint graph plus name-keyed views of it."""

    graph: ConstraintGraph
    points_to: dict[str, set[str]]
    alias_sets: dict[str, set[str]]
    stats: SolverStats

    def may_alias(self, first: str, second: str) -> bool:
        return bool(self.points_to[first] & self.points_to[second])


def _alias_sets(points_to: dict[str, set[str]]) -> dict[str, set[str]]:
    # Two variables may alias when some object is in both points-to sets.
    pointed_by: dict[str, set[str]] = {}
    for var, pointees in points_to.items():
        for obj in pointees:
            pointed_by.setdefault(obj, set()).add(var)

    aliases: dict[str, set[str]] = {var: set() for var in points_to}
    for holders in pointed_by.values():
        for var in holders:
            aliases[var] |= holders
    for var, others in aliases.items():
        others.discard(var)
    return aliases


def compute_pointer_analysis(
    program: ConstraintProgram, on_iteration: IterationHook | None = None
) -> PointerAnalysisResult:
    """Andersen-style inclusion analysis of ``program``."""
    graph = ConstraintGraph()
    stats = solve(graph, program, on_iteration)
    points_to = {
        node.id: set(graph.points_to(node.id))
        for node in sorted(graph, key=lambda n: n.id)
    }
    return PointerAnalysisResult(
        graph=graph,
        points_to=points_to,
        alias_sets=_alias_sets(points_to),
        stats=stats,
    )
