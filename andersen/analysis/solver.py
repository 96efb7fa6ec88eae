from __future__ import annotations

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Iterable

from ..intermediate_representation.constraints import Constraint, ConstraintKind
from ..intermediate_representation.graph import ConstraintGraph

LOG = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Counters collected while the worklist drains."""

    iterations: int = 0
    dynamic_edges: int = 0
    propagations: int = 0


IterationHook = Callable[[int, ConstraintGraph], None]


def init_nodes(graph: ConstraintGraph, constraints: Iterable[Constraint]) -> None:
    for constraint in constraints:
        graph.add_node(constraint.left)
        graph.add_node(constraint.right)


def init_basic_ptrs(graph: ConstraintGraph, constraints: Iterable[Constraint]) -> None:
    """``l = &r``: the only rule that puts a new object into a points-to set."""
    for constraint in constraints:
        if constraint.kind is ConstraintKind.ADDR:
            graph.node(constraint.left).points_to.add(graph.handle(constraint.right))


def init_simple_edges(graph: ConstraintGraph, constraints: Iterable[Constraint]) -> None:
    """``l = r`` flows everything ``r`` points to into ``l``."""
    for constraint in constraints:
        if constraint.kind is ConstraintKind.EQUAL:
            graph.add_edge(constraint.right, constraint.left)


def _index_dereferences(
    graph: ConstraintGraph, constraints: Iterable[Constraint]
) -> tuple[dict[int, list[int]], dict[int, list[int]]]:
    """
    Group dereference constraints by the pointer being dereferenced.

    ``loads[p]`` lists the handles ``l`` of every ``l = *p``; ``stores[p]``
    lists the handles ``r`` of every ``*p = r``.
    """
    loads: dict[int, list[int]] = defaultdict(list)
    stores: dict[int, list[int]] = defaultdict(list)
    for constraint in constraints:
        if constraint.kind is ConstraintKind.DEREF_RIGHT:
            loads[graph.handle(constraint.right)].append(graph.handle(constraint.left))
        elif constraint.kind is ConstraintKind.DEREF_LEFT:
            stores[graph.handle(constraint.left)].append(graph.handle(constraint.right))
    return loads, stores


def solve_complex_edges(
    graph: ConstraintGraph,
    constraints: Iterable[Constraint],
    on_iteration: IterationHook | None = None,
) -> SolverStats:
    """
    Propagate points-to sets along inclusion edges until nothing changes.

    The worklist holds handles of nodes whose outgoing effects have not been
    pushed yet. Popping ``v`` first resolves the loads and stores through
    ``v`` for every object ``v`` may point to, which can add new edges, and
    then unions ``v``'s set into each successor. A successor whose set grew
    goes back on the worklist.

    Sets only grow and edges are only added over a finite set of nodes, so
    the worklist always drains.
    """
    loads, stores = _index_dereferences(graph, constraints)
    stats = SolverStats()
    nodes = graph.nodes

    worklist: deque[int] = deque(node.handle for node in nodes if node.points_to)

    while worklist:
        v = nodes[worklist.popleft()]
        stats.iterations += 1

        for a in list(v.points_to):
            # l = *v and v -> a: everything a points to flows into l.
            for left in loads.get(v.handle, ()):
                if not graph.contains_edge_handles(a, left):
                    graph.add_edge_handles(a, left)
                    stats.dynamic_edges += 1
                    LOG.debug("load %s = *%s adds edge %s -> %s",
                              nodes[left].id, v.id, nodes[a].id, nodes[left].id)
                    worklist.append(a)
            # *v = r and v -> a: everything r points to flows into a.
            for right in stores.get(v.handle, ()):
                if not graph.contains_edge_handles(right, a):
                    graph.add_edge_handles(right, a)
                    stats.dynamic_edges += 1
                    LOG.debug("store *%s = %s adds edge %s -> %s",
                              v.id, nodes[right].id, nodes[right].id, nodes[a].id)
                    worklist.append(right)

        for target_handle in graph.successors(v.handle):
            target = nodes[target_handle]
            before = len(target.points_to)
            target.points_to |= v.points_to
            if len(target.points_to) != before:
                stats.propagations += 1
                worklist.append(target_handle)

        if on_iteration is not None:
            on_iteration(stats.iterations, graph)

    return stats


def solve(
    graph: ConstraintGraph,
    constraints: Iterable[Constraint],
    on_iteration: IterationHook | None = None,
) -> SolverStats:
    """Run every stage, from node creation to the fixpoint, over ``graph``."""
    constraints = list(constraints)
    init_nodes(graph, constraints)
    init_basic_ptrs(graph, constraints)
    init_simple_edges(graph, constraints)
    LOG.debug("Initialized %d nodes and %d static edges", len(graph), graph.edge_count())
    stats = solve_complex_edges(graph, constraints, on_iteration)
    LOG.info(
        "Fixpoint reached after %d iterations (%d dynamic edges, %d propagations)",
        stats.iterations,
        stats.dynamic_edges,
        stats.propagations,
    )
    return stats
