from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class VariableNode:
    """Graph node for one variable; ``points_to`` holds pointee handles."""

    id: str
    handle: int
    points_to: set[int] = field(default_factory=set)


@dataclass
class ConstraintGraph:
    """
    Variables, their points-to sets and the inclusion edges between them.

    Nodes live in an arena (``nodes``) and are addressed by their index, the
    handle. Points-to sets and edges store handles, never node objects, so the
    solver can mutate any node through the arena while it walks the worklist.
    An edge ``source -> target`` means every pointee of ``source`` is also a
    pointee of ``target``.
    """

    nodes: list[VariableNode] = field(default_factory=list, init=False)
    index: dict[str, int] = field(default_factory=dict, init=False)
    # Successor handles per source handle, in insertion order.
    _successors: list[dict[int, None]] = field(default_factory=list, init=False, repr=False)

    def __iter__(self) -> Iterator[VariableNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, var_id: object) -> bool:
        return var_id in self.index

    def add_node(self, var_id: str) -> int:
        handle = self.index.get(var_id)
        if handle is None:
            handle = len(self.nodes)
            self.nodes.append(VariableNode(id=var_id, handle=handle))
            self._successors.append({})
            self.index[var_id] = handle
        return handle

    def handle(self, var_id: str) -> int:
        try:
            return self.index[var_id]
        except KeyError:
            raise KeyError(f"Unknown variable {var_id!r} in constraint graph.") from None

    def node(self, var_id: str) -> VariableNode:
        return self.nodes[self.handle(var_id)]

    def add_edge(self, source: str, target: str) -> None:
        """Insert ``source -> target``; both endpoints must already be nodes."""
        self.add_edge_handles(self.handle(source), self.handle(target))

    def contains_edge(self, source: str, target: str) -> bool:
        return self.contains_edge_handles(self.handle(source), self.handle(target))

    def add_edge_handles(self, source: int, target: int) -> None:
        self._successors[source][target] = None

    def contains_edge_handles(self, source: int, target: int) -> bool:
        return target in self._successors[source]

    def successors(self, handle: int) -> list[int]:
        return list(self._successors[handle])

    def edges(self) -> Iterator[tuple[str, str]]:
        for source, targets in enumerate(self._successors):
            for target in targets:
                yield self.nodes[source].id, self.nodes[target].id

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._successors)

    def points_to(self, var_id: str) -> frozenset[str]:
        return frozenset(self.nodes[h].id for h in self.node(var_id).points_to)
