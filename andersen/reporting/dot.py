from __future__ import annotations

import re

from ..intermediate_representation.graph import ConstraintGraph

# Characters that must be escaped inside a quoted DOT string.
_ESCAPE_RE = re.compile(r'[\\"\n]')
_ESCAPES = {"\\": r"\\", '"': r"\"", "\n": r"\n"}


def _quote(text: str) -> str:
    return '"' + _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group()], text) + '"'


def render_constraint_graph_dot(graph: ConstraintGraph) -> str:
    """
    Emit the solved graph as a DOT digraph.

    Each variable becomes a node labelled with its name and its points-to set;
    each inclusion edge becomes a directed edge. Nodes, pointees and edges are
    sorted by name so the same graph always renders to the same text.
    """
    lines = ["digraph {"]
    for node in sorted(graph, key=lambda n: n.id):
        pointees = ",".join(sorted(graph.points_to(node.id)))
        label = f"{node.id}\n{{{pointees}}}"
        lines.append(f"  {_quote(node.id)} [label={_quote(label)}];")
    for source, target in sorted(graph.edges()):
        lines.append(f"  {_quote(source)} -> {_quote(target)};")
    lines.append("}")
    return "\n".join(lines) + "\n"
