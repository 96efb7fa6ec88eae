from __future__ import annotations

from ..analysis.pointer_analysis import PointerAnalysisResult


def _braced(names: set[str]) -> str:
    return "{" + ", ".join(sorted(names)) + "}"


def render_text_report(result: PointerAnalysisResult) -> str:
    """Readable summary: points-to sets, may-alias sets, then solver counters."""
    lines = ["Points-to sets:"]
    if not result.points_to:
        lines.append("  (no variables)")
    for var, pointees in result.points_to.items():
        lines.append(f"  {var} -> {_braced(pointees)}")

    lines.append("")
    lines.append("May-alias sets:")
    aliased = {var: others for var, others in result.alias_sets.items() if others}
    if not aliased:
        lines.append("  (none)")
    for var, others in aliased.items():
        lines.append(f"  {var} ~ {_braced(others)}")

    stats = result.stats
    lines.append("")
    lines.append(
        f"Solver: {len(result.graph)} variables, {result.graph.edge_count()} edges, "
        f"{stats.iterations} iterations, {stats.dynamic_edges} dynamic edges"
    )
    return "\n".join(lines) + "\n"
