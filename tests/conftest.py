from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from andersen.analysis.pointer_analysis import PointerAnalysisResult, compute_pointer_analysis
from andersen.parsing.parser import parse_constraints


def _normalize(text: str) -> str:
    # Allow indented triple-quoted programs in tests.
    return textwrap.dedent(text).lstrip("\n")


@pytest.fixture()
def analyze():
    """Parse and solve a constraint program given as text."""

    def _analyze(text: str, **kwargs) -> PointerAnalysisResult:
        return compute_pointer_analysis(parse_constraints(_normalize(text)), **kwargs)

    return _analyze


@pytest.fixture()
def write_input(tmp_path: Path):
    def _write(text: str, name: str = "input.txt") -> Path:
        path = tmp_path / name
        path.write_text(_normalize(text), encoding="utf-8")
        return path

    return _write
