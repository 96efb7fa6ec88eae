from __future__ import annotations

from pathlib import Path


class AnalyzerError(Exception):
    """Base class for failures that abort a single analysis run."""

    stage = "analysis"


class InputFileError(AnalyzerError):
    """The constraint file could not be read."""

    stage = "read"

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read {self.path}: {reason}")


class ConstraintSyntaxError(AnalyzerError):
    """The constraint text does not match the grammar."""

    stage = "parse"

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        token: str | None = None,
        source: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.token = token
        self.source = source
        location = source or "<input>"
        if line is not None:
            location += f":{line}"
            if column is not None:
                location += f":{column}"
        super().__init__(f"{location}: {message}")


class OutputFileError(AnalyzerError):
    """The report could not be written."""

    stage = "write"

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot write {self.path}: {reason}")
