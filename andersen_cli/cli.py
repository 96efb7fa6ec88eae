from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path

from andersen.analysis.pointer_analysis import compute_pointer_analysis
from andersen.errors import AnalyzerError, OutputFileError
from andersen.parsing.parser import parse_constraint_file
from andersen.reporting.dot import render_constraint_graph_dot
from andersen.reporting.text import render_text_report

LOG = logging.getLogger("andersen")

VERSION = "0.1.0"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="andersen",
        description="Inclusion-based (Andersen) points-to analysis of pointer constraints",
    )
    parser.add_argument("input", help="Path to the constraint file")
    parser.add_argument("output", help="Path of the report to write")
    parser.add_argument(
        "--format",
        choices=["dot", "text"],
        default="dot",
        help="Report format (default: dot)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug output")
    parser.add_argument("--version", action="version", version=f"andersen {VERSION}")
    return parser


def configure_logging(verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get("ANDERSEN_LOG_LEVEL", "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def write_report(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` so a failure never leaves a truncated file."""
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}-", dir=path.parent)
    except OSError as exc:
        raise OutputFileError(path, exc.strerror or str(exc)) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        # mkstemp creates the file owner-only; give the report the usual umask-derived mode.
        mask = os.umask(0)
        os.umask(mask)
        os.chmod(tmp_name, 0o666 & ~mask)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise OutputFileError(path, exc.strerror or str(exc)) from exc


def run(input_path: Path, output_path: Path, report_format: str = "dot") -> None:
    program = parse_constraint_file(input_path)
    LOG.info("Read %d constraints from %s", len(program), input_path)

    result = compute_pointer_analysis(program)

    if report_format == "text":
        report = render_text_report(result)
    else:
        report = render_constraint_graph_dot(result.graph)
    write_report(output_path, report)
    LOG.info("Wrote %s report to %s", report_format, output_path)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.verbose, args.debug)

    try:
        run(Path(args.input), Path(args.output), args.format)
    except AnalyzerError as exc:
        LOG.error("%s failed: %s", exc.stage, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
