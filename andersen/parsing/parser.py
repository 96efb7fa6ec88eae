from __future__ import annotations

import logging
from pathlib import Path

import ply.yacc as yacc

from ..errors import ConstraintSyntaxError, InputFileError
from ..intermediate_representation.constraints import (
    Constraint,
    ConstraintKind,
    ConstraintProgram,
)
from .lexer import build_lexer, find_column, tokens  # noqa: F401  (PLY reads ``tokens``)

LOG = logging.getLogger(__name__)

start = "program"


def p_program(p):
    "program : statements"
    p[0] = p[1]


def p_statements_none(p):
    "statements :"
    p[0] = []


def p_statements_some(p):
    "statements : statements statement"
    p[1].append(p[2])
    p[0] = p[1]


# A statement may be terminated by a single semicolon; newlines are plain
# whitespace to the lexer.
def p_statement(p):
    """statement : assignment
                 | assignment SEMI"""
    p[0] = p[1]


# l = &r
def p_assignment_addr(p):
    "assignment : IDENTIFIER EQUALS AMPERSAND IDENTIFIER"
    p[0] = Constraint(p[1], p[4], ConstraintKind.ADDR, line=p.lineno(1))


# l = r
def p_assignment_equal(p):
    "assignment : IDENTIFIER EQUALS IDENTIFIER"
    p[0] = Constraint(p[1], p[3], ConstraintKind.EQUAL, line=p.lineno(1))


# l = *r
def p_assignment_deref_right(p):
    "assignment : IDENTIFIER EQUALS TIMES IDENTIFIER"
    p[0] = Constraint(p[1], p[4], ConstraintKind.DEREF_RIGHT, line=p.lineno(1))


# *l = r
def p_assignment_deref_left(p):
    "assignment : TIMES IDENTIFIER EQUALS IDENTIFIER"
    p[0] = Constraint(p[2], p[4], ConstraintKind.DEREF_LEFT, line=p.lineno(1))


def p_error(p):
    if p is None:
        raise ConstraintSyntaxError("unexpected end of input")
    raise ConstraintSyntaxError(
        f"unexpected {p.value!r}",
        line=p.lineno,
        column=find_column(p.lexer.lexdata, p.lexpos),
        token=p.value,
    )


_parser = None


def build_parser():
    """Build the LALR tables once; no parser.out or parsetab files are written."""
    global _parser
    if _parser is None:
        _parser = yacc.yacc(debug=False, write_tables=False)
    return _parser


def parse_constraints(text: str, source: str | None = None) -> ConstraintProgram:
    """Parse the whole of ``text``; any leftover or invalid input is an error."""
    try:
        constraints = build_parser().parse(text, lexer=build_lexer())
    except ConstraintSyntaxError as exc:
        if source is None:
            raise
        raise ConstraintSyntaxError(
            exc.message, line=exc.line, column=exc.column, token=exc.token, source=source
        ) from None
    LOG.debug("Parsed %d constraints from %s", len(constraints), source or "<input>")
    return ConstraintProgram(constraints=tuple(constraints), source=source)


def parse_constraint_file(path: str | Path) -> ConstraintProgram:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise InputFileError(path, reason) from exc
    return parse_constraints(text, source=str(path))
