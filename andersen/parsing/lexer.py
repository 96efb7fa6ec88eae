# Lexer for the pointer constraint language, built with PLY.
# Based on https://www.dabeaz.com/ply/ply.html

from __future__ import annotations

import ply.lex as lex

from ..errors import ConstraintSyntaxError

# List of token names.
tokens = (
    "IDENTIFIER",
    "EQUALS",
    "AMPERSAND",
    "TIMES",
    "SEMI",
)

t_EQUALS = r"="
t_AMPERSAND = r"&"
t_TIMES = r"\*"
t_SEMI = r";"

# Spaces and tabs are insignificant; newlines are counted below.
t_ignore = " \t\r\f\v"


def t_IDENTIFIER(t):
    r"[^\W\d_][^\W_]*"
    # \w also admits numeric characters such as superscripts; the lead must be a letter.
    if not t.value[0].isalpha():
        t_error(t)
    return t


def t_newline(t):
    r"\n+"
    t.lexer.lineno += len(t.value)


def find_column(data: str, lexpos: int) -> int:
    """1-based column of ``lexpos`` within its line."""
    return lexpos - (data.rfind("\n", 0, lexpos) + 1) + 1


def t_error(t):
    raise ConstraintSyntaxError(
        f"invalid character {t.value[0]!r}",
        line=t.lexer.lineno,
        column=find_column(t.lexer.lexdata, t.lexpos),
        token=t.value[0],
    )


def build_lexer():
    return lex.lex()


def tokenize(data: str) -> list[lex.LexToken]:
    """Run the lexer over ``data`` and collect every token."""
    lexer = build_lexer()
    lexer.input(data)
    return list(iter(lexer.token, None))
