"""Tokens produced by the scanner (see lang/lexical.py) and consumed by the parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    """Every kind of lexical unit in the language."""
    LPAREN = "("
    RPAREN = ")"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    NUMBER = "<number>"
    UNRECOGNIZED = "<unrecognized>"
    END_OF_INPUT = "<end of input>"


@dataclass(frozen=True)
class Token:
    """One lexical unit. line and column are 1-indexed and point at the first character of lexeme."""
    kind: TokenKind
    lexeme: str
    literal: Optional[float]
    line: int
    column: int

    def __str__(self):
        return self.lexeme if self.lexeme else self.kind.value
