"""Abstract syntax tree for the polish language.

Formally, a program is a single expression:

```
<program>    ::= <expression> <end of input>
<expression> ::= <number>                                         ; "literal"
               | ("+" | "-") (<number> | "(" ... ")")             ; "unary sign"
                                                                  ; - cannot prefix another sign: --5 is invalid
               | "(" <operator> <expression> <expression>+ ")"    ; "operation"
                                                                  ; - folds left: (- 10 1 2) = ((10 - 1) - 2)
<operator>   ::= "+" | "-" | "*" | "/"
```

The tree is a closed set of three node types. Every node owns its children; trees are finite and acyclic because the
parser only ever attaches newly created nodes. Nodes keep the token they were parsed from so that evaluation errors
can point back into the source, but tokens take no part in equality.
"""

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from polish.lang.tokens import Token, TokenKind


class OperatorKind(Enum):
    """Binary arithmetic operators, keyed by their source symbol."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self):
        return self.value

    def apply(self, left, right):
        """Applies this operator to left and right. Does not check for division by zero."""
        return _FUNCS[self](left, right)

    @classmethod
    def from_token(cls, token):
        """Returns the OperatorKind for token, or None if token is not an operator."""
        return _BY_KIND.get(token.kind)


_FUNCS = {
    OperatorKind.ADD: operator.add,
    OperatorKind.SUBTRACT: operator.sub,
    OperatorKind.MULTIPLY: operator.mul,
    OperatorKind.DIVIDE: operator.truediv,
}

_BY_KIND = {
    TokenKind.PLUS: OperatorKind.ADD,
    TokenKind.MINUS: OperatorKind.SUBTRACT,
    TokenKind.STAR: OperatorKind.MULTIPLY,
    TokenKind.SLASH: OperatorKind.DIVIDE,
}


class Expression:
    """Superclass of every AST node."""


@dataclass
class NumberLiteral(Expression):
    value: float
    token: Optional[Token] = field(default=None, compare=False, repr=False)


@dataclass
class UnarySign(Expression):
    """sign is "+" or "-". operand is a NumberLiteral or an Operation, never another UnarySign."""
    sign: str
    operand: Expression
    token: Optional[Token] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        assert self.sign in ("+", "-"), f"'{self.sign}' is not a sign"

    @property
    def negative(self):
        return self.sign == "-"


@dataclass
class Operation(Expression):
    operator: OperatorKind
    operands: Tuple[Expression, ...]
    token: Optional[Token] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.operands = tuple(self.operands)
        assert len(self.operands) >= 2, "operations take at least 2 operands"
