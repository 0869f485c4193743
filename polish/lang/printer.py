"""Canonical, fully parenthesized rendering of Expression trees. The output is itself valid source."""

import math
from decimal import Decimal

from polish.grammar.expr import NumberLiteral, Operation, UnarySign


class AstPrinter:
    """Renders operations as (op a b ...) and unary signs as sign + operand."""

    def print(self, expr):
        if isinstance(expr, NumberLiteral):
            if not math.isfinite(expr.value) and expr.token is not None:
                return expr.token.lexeme  # overflowed to inf; only the source text reads back
            return self.literal(expr.value)
        elif isinstance(expr, UnarySign):
            return expr.sign + self.print(expr.operand)
        elif isinstance(expr, Operation):
            return self.parenthesize(expr.operator.symbol, *expr.operands)
        raise TypeError(f"cannot print '{type(expr).__name__}'")

    def parenthesize(self, name, *exprs):
        return "(" + " ".join([name] + [self.print(expr) for expr in exprs]) + ")"

    @staticmethod
    def literal(value):
        """Positional notation only (1e-05 -> 0.00001), since the scanner does not accept exponents."""
        text = format(Decimal(repr(float(value))), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text


def print_ast(expr):
    return AstPrinter().print(expr)
