"""Tree-walking evaluator. Walks an Expression tree in post-order; all arithmetic is done on Python floats."""

import numbers

from polish.grammar.expr import NumberLiteral, Operation, OperatorKind, UnarySign
from polish.lang.error import EvaluationError


class Evaluator:
    """Computes the value of Expression trees. Holds no state between calls, so one instance can be reused."""

    def evaluate(self, expr):
        """Returns the value of expr as a float. Raises EvaluationError on division by zero."""
        if isinstance(expr, NumberLiteral):
            return expr.value

        elif isinstance(expr, UnarySign):
            value = self.evaluate(expr.operand)
            return -value if expr.negative else value

        elif isinstance(expr, Operation):
            return self._fold(expr, [self.evaluate(operand) for operand in expr.operands])

        raise EvaluationError(getattr(expr, "token", None), f"cannot evaluate '{type(expr).__name__}'", internal=True)

    @staticmethod
    def _fold(expr, values):
        """Left-folds values with expr.operator: (- a b c) = ((a - b) - c)."""
        Evaluator._check_operands(expr, values)

        result, *rest = values
        for value in rest:
            if expr.operator is OperatorKind.DIVIDE and value == 0:
                raise EvaluationError(expr.token, "cannot divide by 0")
            result = expr.operator.apply(result, value)
        return result

    @staticmethod
    def _check_operands(expr, values):
        if not all(isinstance(value, numbers.Real) and not isinstance(value, bool) for value in values):
            raise EvaluationError(expr.token, "operands must be numeric")


def stringify(value):
    """Renders value without a trailing '.0' if it has no fractional part: 7.0 -> '7', 3.5 -> '3.5'."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


_evaluator = Evaluator()


def evaluate(expr):
    """Evaluates expr with a shared Evaluator."""
    return _evaluator.evaluate(expr)
