"""Objective scoring: how far apart the two expressions are."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .assignment import Assignment
from .evaluator import CompiledExpression, compile_expression

__all__ = ["Score", "ObjectiveEvaluator"]


@dataclass(frozen=True)
class Score:
    result1: float
    result2: float
    diff: float

    @property
    def finite(self) -> bool:
        """False when either result was not finite; such scores are never accepted."""
        return math.isfinite(self.diff)


class ObjectiveEvaluator:
    """Evaluate ``expr1`` and ``expr2`` and their absolute difference.

    ``iterations`` counts every call to :meth:`score`.  A non-finite result on
    either side scores a difference of ``inf``.
    """

    def __init__(self, expr1: CompiledExpression, expr2: CompiledExpression) -> None:
        self.expr1 = expr1
        self.expr2 = expr2
        self.iterations = 0

    @classmethod
    def compile(cls, expr1: str, expr2: str, num_variables: int) -> "ObjectiveEvaluator":
        return cls(compile_expression(expr1, num_variables), compile_expression(expr2, num_variables))

    def score(self, assignment: Assignment) -> Score:
        res1 = self.expr1.evaluate(assignment.values)
        res2 = self.expr2.evaluate(assignment.values)
        self.iterations += 1
        if not (math.isfinite(res1) and math.isfinite(res2)):
            return Score(res1, res2, math.inf)
        return Score(res1, res2, abs(res1 - res2))
