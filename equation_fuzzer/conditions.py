"""Side-condition filtering of candidate assignments."""
from __future__ import annotations

import logging
from typing import Sequence

from .assignment import Assignment
from .constants import CONDITION_TRUE
from .evaluator import CompiledExpression, compile_expression

__all__ = ["ConditionFilter"]

logger = logging.getLogger(__name__)


class ConditionFilter:
    """Accept an assignment only if every condition evaluates to exactly 1.0.

    Any other result, including ``0.0``, NaN and infinities, counts as false.
    Conditions are checked in order and the first failure short-circuits.
    """

    def __init__(self, conditions: Sequence[CompiledExpression]) -> None:
        self.conditions = list(conditions)

    @classmethod
    def compile(cls, texts: Sequence[str], num_variables: int) -> "ConditionFilter":
        return cls([compile_expression(t, num_variables) for t in texts])

    @property
    def texts(self) -> list[str]:
        return [c.text for c in self.conditions]

    def passes(self, assignment: Assignment) -> bool:
        for cond in self.conditions:
            if cond.evaluate(assignment.values) != CONDITION_TRUE:
                logger.debug("condition failed: %s", cond.text)
                return False
        return True
