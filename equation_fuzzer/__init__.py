"""Public package interface for the equation fuzzer.

Typical usage
-------------
>>> from equation_fuzzer import FuzzerConfig, fuzz
>>> fuzz("a+b", "5", ["a>0"], FuzzerConfig(num_variables=2, seed=1))
"""
from importlib.metadata import version as _version  # type: ignore

from .assignment import Assignment
from .config import FuzzerConfig
from .corpus import Corpus
from .mutator import Mutator
from .conditions import ConditionFilter
from .objective import ObjectiveEvaluator, Score
from .evaluator import CompileError, CompiledExpression, compile_expression
from .search import (
    BestDifference,
    CycleOutcome,
    Improvement,
    SearchLoop,
    SearchResult,
    fuzz,
)

__all__ = [
    "Assignment",
    "FuzzerConfig",
    "Corpus",
    "Mutator",
    "ConditionFilter",
    "ObjectiveEvaluator",
    "Score",
    "CompileError",
    "CompiledExpression",
    "compile_expression",
    "BestDifference",
    "CycleOutcome",
    "Improvement",
    "SearchLoop",
    "SearchResult",
    "fuzz",
    "__version__",
]

try:
    __version__ = _version("equation_fuzzer")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
