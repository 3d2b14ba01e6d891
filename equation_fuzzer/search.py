"""Greedy stochastic search for an assignment satisfying ``expr1 == expr2``.

Each cycle samples an accepted assignment from the corpus, mutates it, drops
it if a side-condition fails, and scores it.  A candidate is accepted only
when it strictly improves on the best difference seen so far; accepted
candidates join the corpus and stay sampleable for the rest of the run.  The
search ends when an accepted candidate has a difference of exactly zero.

The very first cycle scores the all-zero seed itself instead of a mutation of
it, so trivially solvable problems finish immediately.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from .assignment import Assignment, check_num_variables
from .conditions import ConditionFilter
from .config import FuzzerConfig
from .corpus import Corpus
from .mutator import Mutator
from .objective import ObjectiveEvaluator, Score
from .report import format_assignment

__all__ = [
    "BestDifference",
    "CycleOutcome",
    "Improvement",
    "SearchResult",
    "SearchLoop",
    "fuzz",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestDifference:
    """Either unset or the smallest difference accepted so far."""

    value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.value is not None and not self.value >= 0.0:
            raise ValueError(f"best difference must be non-negative, got {self.value!r}")

    @classmethod
    def unset(cls) -> "BestDifference":
        return cls()

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def improved_by(self, diff: float) -> bool:
        return self.value is None or diff < self.value


class CycleOutcome(str, Enum):
    REJECTED_BY_CONDITIONS = "rejected_by_conditions"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    SOLVED = "solved"


@dataclass(frozen=True)
class Improvement:
    """An accepted candidate together with the counters at acceptance time."""

    iteration: int
    corpus_size: int
    assignment: Assignment
    score: Score


@dataclass
class SearchResult:
    solved: bool
    assignment: Optional[Assignment]
    score: Optional[Score]
    iterations: int
    cycles: int
    corpus_size: int
    improvements: list[Improvement] = field(default_factory=list)


class SearchLoop:
    """Drive sample → mutate → filter → evaluate → decide until solved.

    The loop owns the random source and shares it with corpus sampling and
    the mutator.  ``on_progress`` is called with every accepted
    :class:`Improvement`.
    """

    def __init__(
        self,
        objective: ObjectiveEvaluator,
        conditions: ConditionFilter,
        *,
        num_variables: int,
        round_mode: bool = True,
        rng: Optional[random.Random] = None,
        on_progress: Optional[Callable[[Improvement], None]] = None,
    ) -> None:
        self.objective = objective
        self.conditions = conditions
        self.num_variables = check_num_variables(num_variables)
        self.round_mode = round_mode
        self.rng = rng if rng is not None else random.Random()
        self.on_progress = on_progress

        self.corpus = Corpus(self.num_variables)
        self.mutator = Mutator(self.rng)
        self.best = BestDifference.unset()
        self.improvements: list[Improvement] = []
        self.solution: Optional[Improvement] = None
        self.cycles = 0
        self._seed_pending = True

    @classmethod
    def from_config(
        cls,
        expr1: str,
        expr2: str,
        conditions: Sequence[str],
        config: FuzzerConfig,
        *,
        on_progress: Optional[Callable[[Improvement], None]] = None,
    ) -> "SearchLoop":
        """Compile all expressions; raises :class:`~equation_fuzzer.evaluator.CompileError`."""
        objective = ObjectiveEvaluator.compile(expr1, expr2, config.num_variables)
        cond_filter = ConditionFilter.compile(conditions, config.num_variables)
        return cls(
            objective,
            cond_filter,
            num_variables=config.num_variables,
            round_mode=config.round_mode,
            rng=config.make_rng(),
            on_progress=on_progress,
        )

    @property
    def iterations(self) -> int:
        return self.objective.iterations

    @property
    def solved(self) -> bool:
        return self.solution is not None

    def _next_candidate(self) -> Assignment:
        if self._seed_pending:
            self._seed_pending = False
            return self.corpus.seed
        base = self.corpus.sample(self.rng)
        return self.mutator.mutate(base, self.round_mode)

    def step(self) -> CycleOutcome:
        """Run exactly one search cycle."""
        if self.solved:
            raise RuntimeError("search already terminated with a solution")
        self.cycles += 1
        candidate = self._next_candidate()

        if not self.conditions.passes(candidate):
            return CycleOutcome.REJECTED_BY_CONDITIONS

        score = self.objective.score(candidate)
        if not score.finite:
            logger.debug("non-finite score for %s: %r, %r", format_assignment(candidate),
                         score.result1, score.result2)
            return CycleOutcome.REJECTED
        if not self.best.improved_by(score.diff):
            return CycleOutcome.REJECTED

        self.corpus.append(candidate)
        self.best = BestDifference(score.diff)
        improvement = Improvement(
            iteration=self.iterations,
            corpus_size=self.corpus.size(),
            assignment=candidate,
            score=score,
        )
        self.improvements.append(improvement)
        logger.info(
            "accepted iter=%d corpus=%d diff=%r", improvement.iteration, improvement.corpus_size, score.diff
        )
        if self.on_progress is not None:
            self.on_progress(improvement)

        if score.diff == 0.0:
            self.solution = improvement
            logger.info("solution found after %d cycles: %s", self.cycles, format_assignment(candidate))
            return CycleOutcome.SOLVED
        return CycleOutcome.ACCEPTED

    def run(self, *, max_cycles: Optional[int] = None) -> SearchResult:
        """Cycle until solved, or until ``max_cycles`` more cycles have run."""
        if max_cycles is not None and max_cycles < 0:
            raise ValueError(f"max_cycles must be non-negative, got {max_cycles}")
        done = 0
        while not self.solved and (max_cycles is None or done < max_cycles):
            self.step()
            done += 1
        return self.result()

    def result(self) -> SearchResult:
        last = self.improvements[-1] if self.improvements else None
        return SearchResult(
            solved=self.solved,
            assignment=last.assignment if last else None,
            score=last.score if last else None,
            iterations=self.iterations,
            cycles=self.cycles,
            corpus_size=self.corpus.size(),
            improvements=list(self.improvements),
        )


def fuzz(
    expr1: str,
    expr2: str,
    conditions: Sequence[str] = (),
    config: Optional[FuzzerConfig] = None,
    *,
    max_cycles: Optional[int] = None,
    on_progress: Optional[Callable[[Improvement], None]] = None,
) -> SearchResult:
    """Compile the expressions and search for ``expr1 == expr2``.

    Without ``max_cycles`` this only returns once a solution is found.
    """
    loop = SearchLoop.from_config(expr1, expr2, conditions, config or FuzzerConfig(), on_progress=on_progress)
    return loop.run(max_cycles=max_cycles)
