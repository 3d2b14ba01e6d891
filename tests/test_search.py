from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from equation_fuzzer import FuzzerConfig, fuzz  # noqa: E402
from equation_fuzzer.assignment import Assignment  # noqa: E402
from equation_fuzzer.search import (  # noqa: E402
    BestDifference,
    CycleOutcome,
    Improvement,
    SearchLoop,
)


def _loop(expr1: str, expr2: str, conditions: list[str], n: int, *, seed: int = 0,
          round_mode: bool = True) -> SearchLoop:
    config = FuzzerConfig(num_variables=n, round_mode=round_mode, seed=seed)
    return SearchLoop.from_config(expr1, expr2, conditions, config)


def test_zero_seed_solves_on_first_cycle() -> None:
    loop = _loop("a", "0", [], 1)
    assert loop.step() is CycleOutcome.SOLVED
    result = loop.result()
    assert result.solved
    assert result.cycles == 1
    assert result.iterations == 1
    assert result.assignment == Assignment.zeros(1)
    assert result.corpus_size == 2


def test_always_false_condition_starves_the_search() -> None:
    loop = _loop("a+b", "5", ["0"], 2)
    result = loop.run(max_cycles=500)
    assert not result.solved
    assert result.cycles == 500
    assert result.iterations == 0
    assert result.corpus_size == 1
    assert not loop.best.is_set


def test_guarded_integer_search() -> None:
    loop = _loop("a+b", "5", ["a>0"], 2, seed=7)
    assert loop.step() is CycleOutcome.REJECTED_BY_CONDITIONS
    result = loop.run(max_cycles=200_000)
    assert result.solved
    a, b = result.assignment.values  # type: ignore[union-attr]
    assert a > 0
    assert a.is_integer() and b.is_integer()
    assert a + b == 5


def test_corpus_grows_once_per_improvement_and_best_strictly_decreases() -> None:
    loop = _loop("a*b - c", "17", [], 3, seed=3, round_mode=False)
    result = loop.run(max_cycles=2_000)
    assert result.corpus_size == 1 + len(result.improvements)
    diffs = [imp.score.diff for imp in result.improvements]
    assert diffs
    assert all(later < earlier for earlier, later in zip(diffs, diffs[1:]))
    assert loop.best.value == diffs[-1]
    assert [imp.corpus_size for imp in result.improvements] == list(range(2, 2 + len(diffs)))


def test_round_mode_keeps_corpus_integral() -> None:
    loop = _loop("a*b + c", "1000", ["a != 0"], 4, seed=9)
    loop.run(max_cycles=3_000)
    for assignment in loop.corpus:
        assert len(assignment) == 4
        assert all(v.is_integer() for v in assignment)


def test_ties_are_rejected() -> None:
    loop = _loop("1", "2", [], 2, seed=1)
    result = loop.run(max_cycles=100)
    assert len(result.improvements) == 1
    assert result.corpus_size == 2
    assert result.iterations == 100


def test_non_finite_seed_is_not_accepted() -> None:
    loop = _loop("1/a", "3", [], 1, seed=4, round_mode=False)
    assert loop.step() is CycleOutcome.REJECTED
    assert not loop.best.is_set
    assert loop.corpus.size() == 1
    assert loop.iterations == 1


def test_same_seed_reproduces_run() -> None:
    def run() -> list[tuple[tuple[float, ...], float]]:
        result = _loop("a*a - b", "c + 7", ["a > 1"], 3, seed=42, round_mode=False).run(max_cycles=1_500)
        return [(imp.assignment.values, imp.score.diff) for imp in result.improvements]

    assert run() == run()


def test_progress_callback_sees_every_improvement() -> None:
    seen: list[Improvement] = []
    result = fuzz("a", "0", [], FuzzerConfig(num_variables=1, seed=0), on_progress=seen.append)
    assert result.solved
    assert seen == result.improvements


def test_step_after_solution_raises() -> None:
    loop = _loop("a", "0", [], 1)
    loop.run()
    with pytest.raises(RuntimeError):
        loop.step()


def test_negative_cycle_bound_rejected() -> None:
    with pytest.raises(ValueError):
        _loop("a", "1", [], 1).run(max_cycles=-1)


def test_best_difference_variants() -> None:
    unset = BestDifference.unset()
    assert not unset.is_set
    assert unset.improved_by(1e300)
    best = BestDifference(2.0)
    assert best.improved_by(1.5)
    assert not best.improved_by(2.0)
    with pytest.raises(ValueError):
        BestDifference(-1.0)


def test_seed_where_expression_is_undefined_is_not_a_solution() -> None:
    loop = _loop("a/a", "1", [], 1, seed=0)
    assert loop.step() is CycleOutcome.REJECTED
    assert not loop.best.is_set
    result = loop.run(max_cycles=100)
    assert result.solved
    assert result.assignment is not None
    assert result.assignment.values[0] != 0.0


def test_constant_e_does_not_read_variable_e() -> None:
    loop = _loop("E", "0", [], 6, seed=0)
    assert loop.step() is CycleOutcome.ACCEPTED
    assert loop.best.value == pytest.approx(2.718281828459045)
    assert not loop.run(max_cycles=50).solved
