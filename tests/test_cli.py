from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Iterator

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from equation_fuzzer import cli  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_pkg_logger() -> Iterator[None]:
    pkg_logger = logging.getLogger("equation_fuzzer")
    old_handlers = pkg_logger.handlers[:]
    old_level = pkg_logger.level
    old_propagate = pkg_logger.propagate
    yield
    for h in pkg_logger.handlers[:]:
        if h not in old_handlers:
            pkg_logger.removeHandler(h)
    pkg_logger.setLevel(old_level)
    pkg_logger.propagate = old_propagate


def test_usage_when_too_few_expressions(capsys: Any) -> None:
    assert cli.main(["a"]) == 0
    out = capsys.readouterr().out
    assert "Usage: equation-fuzzer EXPR1 EXPR2 [CONDITIONS]" in out


def test_compile_error_reports_expression(capsys: Any) -> None:
    assert cli.main(["a +", "5"]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error: ")
    assert "Expression: a +" in out


def test_bad_condition_stops_before_search(capsys: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_run(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        raise AssertionError("search must not start")

    monkeypatch.setattr(cli.SearchLoop, "run", _no_run)
    assert cli.main(["a", "b", "q > 1"]) == 1
    assert "Expression: q > 1" in capsys.readouterr().out


def test_invalid_dimension(capsys: Any) -> None:
    assert cli.main(["a", "0", "-n", "27"]) == 2
    assert "Error:" in capsys.readouterr().err


def test_solution_printed(capsys: Any) -> None:
    assert cli.main(["a", "0", "-n", "1", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "N: 1 Corp: 2 Vars: a=0 Res1: 0 Res2: 0 Diff: 0" in out
    assert "The solution to" in out
    assert "a=0\na == 0" in out


def test_cycle_bound_exhausted(capsys: Any) -> None:
    assert cli.main(["a", "1", "0", "--max-cycles", "50", "--seed", "1"]) == 3
    assert "No exact solution after 50 cycles" in capsys.readouterr().out


def test_log_level_routes_to_package_logger(capsys: Any) -> None:
    assert cli.main(["a", "0", "-n", "1", "--log-level", "INFO"]) == 0
    err = capsys.readouterr().err
    assert "solution found" in err
