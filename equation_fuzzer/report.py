"""Console formatting for progress lines and solutions."""
from __future__ import annotations

import math
from typing import Sequence

from .assignment import Assignment, variable_name

__all__ = [
    "format_number",
    "format_assignment",
    "format_progress",
    "format_solution",
    "to_script",
]


def format_number(value: float) -> str:
    """Integral values print without a fraction; others use the shortest round-trip form."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_assignment(assignment: Assignment, separator: str = ",") -> str:
    return separator.join(
        f"{variable_name(i)}={format_number(v)}" for i, v in enumerate(assignment.values)
    )


def format_progress(iteration: int, corpus_size: int, assignment: Assignment,
                    result1: float, result2: float, diff: float) -> str:
    return (
        f"N: {iteration} Corp: {corpus_size} Vars: {format_assignment(assignment)} "
        f"Res1: {format_number(result1)} Res2: {format_number(result2)} "
        f"Diff: {format_number(diff)}"
    )


def to_script(expr1: str, expr2: str, assignment: Assignment) -> str:
    """One ``name=value`` line per variable followed by ``EXPR1 == EXPR2``."""
    body = format_assignment(assignment, separator="\n")
    return f"{body}\n{expr1} == {expr2}\n"


def format_solution(expr1: str, expr2: str, conditions: Sequence[str], assignment: Assignment) -> str:
    lines = ["The solution to", "", f"    {expr1} == {expr2}", ""]
    if conditions:
        lines += ["under these conditions:", ""]
        lines += [f"    {c}" for c in conditions]
        lines.append("")
    lines += ["is:", "", f"    {format_assignment(assignment)}", ""]
    lines += ["Script:", "", to_script(expr1, expr2, assignment)]
    return "\n".join(lines)
