"""Candidate assignments of values to the single-letter variables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .constants import MAX_NUM_VARIABLES

__all__ = ["Assignment", "variable_name", "variable_names", "check_num_variables"]


def check_num_variables(n: int) -> int:
    """Return ``n`` if it is a usable variable count, else raise ``ValueError``."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"number of variables must be an integer, got {n!r}")
    if not 1 <= n <= MAX_NUM_VARIABLES:
        raise ValueError(f"number of variables must be in [1, {MAX_NUM_VARIABLES}], got {n}")
    return n


def variable_name(index: int) -> str:
    return chr(ord("a") + index)


def variable_names(n: int) -> list[str]:
    return [variable_name(i) for i in range(check_num_variables(n))]


@dataclass(frozen=True)
class Assignment:
    """One value per variable, in ``a, b, c, …`` order.

    Instances are immutable; :meth:`replace` returns a new assignment.
    """

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))
        check_num_variables(len(self.values))

    @classmethod
    def zeros(cls, n: int) -> "Assignment":
        return cls((0.0,) * check_num_variables(n))

    @classmethod
    def of(cls, values: Iterable[float]) -> "Assignment":
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def replace(self, index: int, value: float) -> "Assignment":
        vals = list(self.values)
        vals[index] = value
        return Assignment(tuple(vals))

    def as_dict(self) -> dict[str, float]:
        return {variable_name(i): v for i, v in enumerate(self.values)}
