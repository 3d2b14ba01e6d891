"""Append-only population of accepted assignments."""
from __future__ import annotations

import random
from typing import Iterator

from .assignment import Assignment, check_num_variables

__all__ = ["Corpus"]


class Corpus:
    """Sampling population for the search.

    The corpus starts with a single all-zero assignment and only ever grows:
    nothing is removed or replaced.  Assignments are immutable, so sampled
    elements can be handed out directly.
    """

    def __init__(self, num_variables: int) -> None:
        self.num_variables = check_num_variables(num_variables)
        self._items: list[Assignment] = [Assignment.zeros(num_variables)]

    @classmethod
    def initialize(cls, num_variables: int) -> "Corpus":
        return cls(num_variables)

    @property
    def seed(self) -> Assignment:
        return self._items[0]

    def sample(self, rng: random.Random) -> Assignment:
        return self._items[rng.randrange(len(self._items))]

    def append(self, assignment: Assignment) -> None:
        if len(assignment) != self.num_variables:
            raise ValueError(
                f"corpus holds {self.num_variables}-variable assignments, got {len(assignment)}"
            )
        self._items.append(assignment)

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Assignment:
        return self._items[index]
