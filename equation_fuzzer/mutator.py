"""Random perturbation of assignments."""
from __future__ import annotations

import math
import random

from .assignment import Assignment
from .constants import MUTATION_MAGNITUDE, MUTATION_STEPS

__all__ = ["Mutator", "random_magnitude"]


def random_magnitude(rng: random.Random, bound: float = MUTATION_MAGNITUDE) -> float:
    """Draw uniformly from the open interval ``(-bound, bound)``, never zero."""
    while True:
        value = rng.uniform(-bound, bound)
        if value != 0.0 and -bound < value < bound:
            return value


class Mutator:
    """Produce new assignments by perturbing existing ones.

    Each mutation applies :data:`MUTATION_STEPS` independent steps.  A step
    picks a variable and an operation (add or subtract), draws a nonzero
    magnitude and applies it.  In round mode the touched variable is then
    truncated toward zero.
    """

    def __init__(self, rng: random.Random, *, steps: int = MUTATION_STEPS) -> None:
        self.rng = rng
        self.steps = steps

    def mutate(self, base: Assignment, round_mode: bool) -> Assignment:
        values = list(base.values)
        for _ in range(self.steps):
            idx = self.rng.randrange(len(values))
            subtract = self.rng.randrange(2) == 1
            magnitude = random_magnitude(self.rng)
            if subtract:
                values[idx] -= magnitude
            else:
                values[idx] += magnitude
            if round_mode:
                values[idx] = float(math.trunc(values[idx]))
        return Assignment(tuple(values))
