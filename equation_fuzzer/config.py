"""Run configuration for the search."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .assignment import check_num_variables
from .constants import DEFAULT_NUM_VARIABLES

__all__ = ["FuzzerConfig"]


@dataclass(frozen=True)
class FuzzerConfig:
    """Settings fixed for the duration of one search run.

    ``seed`` controls the single pseudorandom source: ``None`` seeds it from
    system entropy, an integer makes the run reproducible.
    """

    num_variables: int = DEFAULT_NUM_VARIABLES
    round_mode: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        check_num_variables(self.num_variables)
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed must be an integer or None, got {self.seed!r}")

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)
