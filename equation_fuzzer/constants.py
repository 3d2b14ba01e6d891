"""Package‑wide constants and usage text."""

DEFAULT_NUM_VARIABLES = 6
MAX_NUM_VARIABLES = 26

# Mutation shape: number of perturbation steps and the open magnitude bound.
MUTATION_STEPS = 3
MUTATION_MAGNITUDE = 100.0

# Conditions are satisfied only by this exact value.
CONDITION_TRUE = 1.0

USAGE = """Usage: {prog} EXPR1 EXPR2 [CONDITIONS]

The program will attempt to resolve variables such that EXPR1 == EXPR2
"""

__all__ = [
    "DEFAULT_NUM_VARIABLES",
    "MAX_NUM_VARIABLES",
    "MUTATION_STEPS",
    "MUTATION_MAGNITUDE",
    "CONDITION_TRUE",
    "USAGE",
]
