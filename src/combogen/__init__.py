"""combogen: parallel enumeration of permutations and combinations.

Enumerates every permutation or combination of length *p* drawn from a
fixed ordered set of *n* distinct elements, returning each result as a
list of elements or as a joined string.  Combinations come out in
lexicographic order; permutations come out in a deterministic
suffix-rotation order.  Large result sets are materialized in ordered
chunks on a joblib worker pool, and the output never depends on the
chunk size or worker count.

Public API:
    .. autosummary::
        new_combination_generator
        new_permutation_generator
        Generator
        CombinationGenerator
        PermutationGenerator
        WorkerPool
        distribute
        index_combinations
        index_permutations
        rotation_schedule
        to_values
        to_word
        get_chunk_limit
        set_chunk_limit
        get_n_jobs
        set_n_jobs
        InvalidLength
        EmptyInput
"""

from ._config import get_chunk_limit, get_n_jobs, set_chunk_limit, set_n_jobs
from ._errors import EmptyInput, InvalidLength
from .combinations import index_combinations
from .generators import (
    CombinationGenerator,
    Generator,
    PermutationGenerator,
    new_combination_generator,
    new_permutation_generator,
)
from .materialize import to_values, to_word
from .parallel import WorkerPool, distribute
from .permutations import index_permutations, rotation_schedule

__all__ = [
    "new_combination_generator",
    "new_permutation_generator",
    "Generator",
    "CombinationGenerator",
    "PermutationGenerator",
    "WorkerPool",
    "distribute",
    "index_combinations",
    "index_permutations",
    "rotation_schedule",
    "to_values",
    "to_word",
    "get_chunk_limit",
    "set_chunk_limit",
    "get_n_jobs",
    "set_n_jobs",
    "InvalidLength",
    "EmptyInput",
]

__version__ = "0.1.0"
