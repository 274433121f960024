"""Permutation index generation by recursive suffix rotation.

Every permutation of length *p* drawn from *n* elements is an ordering
of exactly one combination.  The permutation index set is therefore
built by taking the ``C(n, p)`` combination rows as *seeds* and
expanding each seed into its ``p!`` orderings.

Suffix rotation
---------------
``expand(t, depth)`` enumerates the orderings of a tuple ``t``:

* ``depth == 0`` yields ``[t]``.
* ``depth >= 1`` first computes ``expand(t, depth - 1)``, then, for
  every tuple ``u`` in it, emits the cyclic left-rotations of the
  suffix of ``u`` that starts at position ``depth - 1``.  The rotation
  is a do-while loop: ``u`` itself is always emitted, and the loop
  stops as soon as the rotated tuple is ``u`` again.

The top-level call is ``expand(t, p - 1)``.  Depth 1 rotates the whole
tuple (``p`` shifts), depth 2 rotates the last ``p - 1`` positions, and
so on down to depth ``p - 1``, which swaps the last two.  The product
``p · (p − 1) ··· 2`` is ``p!`` and, since a cycle over distinct values
visits each shift once, no ordering is emitted twice.

For ``(A, B, C)`` this gives::

    ABC, ACB, BCA, BAC, CAB, CBA

which is deterministic but not lexicographic.

Rotation schedule
-----------------
Seeds always contain distinct indices, so rotating *values* is the same
as rotating *positions*.  :func:`rotation_schedule` runs ``expand`` once
on the position tuple ``(0, 1, …, p − 1)`` and returns the resulting
``(p!, p)`` column-ordering matrix.  The matrix is built afresh for
every request and released with it.  Expanding a chunk of seeds is then
a single fancy-indexing call, ``seeds[:, schedule]``, whose row-major
reshape keeps seeds in order and each seed's orderings in rotation
order.
"""

from __future__ import annotations

import logging
import math
from functools import partial

import numpy as np

from ._typing import IndexArray
from .combinations import index_combinations
from .parallel import WorkerPool, distribute

logger = logging.getLogger(__name__)


def _rotations(index_tuple: tuple[int, ...], start: int) -> list[tuple[int, ...]]:
    """Return the cyclic left-rotations of ``index_tuple[start:]``.

    The first entry is *index_tuple* itself.  Each following entry
    moves the element at *start* to the end.
    """
    emitted = []
    current = index_tuple
    while True:
        emitted.append(current)
        current = current[:start] + current[start + 1 :] + (current[start],)
        if current == index_tuple:
            break
    return emitted


def expand(index_tuple: tuple[int, ...], depth: int) -> list[tuple[int, ...]]:
    """Enumerate orderings of *index_tuple* by recursive suffix rotation.

    Args:
        index_tuple: Tuple of distinct values.
        depth: Recursion depth.  ``len(index_tuple) - 1`` yields all
            ``len(index_tuple)!`` orderings.

    Returns:
        List of tuples, starting with *index_tuple*.
    """
    if depth == 0:
        return [index_tuple]
    return [
        rotated
        for partial_tuple in expand(index_tuple, depth - 1)
        for rotated in _rotations(partial_tuple, depth - 1)
    ]


def rotation_schedule(p: int) -> np.ndarray:
    """Return the ``(p!, p)`` column orderings produced by :func:`expand`.

    Row *k* lists the 0-based source columns of the *k*-th ordering of
    any seed of length *p*.  The array is read-only and is rebuilt on
    every call; nothing is kept between requests.
    """
    schedule = np.array(expand(tuple(range(p)), p - 1), dtype=np.intp)
    schedule.flags.writeable = False
    return schedule


def _expand_seeds(seeds: IndexArray, schedule: np.ndarray) -> IndexArray:
    """Expand each seed row into its orderings, keeping seed order."""
    return seeds[:, schedule].reshape(-1, seeds.shape[1])


def index_permutations(n: int, p: int, pool: WorkerPool | None = None) -> IndexArray:
    """Generate every permutation index tuple of length *p*.

    Seeds come from :func:`~combogen.combinations.index_combinations`,
    which also performs the range check.  Seed chunks of
    ``len(seeds) // pool.n_jobs`` rows are expanded in parallel.

    Args:
        n: Size of the element set.
        p: Tuple length, ``0 < p <= n``.
        pool: Worker pool for seed expansion.  A default
            :class:`~combogen.parallel.WorkerPool` is used when ``None``.

    Returns:
        Read-only array of shape ``(n! / (n − p)!, p)`` with 1-based
        indices.

    Raises:
        InvalidLength: If *p* is out of range.
    """
    seeds = index_combinations(n, p)
    if pool is None:
        pool = WorkerPool()

    logger.debug(
        "Permutation index generation start (n=%d, p=%d, seeds=%d, size=%d)",
        n,
        p,
        seeds.shape[0],
        math.perm(n, p),
    )
    worker = partial(_expand_seeds, schedule=rotation_schedule(p))
    index_set = distribute(seeds, seeds.shape[0] // pool.n_jobs, worker, pool)

    index_set.flags.writeable = False
    return index_set
