"""Ordered divide-and-merge work distribution.

:func:`distribute` is the single parallel primitive of the package.  It
is used twice per permutation request (seed expansion, then
materialization) and once per combination request (materialization).

Chunking model
--------------
A sequence of *size* items with a chunk limit *L* is cut into
``size // L`` consecutive ranges of exactly *L* items, plus one
remainder range when *L* does not divide *size*.  Each range becomes an
independent unit of work: :func:`distribute` is applied to it again (it
is then at most *L* long, so it resolves to a direct worker call) and
all units are submitted together to a :class:`WorkerPool`.

Ordering
--------
``joblib.Parallel`` returns results in submission order regardless of
which unit finishes first, and units are submitted in range order.  The
merged output is therefore identical to a sequential
``worker(items)`` call for any order-preserving *worker*.  Changing the
chunk limit or the worker count never changes the output.

Failure
-------
An exception raised by any unit is re-raised by ``joblib.Parallel`` in
the calling thread; outstanding units are abandoned and nothing is
returned.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from functools import partial
from typing import Any

import numpy as np
from joblib import Parallel, delayed

from ._config import _check_positive, get_n_jobs
from ._typing import ChunkWorker

logger = logging.getLogger(__name__)

_VALID_PREFER = ("threads", "processes")


class WorkerPool:
    """Sizing policy for the parallel units of a generation call.

    The pool holds only the worker count and the joblib preference; it
    owns no threads.  Every :meth:`map_ordered` call builds its own
    ``joblib.Parallel`` dispatcher, which starts and joins its workers
    within that call, so one instance can be handed to concurrent
    callers without shared dispatcher state.

    Args:
        n_jobs: Number of workers.  ``None`` resolves through
            :func:`~combogen.get_n_jobs` (CPU count unless overridden).
        prefer: ``"threads"`` (default) or ``"processes"``, forwarded
            to ``joblib.Parallel``.

    Raises:
        ValueError: If *n_jobs* is not positive or *prefer* is unknown.
    """

    def __init__(self, n_jobs: int | None = None, prefer: str = "threads") -> None:
        if prefer not in _VALID_PREFER:
            raise ValueError(
                f"Unknown prefer='{prefer}'. Choose from: {list(_VALID_PREFER)}"
            )
        self.n_jobs: int = (
            get_n_jobs() if n_jobs is None else _check_positive("n_jobs", n_jobs)
        )
        self.prefer = prefer

    def __repr__(self) -> str:
        return f"WorkerPool(n_jobs={self.n_jobs}, prefer={self.prefer!r})"

    def map_ordered(self, func: ChunkWorker, units: Sequence[Any]) -> list[Any]:
        """Apply *func* to every unit and return results in unit order.

        Args:
            func: Callable applied to each unit.
            units: Independent work units.

        Returns:
            ``[func(u) for u in units]``, computed in parallel.
        """
        # Sequential path, nothing to overlap.
        if self.n_jobs == 1 or len(units) <= 1:
            return [func(unit) for unit in units]

        return Parallel(n_jobs=self.n_jobs, prefer=self.prefer)(
            delayed(func)(unit) for unit in units
        )


def _chunk_bounds(size: int, chunk_limit: int) -> list[tuple[int, int]]:
    """Return ``(start, stop)`` pairs covering ``range(size)`` in order."""
    full, remainder = divmod(size, chunk_limit)
    bounds = [(i * chunk_limit, (i + 1) * chunk_limit) for i in range(full)]
    if remainder:
        bounds.append((size - remainder, size))
    return bounds


def _merge(parts: list[Any]) -> Any:
    """Concatenate sub-results in the order given."""
    if parts and all(isinstance(part, np.ndarray) for part in parts):
        return np.concatenate(parts, axis=0)
    return list(itertools.chain.from_iterable(parts))


def distribute(
    items: Sequence[Any],
    chunk_limit: int,
    worker: ChunkWorker,
    pool: WorkerPool | None = None,
) -> Any:
    """Map *worker* over *items* chunk by chunk and merge in order.

    Args:
        items: Sliceable sequence (list or array whose first axis
            indexes the items).
        chunk_limit: Maximum number of items per unit of work.  A value
            below 1 disables splitting.
        worker: Pure, order-preserving function mapping a chunk of
            items to a chunk of results (a list or an array).
        pool: Pool the units are submitted to.  A fresh
            :class:`WorkerPool` with default sizing is used when
            ``None``.

    Returns:
        The concatenated per-chunk results: an array when every chunk
        result is an array, otherwise a list.
    """
    size = len(items)
    if chunk_limit < 1 or size <= chunk_limit:
        return worker(items)

    if pool is None:
        pool = WorkerPool()

    bounds = _chunk_bounds(size, chunk_limit)
    logger.debug(
        "Dividing %d items into %d units (chunk_limit=%d, n_jobs=%d)",
        size,
        len(bounds),
        chunk_limit,
        pool.n_jobs,
    )
    unit = partial(distribute, chunk_limit=chunk_limit, worker=worker, pool=pool)
    parts = pool.map_ordered(unit, [items[start:stop] for start, stop in bounds])
    return _merge(parts)
