"""Combination index generation.

Index tuples are 1-based positions into an element set of size *n*.
A combination index set is a read-only integer array of shape
``(C(n, p), p)`` whose rows are strictly increasing and appear in
lexicographic order.

Construction
------------
Generation starts from the *index base*, the ``n`` singleton tuples
``[1], [2], …, [n]``, and extends it ``p − 1`` times.  One extension
step replaces every tuple ``t`` by the tuples ``t + [v]`` for each
``v`` in ``(t[-1], n]``, in ascending ``v``, keeping the source tuples
in their existing order.  After ``p − 1`` steps every row has length
*p*, and the order is lexicographic because both the source rows and
the appended values are walked in ascending order.

The extension is vectorised: each row is repeated once per candidate
suffix value (``n − t[-1]`` times) with ``np.repeat``, and the suffix
column is rebuilt from the per-row offsets.  For a row ``t`` that is
repeated ``k`` times the appended values are ``t[-1] + 1, …, t[-1] + k``.
"""

from __future__ import annotations

import logging
import numbers

import numpy as np

from ._errors import InvalidLength
from ._typing import IndexArray

logger = logging.getLogger(__name__)


def validate_length(n: int, p: int) -> None:
    """Check that ``0 < p <= n``.

    Args:
        n: Size of the element set.
        p: Requested tuple length.

    Raises:
        TypeError: If *p* is not an integer.
        InvalidLength: If *p* is out of range.  The message names the
            violated bound (``p > n``, ``p = 0`` or ``p < 0``).
    """
    if isinstance(p, bool) or not isinstance(p, numbers.Integral):
        raise TypeError(f"p must be an integer, got {type(p).__name__}.")
    if not 0 < p <= n:
        raise InvalidLength(n, int(p))


def index_base(n: int) -> IndexArray:
    """Return the ``n`` singleton index tuples ``[[1], [2], …, [n]]``."""
    return np.arange(1, n + 1, dtype=np.intp).reshape(-1, 1)


def _extend(index_set: IndexArray, n: int) -> IndexArray:
    """Append every admissible larger index to each row, in order."""
    last = index_set[:, -1]
    counts = n - last
    rows = np.repeat(index_set, counts, axis=0)
    # Position of each new row inside its source row's block.
    starts = np.repeat(np.cumsum(counts) - counts, counts)
    offsets = np.arange(rows.shape[0], dtype=np.intp) - starts
    suffix = np.repeat(last, counts) + 1 + offsets
    return np.column_stack([rows, suffix])


def index_combinations(n: int, p: int) -> IndexArray:
    """Generate every strictly increasing index tuple of length *p*.

    Args:
        n: Size of the element set.
        p: Tuple length, ``0 < p <= n``.

    Returns:
        Read-only array of shape ``(C(n, p), p)`` with 1-based indices
        in lexicographic row order.

    Raises:
        InvalidLength: If *p* is out of range.
    """
    validate_length(n, p)
    logger.debug("Combination index generation start (n=%d, p=%d)", n, p)

    index_set = index_base(n)
    for _ in range(p - 1):
        index_set = _extend(index_set, n)

    index_set.flags.writeable = False
    return index_set
