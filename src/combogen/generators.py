"""Generator facade, the public entry point for enumeration.

A generator is bound to one ordered element set at construction and
then answers any number of independent requests::

    >>> from combogen import new_combination_generator
    >>> gen = new_combination_generator("A", "B", "C")
    >>> gen.generate(2)
    [['A', 'B'], ['A', 'C'], ['B', 'C']]
    >>> gen.generate_to_word(2)
    ['AB', 'AC', 'BC']

Each request runs the same pipeline:

1. **Validation**: ``0 < p <= n``, raising
   :class:`~combogen.InvalidLength` before any work starts.
2. **Index generation**: combination or permutation index rows
   (1-based), see :mod:`combogen.combinations` and
   :mod:`combogen.permutations`.
3. **Materialization**: the index rows are mapped onto the element set
   chunk by chunk through :func:`~combogen.parallel.distribute`.

Generators hold no per-request state: the element set and pool are
read-only after construction, so one instance can serve concurrent
callers.
"""

from __future__ import annotations

import logging
import math
import warnings
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar

from ._config import _check_positive, get_chunk_limit
from ._errors import EmptyInput
from ._typing import IndexArray
from .combinations import index_combinations, validate_length
from .materialize import element_array, values_worker, words_worker
from .parallel import WorkerPool, distribute
from .permutations import index_permutations

logger = logging.getLogger(__name__)

# Result sets above this many tuples trigger a memory warning.
LARGE_RESULT_THRESHOLD = 10_000_000


class Generator(ABC):
    """Base class for permutation and combination generators.

    Args:
        elements: Ordered, non-empty element set.  Elements are opaque;
            only :meth:`generate_to_word` calls ``str`` on them.
        pool: Worker pool for index expansion and materialization.  A
            :class:`~combogen.parallel.WorkerPool` with default sizing
            is created when ``None``.
        chunk_limit: Tuples per materialization chunk.  ``None`` defers
            to :func:`~combogen.get_chunk_limit` at call time.

    Raises:
        EmptyInput: If *elements* is empty.
        ValueError: If *chunk_limit* is not a positive integer.

    Attributes:
        mode: ``"permutation"`` or ``"combination"``.
        pool: The worker pool used by every request.
    """

    mode: ClassVar[str]

    def __init__(
        self,
        elements: Iterable[Any],
        *,
        pool: WorkerPool | None = None,
        chunk_limit: int | None = None,
    ) -> None:
        self._elements = tuple(elements)
        if not self._elements:
            raise EmptyInput()
        self._values = element_array(self._elements)
        self.pool = pool if pool is not None else WorkerPool()
        self._chunk_limit = (
            None if chunk_limit is None else _check_positive("chunk_limit", chunk_limit)
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={self.n}, pool={self.pool!r}, "
            f"chunk_limit={self._chunk_limit})"
        )

    @property
    def elements(self) -> tuple[Any, ...]:
        """The element set, in construction order."""
        return self._elements

    @property
    def n(self) -> int:
        """Number of elements."""
        return len(self._elements)

    @property
    def chunk_limit(self) -> int:
        """Materialization chunk limit in effect for the next request."""
        return self._chunk_limit if self._chunk_limit is not None else get_chunk_limit()

    @abstractmethod
    def _size(self, p: int) -> int:
        """Number of tuples of length *p* (``p`` already validated)."""

    @abstractmethod
    def _index(self, p: int) -> IndexArray:
        """Index rows of length *p* (``p`` already validated)."""

    def count(self, p: int) -> int:
        """Return how many tuples :meth:`generate` would produce.

        Raises:
            InvalidLength: If *p* is out of range.
        """
        validate_length(self.n, p)
        return self._size(p)

    def _prepare(self, p: int) -> IndexArray:
        size = self.count(p)
        if size > LARGE_RESULT_THRESHOLD:
            warnings.warn(
                f"Generating {size:,} {self.mode} tuples of length {p}; the "
                f"full result set is held in memory.",
                UserWarning,
                stacklevel=3,
            )
        return self._index(p)

    def generate(self, p: int) -> list[list[Any]]:
        """Enumerate every tuple of length *p* as a list of elements.

        Args:
            p: Tuple length, ``0 < p <= n``.

        Returns:
            One list of *p* elements per tuple, in enumeration order.

        Raises:
            InvalidLength: If *p* is out of range.
        """
        index_set = self._prepare(p)
        logger.debug("Values generation start (%d tuples)", index_set.shape[0])
        return distribute(
            index_set, self.chunk_limit, values_worker(self._values), self.pool
        )

    def generate_to_word(self, p: int, separator: str = "") -> list[str]:
        """Enumerate every tuple of length *p* as a joined string.

        Args:
            p: Tuple length, ``0 < p <= n``.
            separator: Delimiter between elements.  Empty or
                whitespace-only separators insert nothing.

        Returns:
            One string per tuple, in enumeration order.

        Raises:
            InvalidLength: If *p* is out of range.
            TypeError: If *separator* is not a string.
        """
        validate_length(self.n, p)
        worker = words_worker(self._elements, separator)
        index_set = self._prepare(p)
        logger.debug("Word generation start (%d tuples)", index_set.shape[0])
        return distribute(index_set, self.chunk_limit, worker, self.pool)


class CombinationGenerator(Generator):
    """Generator of ``C(n, p)`` combinations in lexicographic order."""

    mode = "combination"

    def _size(self, p: int) -> int:
        return math.comb(self.n, p)

    def _index(self, p: int) -> IndexArray:
        return index_combinations(self.n, p)


class PermutationGenerator(Generator):
    """Generator of ``n! / (n − p)!`` permutations in rotation order."""

    mode = "permutation"

    def _size(self, p: int) -> int:
        return math.perm(self.n, p)

    def _index(self, p: int) -> IndexArray:
        return index_permutations(self.n, p, pool=self.pool)


def new_combination_generator(
    *elements: Any,
    pool: WorkerPool | None = None,
    chunk_limit: int | None = None,
) -> CombinationGenerator:
    """Return a :class:`CombinationGenerator` over *elements*.

    Raises:
        EmptyInput: If no elements are given.
    """
    return CombinationGenerator(elements, pool=pool, chunk_limit=chunk_limit)


def new_permutation_generator(
    *elements: Any,
    pool: WorkerPool | None = None,
    chunk_limit: int | None = None,
) -> PermutationGenerator:
    """Return a :class:`PermutationGenerator` over *elements*.

    Raises:
        EmptyInput: If no elements are given.
    """
    return PermutationGenerator(elements, pool=pool, chunk_limit=chunk_limit)
