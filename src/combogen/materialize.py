"""Translation of index tuples back into element values.

Single-tuple helpers (:func:`to_values`, :func:`to_word`) work on any
sequence of 1-based indices.  The chunk workers returned by
:func:`values_worker` and :func:`words_worker` apply the same mapping
to a whole ``(k, p)`` index array and are what the generators hand to
:func:`~combogen.parallel.distribute`.

Separators
----------
An empty separator, or one made only of whitespace, joins without a
delimiter, so ``to_word((1, 2), "AB", " ")`` is ``"AB"``.  Every other
separator is inserted verbatim (``" - "`` keeps its spaces).
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import partial
from typing import Any

import numpy as np

from ._typing import ChunkWorker, IndexArray


def element_array(elements: Sequence[Any]) -> np.ndarray:
    """Pack *elements* into a read-only 1-D object array.

    Elements are assigned one by one so that sequence-valued elements
    (tuples, strings, lists) stay opaque instead of being broadcast
    into extra dimensions.
    """
    values = np.empty(len(elements), dtype=object)
    for i, element in enumerate(elements):
        values[i] = element
    values.flags.writeable = False
    return values


def _resolve_separator(separator: str) -> str:
    if not isinstance(separator, str):
        raise TypeError(f"separator must be a str, got {type(separator).__name__}.")
    return separator if separator.strip() else ""


def to_values(index_tuple: Sequence[int], elements: Sequence[Any]) -> list[Any]:
    """Return the elements at the 1-based positions in *index_tuple*."""
    return [elements[i - 1] for i in index_tuple]


def to_word(
    index_tuple: Sequence[int], elements: Sequence[Any], separator: str = ""
) -> str:
    """Join the ``str`` form of the selected elements with *separator*.

    Args:
        index_tuple: 1-based positions into *elements*.
        elements: The element set.
        separator: Delimiter placed between elements.  Empty or
            whitespace-only separators insert nothing.

    Returns:
        The joined string.
    """
    delimiter = _resolve_separator(separator)
    return delimiter.join(str(elements[i - 1]) for i in index_tuple)


def _lookup_chunk(chunk: IndexArray, values: np.ndarray) -> list[list[Any]]:
    return values[np.asarray(chunk) - 1].tolist()


def _word_chunk(
    chunk: IndexArray, labels: tuple[str, ...], delimiter: str
) -> list[str]:
    rows = np.asarray(chunk).tolist()
    return [delimiter.join(labels[i - 1] for i in row) for row in rows]


def values_worker(values: np.ndarray) -> ChunkWorker:
    """Build a chunk worker mapping index rows to value lists.

    Args:
        values: Object array from :func:`element_array`.

    Returns:
        Callable taking a ``(k, p)`` index array and returning ``k``
        lists of ``p`` elements.
    """
    return partial(_lookup_chunk, values=values)


def words_worker(elements: Sequence[Any], separator: str = "") -> ChunkWorker:
    """Build a chunk worker mapping index rows to joined strings.

    Raises:
        TypeError: If *separator* is not a string.
    """
    labels = tuple(str(element) for element in elements)
    return partial(_word_chunk, labels=labels, delimiter=_resolve_separator(separator))
