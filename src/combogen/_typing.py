"""Shared type aliases for the combogen package."""

from collections.abc import Callable
from typing import Any

import numpy as np

# Read-only integer array of shape ``(count, p)``; each row is one
# 1-based index tuple.
IndexArray = np.ndarray

# Per-chunk mapping function handed to :func:`~combogen.parallel.distribute`.
ChunkWorker = Callable[[Any], Any]
