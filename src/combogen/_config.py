"""Parallelism configuration for the combogen package.

Controls how many workers a default :class:`~combogen.parallel.WorkerPool`
starts and how many tuples a single materialization chunk holds.

Resolution order (first match wins), for each setting:
    1. Programmatic override via :func:`set_n_jobs` /
       :func:`set_chunk_limit`.
    2. The ``COMBOGEN_N_JOBS`` / ``COMBOGEN_CHUNK_LIMIT`` environment
       variables.
    3. Defaults: ``joblib.cpu_count()`` workers and chunks of
       :data:`DEFAULT_CHUNK_LIMIT` tuples.

Examples:
    Run single-threaded from the shell::

        export COMBOGEN_N_JOBS=1

    Shrink chunks programmatically::

        import combogen
        combogen.set_chunk_limit(250)

    Restore the default resolution::

        combogen.set_chunk_limit(None)
"""

from __future__ import annotations

import numbers
import os
import warnings

from joblib import cpu_count

DEFAULT_CHUNK_LIMIT = 1000

_N_JOBS_ENV = "COMBOGEN_N_JOBS"
_CHUNK_LIMIT_ENV = "COMBOGEN_CHUNK_LIMIT"

# Sentinels indicating "no programmatic override has been set".
_n_jobs_override: int | None = None
_chunk_limit_override: int | None = None


def _check_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}.")
    return int(value)


def _read_env(var: str) -> int | None:
    """Return the positive integer stored in *var*, or ``None``."""
    raw = os.environ.get(var, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        warnings.warn(
            f"Ignoring {var}={raw!r}: expected a positive integer.",
            UserWarning,
            stacklevel=3,
        )
        return None
    return value


def get_n_jobs() -> int:
    """Return the worker count used by default pools.

    Returns:
        A positive integer.
    """
    if _n_jobs_override is not None:
        return _n_jobs_override
    env = _read_env(_N_JOBS_ENV)
    if env is not None:
        return env
    return max(1, cpu_count())


def set_n_jobs(n_jobs: int | None) -> None:
    """Override the default worker count.

    Args:
        n_jobs: Positive number of workers, or ``None`` to restore the
            default resolution order.

    Raises:
        ValueError: If *n_jobs* is not a positive integer.
    """
    global _n_jobs_override
    _n_jobs_override = None if n_jobs is None else _check_positive("n_jobs", n_jobs)


def get_chunk_limit() -> int:
    """Return the maximum number of tuples per materialization chunk."""
    if _chunk_limit_override is not None:
        return _chunk_limit_override
    env = _read_env(_CHUNK_LIMIT_ENV)
    if env is not None:
        return env
    return DEFAULT_CHUNK_LIMIT


def set_chunk_limit(chunk_limit: int | None) -> None:
    """Override the materialization chunk limit.

    Args:
        chunk_limit: Positive chunk size, or ``None`` to restore the
            default resolution order.

    Raises:
        ValueError: If *chunk_limit* is not a positive integer.
    """
    global _chunk_limit_override
    _chunk_limit_override = (
        None if chunk_limit is None else _check_positive("chunk_limit", chunk_limit)
    )
