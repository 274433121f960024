"""Exception types raised by the generation engine.

Both exceptions subclass :class:`ValueError` so callers that already
guard argument errors keep working.  They are raised during validation,
before any generation work starts, so no partial result ever exists.
"""

from __future__ import annotations


class InvalidLength(ValueError):
    """The requested tuple length *p* does not satisfy ``0 < p <= n``.

    The message names which bound was violated (``p > n``, ``p = 0``
    or ``p < 0``).

    Attributes:
        n: Size of the element set.
        p: The rejected tuple length.
    """

    def __init__(self, n: int, p: int) -> None:
        self.n = n
        self.p = p
        if p > n:
            reason = "p > n"
        elif p == 0:
            reason = "p = 0"
        else:
            reason = "p < 0"
        super().__init__(
            f"Invalid generation length ({reason}): p={p}, n={n}.  "
            f"The length must satisfy 0 < p <= n."
        )


class EmptyInput(ValueError):
    """A generator was constructed with no elements."""

    def __init__(self) -> None:
        super().__init__(
            "A generator needs at least one element; got an empty element set."
        )
