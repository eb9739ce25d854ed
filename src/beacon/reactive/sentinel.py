"""The empty-value sentinel.

``EMPTY`` marks a signal that has never been written (or has been disposed).
It is distinct from every storable value, ``None`` included, and is a
single-member enum so type checkers can narrow on ``value is EMPTY``.
"""

from __future__ import annotations

import enum


class Empty(enum.Enum):
    """Type of the ``EMPTY`` sentinel."""

    EMPTY = "EMPTY"

    def __repr__(self) -> str:
        return "<empty>"

    def __bool__(self) -> bool:
        return False


EMPTY = Empty.EMPTY
