"""Identifier generation for model elements and relationships."""

from __future__ import annotations

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


class IdGenerator:
    """Sequential ``id-<prefix>-<counter>`` identifiers.

    One instance belongs to one extraction run. The counter is shared across
    prefixes, so an id is never reused within that run regardless of prefix.
    """

    def __init__(self) -> None:
        self._counter = 0

    def next(self, prefix: str) -> str:
        self._counter += 1
        return f"id-{prefix}-{_base36(self._counter).rjust(6, '0')}"

    def reset(self) -> None:
        self._counter = 0

    @property
    def issued(self) -> int:
        """Number of ids handed out since creation or the last reset."""
        return self._counter
