"""Small helpers shared by the disk probing code."""

from __future__ import annotations

import sys

NATIVE_BYTE_ORDER = sys.byteorder


class ErrorCollector:
    """Collects errors under string keys."""

    def __init__(self) -> None:
        self._errors: dict[str, BaseException] = {}

    def collect(self, key: str, error: BaseException | None) -> bool:
        """Record ``error`` under ``key``; return True if there was an error."""
        if error is None:
            return False
        self._errors[key] = error
        return True

    def errors(self) -> dict[str, BaseException]:
        """Return the collected errors keyed by name."""
        return dict(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)


def most_significant_bit(value: int) -> int:
    """Return the index of the highest set bit of ``value``, or 0 for 0."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return 0
    return value.bit_length() - 1