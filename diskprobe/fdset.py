"""A select(2)-style file descriptor set kept as 64-bit words."""

from __future__ import annotations

from dataclasses import dataclass, field

WORD_BITS = 64
WORD_COUNT = 16
FD_SETSIZE = WORD_BITS * WORD_COUNT


def _empty_words() -> list[int]:
    return [0] * WORD_COUNT


@dataclass
class FdSet:
    """A fixed-size bit set of file descriptors."""

    bits: list[int] = field(default_factory=_empty_words)

    def __post_init__(self) -> None:
        if len(self.bits) != WORD_COUNT:
            raise ValueError(f"an fd set holds exactly {WORD_COUNT} words")
        self.bits = list(self.bits)

    @staticmethod
    def _locate(fd: int) -> tuple[int, int]:
        if not 0 <= fd < FD_SETSIZE:
            raise ValueError(f"file descriptor {fd} outside 0..{FD_SETSIZE - 1}")
        return divmod(fd, WORD_BITS)

    def add(self, fd: int) -> None:
        """Add ``fd`` to the set."""
        word, bit = self._locate(fd)
        self.bits[word] |= 1 << bit

    def is_set(self, fd: int) -> bool:
        """Return True if ``fd`` is part of the set."""
        word, bit = self._locate(fd)
        return bool(self.bits[word] & (1 << bit))

    def clear(self) -> None:
        """Remove every descriptor from the set."""
        self.bits = _empty_words()

    def __contains__(self, fd: object) -> bool:
        return isinstance(fd, int) and 0 <= fd < FD_SETSIZE and self.is_set(fd)