"""Sliding-window enumeration over sequence records."""

from dataclasses import dataclass
from typing import Iterator

from .records import SequenceRecord, Window

__all__ = ["WindowBlock", "WindowScanner"]


@dataclass(frozen=True)
class WindowBlock:
    """Half-open range ``[first, stop)`` of window start positions."""

    first: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.first


class WindowScanner:
    """Enumerate all fixed-length windows of a record in increasing start order.

    Windows can be produced one at a time (``windows``) or as contiguous
    blocks of start positions (``blocks``) for vectorised evaluation. Both
    cover exactly ``window_count(record.length, L)`` windows.
    """

    DEFAULT_BLOCK_SIZE = 1_000_000

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size}")
        self.block_size = block_size

    @staticmethod
    def window_count(length: int, window_length: int) -> int:
        """Number of windows of ``window_length`` in a sequence of ``length``.

        Example:
            >>> WindowScanner.window_count(8, 4)
            5
            >>> WindowScanner.window_count(3, 4)
            0
        """
        return max(0, length - window_length + 1)

    def windows(self, record: SequenceRecord, window_length: int) -> Iterator[Window]:
        """Lazily yield every window of ``record``; empty if the record is too short."""
        if window_length < 1:
            raise ValueError(f"window_length must be >= 1, got {window_length}")
        body = record.body
        for start in range(self.window_count(record.length, window_length)):
            end = start + window_length
            yield Window(record.name, start, end, body[start:end])

    def blocks(
        self, record: SequenceRecord, window_length: int
    ) -> Iterator[WindowBlock]:
        """Lazily yield blocks of at most ``block_size`` window starts."""
        if window_length < 1:
            raise ValueError(f"window_length must be >= 1, got {window_length}")
        total = self.window_count(record.length, window_length)
        for first in range(0, total, self.block_size):
            yield WindowBlock(first, min(first + self.block_size, total))
