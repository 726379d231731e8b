"""Hamming distance with threshold filtering, scalar and vectorised."""

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from ..errors import ScanContractError
from .records import MatchResult, Window
from .window_scanner import WindowBlock

__all__ = ["DistanceEvaluator", "hamming_distance"]


def hamming_distance(
    window: bytes, query: bytes, threshold: Optional[int] = None
) -> Optional[int]:
    """Count differing positions, stopping once ``threshold`` is exceeded.

    Comparison is byte-exact: no case folding, no IUPAC handling.

    Args:
        window: Candidate subsequence
        query: Query of the same length
        threshold: Maximum distance of interest, or None for a full count

    Returns:
        The distance, or None if it is greater than ``threshold``

    Raises:
        ScanContractError: If the lengths differ

    Example:
        >>> hamming_distance(b"ACGT", b"ACGA")
        1
        >>> hamming_distance(b"CGTA", b"ACGA", threshold=1) is None
        True
    """
    if len(window) != len(query):
        raise ScanContractError(
            f"window length {len(window)} != query length {len(query)}"
        )
    mismatches = 0
    for a, b in zip(window, query):
        if a != b:
            mismatches += 1
            if threshold is not None and mismatches > threshold:
                return None
    return mismatches


class DistanceEvaluator:
    """Filter windows against one query and mismatch threshold."""

    def __init__(self, query: bytes, threshold: int):
        if not query:
            raise ScanContractError("query must not be empty")
        self.query = bytes(query)
        self.threshold = threshold
        self._query_array: NDArray[np.uint8] = np.frombuffer(self.query, dtype=np.uint8)

    def distance(self, window: bytes) -> Optional[int]:
        """Distance of ``window`` to the query, None if above the threshold."""
        return hamming_distance(window, self.query, self.threshold)

    def evaluate_window(self, window: Window) -> Optional[MatchResult]:
        """Return a MatchResult if ``window`` is within the threshold."""
        mismatches = self.distance(window.sequence)
        if mismatches is None:
            return None
        return MatchResult(
            window.record_name, window.start, window.end, window.sequence, mismatches
        )

    def evaluate_block(
        self, body: NDArray[np.uint8], block: WindowBlock
    ) -> Tuple[NDArray[np.int64], NDArray[np.int32]]:
        """Evaluate every window starting in ``block`` at once.

        Query columns are compared one at a time across all surviving
        windows; windows whose running count exceeds the threshold are
        dropped immediately, so later columns only touch live candidates.

        Args:
            body: Record bytes as a uint8 array
            block: Window start positions to evaluate

        Returns:
            Tuple of (start positions, mismatch counts) for qualifying
            windows, in increasing start order
        """
        qlen = self._query_array.size
        if block.first < 0 or block.stop + qlen - 1 > body.size:
            raise ScanContractError(
                f"block [{block.first}, {block.stop}) with query length {qlen} "
                f"overruns body of length {body.size}"
            )
        threshold = self.threshold
        mismatches = np.zeros(len(block), dtype=np.int32)
        # None while every window of the block is still a candidate
        starts: Optional[NDArray[np.int64]] = None

        for j in range(qlen):
            if starts is None:
                column = body[block.first + j : block.stop + j]
            else:
                column = body[starts + j]
            mismatches += column != self._query_array[j]

            # After j + 1 columns no window can have more than j + 1 mismatches
            if j < threshold:
                continue
            keep = mismatches <= threshold
            if keep.all():
                continue
            if starts is None:
                starts = np.arange(block.first, block.stop, dtype=np.int64)
            starts = starts[keep]
            mismatches = mismatches[keep]
            if starts.size == 0:
                break

        if starts is None:
            starts = np.arange(block.first, block.stop, dtype=np.int64)
        return starts, mismatches
