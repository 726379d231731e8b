"""Tab-separated match output shared by all scan workers."""

import threading
from typing import List, TextIO

from ..core.records import MatchResult

__all__ = ["HEADER_LINE", "format_match_line", "ResultSink", "RecordBuffer"]

HEADER_LINE = "seq_name\tstart\tend\tsequence\tmismatches"


def format_match_line(match: MatchResult) -> str:
    """Render one match as a newline-terminated TSV line.

    Example:
        >>> format_match_line(MatchResult("chr1", 0, 4, b"ACGT", 1))
        'chr1\\t0\\t4\\tACGT\\t1\\n'
    """
    return (
        f"{match.seq_name}\t{match.start}\t{match.end}\t"
        f"{match.matched_subsequence.decode('ascii')}\t{match.mismatches}\n"
    )


class ResultSink:
    """Write matches to a stream, one whole line per lock acquisition.

    Lines from different workers never interleave; their relative order is
    whatever order the workers reach the lock in.
    """

    def __init__(self, stream: TextIO, header: bool = False):
        self.stream = stream
        self.matches_written = 0
        self._lock = threading.Lock()
        if header:
            self.stream.write(HEADER_LINE + "\n")

    def emit(self, match: MatchResult) -> None:
        line = format_match_line(match)
        with self._lock:
            self.stream.write(line)
            self.matches_written += 1

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()


class RecordBuffer:
    """Collects one record's matches for later, in-order hand-off to a sink."""

    def __init__(self) -> None:
        self.matches: List[MatchResult] = []

    def emit(self, match: MatchResult) -> None:
        self.matches.append(match)

    def drain_into(self, sink: ResultSink) -> int:
        """Emit buffered matches into ``sink`` and clear the buffer."""
        count = len(self.matches)
        for match in self.matches:
            sink.emit(match)
        self.matches = []
        return count
