"""Record, window and match data structures plus FASTA index parsing."""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..errors import InputError

__all__ = [
    "FaiEntry",
    "SequenceRecord",
    "Window",
    "MatchResult",
    "RecordScanStats",
    "read_fai_index",
]


@dataclass(frozen=True)
class FaiEntry:
    """One line of a samtools ``.fai`` index.

    Attributes:
        name: Record name (first word of the FASTA header)
        length: Number of bases in the record
        offset: Byte offset of the first base in the FASTA file
        line_bases: Bases per sequence line
        line_width: Bytes per sequence line, including the newline
    """

    name: str
    length: int
    offset: int
    line_bases: int
    line_width: int


@dataclass(frozen=True)
class SequenceRecord:
    """A named sequence with its raw bytes.

    Example:
        >>> rec = SequenceRecord("chr1", 8, b"ACGTACGT")
        >>> rec.body[0:4]
        b'ACGT'
    """

    name: str
    length: int
    body: bytes


@dataclass(frozen=True)
class Window:
    """Transient view of ``record.body[start:end]``."""

    record_name: str
    start: int
    end: int
    sequence: bytes


@dataclass(frozen=True)
class MatchResult:
    """A window whose Hamming distance to the query is within the threshold.

    Example:
        >>> m = MatchResult("chr1", 0, 4, b"ACGT", 1)
        >>> m.end - m.start
        4
    """

    seq_name: str
    start: int
    end: int
    matched_subsequence: bytes
    mismatches: int


@dataclass
class RecordScanStats:
    """Per-record scan counters.

    Attributes:
        name: Record name
        length: Record length in bases
        windows: Number of windows examined
        matches: Number of windows emitted as matches
    """

    name: str
    length: int
    windows: int
    matches: int


def read_fai_index(path: Path) -> List[FaiEntry]:
    """Parse a ``.fai`` index into entries, keeping file order.

    Args:
        path: Path to the index file

    Returns:
        List of FaiEntry, one per indexed record

    Raises:
        InputError: If the index cannot be read or a line is malformed
    """
    entries: List[FaiEntry] = []
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, 1):
                line = line.rstrip("\n")
                if not line:
                    continue
                parts = line.split("\t")
                if len(parts) < 5:
                    raise InputError(
                        f"Malformed FASTA index {path} at line {lineno}: "
                        f"expected 5 tab-separated fields, found {len(parts)}"
                    )
                try:
                    length, offset, line_bases, line_width = (
                        int(x) for x in parts[1:5]
                    )
                except ValueError:
                    raise InputError(
                        f"Malformed FASTA index {path} at line {lineno}: "
                        "non-integer field"
                    ) from None
                entries.append(
                    FaiEntry(parts[0], length, offset, line_bases, line_width)
                )
    except OSError as e:
        raise InputError(f"Cannot read FASTA index {path}: {e}") from e
    return entries
