"""Record sources: indexed FASTA files and in-memory record lists."""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

import pysam

from ..errors import InputError
from ..utils.indexing import ensure_fasta_index, fai_path_for
from .records import FaiEntry, SequenceRecord, read_fai_index

__all__ = ["RecordEntry", "RecordSource", "FastaRecordSource", "InMemoryRecordSource"]


class RecordEntry(Protocol):
    """Anything naming a record and its length."""

    @property
    def name(self) -> str: ...

    @property
    def length(self) -> int: ...


class RecordSource(Protocol):
    """Ordered, optionally prefix-filtered collection of loadable records."""

    @property
    def entries(self) -> Sequence[RecordEntry]: ...

    def load(self, entry: RecordEntry) -> SequenceRecord: ...


class FastaRecordSource:
    """Indexed FASTA file exposed as an ordered list of records.

    Record order and lengths come from the ``.fai`` index. Bodies are fetched
    on demand through ``pysam.FastaFile``; each thread gets its own handle
    since htslib file handles must not be shared between threads.

    Example:
        >>> with FastaRecordSource(Path("ref.fa"), prefix="chr") as source:
        ...     for entry in source.entries:
        ...         record = source.load(entry)
    """

    def __init__(
        self,
        fasta: Union[str, Path],
        prefix: str = "",
        build_index: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """Open ``fasta`` and read its index.

        Raises:
            InputError: If the FASTA or its index is missing or unreadable
        """
        self.fasta = Path(fasta)
        self.prefix = prefix
        self.logger = logger or logging.getLogger(__name__)
        self._local = threading.local()
        self._handles: List[pysam.FastaFile] = []
        self._handles_lock = threading.Lock()

        if not self.fasta.is_file():
            raise InputError(f"FASTA file not found: {self.fasta}")

        ensure_fasta_index(self.fasta, build_index, self.logger)
        self._all_entries = read_fai_index(fai_path_for(self.fasta))

        # Open eagerly so an unreadable file fails before dispatch
        self._handle()

        selected = self.entries
        if self.logger.isEnabledFor(logging.INFO):
            if prefix:
                self.logger.info(
                    f"Selected {len(selected)} of {len(self._all_entries)} records "
                    f"with prefix '{prefix}'"
                )
            else:
                self.logger.info(f"Loaded index with {len(selected)} records")

    @property
    def entries(self) -> List[FaiEntry]:
        if not self.prefix:
            return list(self._all_entries)
        return [e for e in self._all_entries if e.name.startswith(self.prefix)]

    def _handle(self) -> pysam.FastaFile:
        handle = getattr(self._local, "fasta", None)
        if handle is None:
            try:
                handle = pysam.FastaFile(str(self.fasta))
            except (OSError, ValueError) as e:
                raise InputError(f"Cannot open FASTA {self.fasta}: {e}") from e
            self._local.fasta = handle
            with self._handles_lock:
                self._handles.append(handle)
        return handle

    def load(self, entry: RecordEntry) -> SequenceRecord:
        """Fetch the full body of ``entry`` as raw bytes (case preserved)."""
        try:
            seq = self._handle().fetch(entry.name, 0, entry.length)
            body = seq.encode("ascii")
        except UnicodeError as e:
            raise InputError(f"Record '{entry.name}' is not ASCII: {e}") from e
        except (OSError, KeyError, ValueError, IndexError) as e:
            # A stale .fai makes htslib fail mid-read (BlockingIOError)
            raise InputError(f"Cannot fetch record '{entry.name}': {e}") from e
        if len(body) != entry.length:
            raise InputError(
                f"Record '{entry.name}' is truncated: index says {entry.length} "
                f"bases, read {len(body)}"
            )
        return SequenceRecord(entry.name, entry.length, body)

    def close(self) -> None:
        with self._handles_lock:
            for handle in self._handles:
                handle.close()
            self._handles.clear()
        self._local = threading.local()

    def __enter__(self) -> "FastaRecordSource":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class InMemoryRecordSource:
    """Record source over already-loaded records."""

    def __init__(self, records: Sequence[SequenceRecord], prefix: str = ""):
        self.records = list(records)
        self.prefix = prefix

    @property
    def entries(self) -> List[SequenceRecord]:
        return [r for r in self.records if r.name.startswith(self.prefix)]

    def load(self, entry: RecordEntry) -> SequenceRecord:
        if isinstance(entry, SequenceRecord):
            return entry
        for record in self.records:
            if record.name == entry.name:
                return record
        raise InputError(f"Unknown record '{entry.name}'")

    def close(self) -> None:
        pass
