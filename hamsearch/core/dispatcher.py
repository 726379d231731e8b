"""Fan-out of whole records across a pool of scan workers."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np
from tqdm import tqdm

from ..io.result_sink import RecordBuffer, ResultSink
from .distance_evaluator import DistanceEvaluator
from .record_source import RecordEntry, RecordSource
from .records import MatchResult, RecordScanStats, SequenceRecord
from .window_scanner import WindowScanner

__all__ = ["MatchEmitter", "RecordScanStats", "scan_record", "ParallelDispatcher"]


class MatchEmitter(Protocol):
    def emit(self, match: MatchResult) -> None: ...


def scan_record(
    record: SequenceRecord,
    evaluator: DistanceEvaluator,
    scanner: WindowScanner,
    sink: MatchEmitter,
) -> RecordScanStats:
    """Scan one record and emit its matches in increasing start order."""
    qlen = len(evaluator.query)
    body = np.frombuffer(record.body, dtype=np.uint8)
    matches = 0
    for block in scanner.blocks(record, qlen):
        starts, mismatches = evaluator.evaluate_block(body, block)
        for start, count in zip(starts.tolist(), mismatches.tolist()):
            end = start + qlen
            sink.emit(
                MatchResult(record.name, start, end, record.body[start:end], count)
            )
            matches += 1
    return RecordScanStats(
        record.name,
        record.length,
        scanner.window_count(record.length, qlen),
        matches,
    )


class ParallelDispatcher:
    """Run scans of independent records on a fixed-size thread pool.

    Each record is scanned start-to-finish by a single worker. The numpy
    comparisons in ``DistanceEvaluator.evaluate_block`` release the GIL, so
    workers make progress concurrently on multi-core machines.
    """

    def __init__(
        self,
        parallelism: int,
        logger: logging.Logger,
        show_progress: bool = True,
        ordered: bool = False,
        block_size: int = WindowScanner.DEFAULT_BLOCK_SIZE,
    ):
        """Initialize dispatcher.

        Args:
            parallelism: Number of worker threads (>= 1)
            logger: Logger instance for output
            show_progress: Whether to show a progress bar on stderr
            ordered: Emit records in source order instead of completion order
            block_size: Window starts evaluated per vectorised block
        """
        if parallelism < 1:
            raise ValueError(f"parallelism must be >= 1, got {parallelism}")
        self.parallelism = parallelism
        self.logger = logger
        self.show_progress = show_progress
        self.ordered = ordered
        self.scanner = WindowScanner(block_size)

    def _scan_entry(
        self,
        source: RecordSource,
        entry: RecordEntry,
        evaluator: DistanceEvaluator,
        sink: ResultSink,
    ) -> Tuple[RecordScanStats, Optional[RecordBuffer]]:
        record = source.load(entry)
        if self.ordered:
            buffer = RecordBuffer()
            stats = scan_record(record, evaluator, self.scanner, buffer)
        else:
            buffer = None
            stats = scan_record(record, evaluator, self.scanner, sink)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Scanned {stats.name}: {stats.windows} windows, "
                f"{stats.matches} matches"
            )
        return stats, buffer

    def run(
        self,
        source: RecordSource,
        query: bytes,
        threshold: int,
        sink: ResultSink,
    ) -> List[RecordScanStats]:
        """Scan every record of ``source`` and block until all are done.

        Args:
            source: Records to scan (already prefix-filtered)
            query: Query sequence
            threshold: Maximum mismatches for a window to be emitted
            sink: Shared output

        Returns:
            Scan statistics per record, in source order

        Raises:
            Any exception raised by a worker, after pending work is cancelled
        """
        entries = list(source.entries)
        if not entries:
            if self.logger.isEnabledFor(logging.WARNING):
                self.logger.warning("No records selected; nothing to scan")
            return []

        evaluator = DistanceEvaluator(query, threshold)
        workers = min(self.parallelism, len(entries))
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Scanning {len(entries)} records with {workers} worker(s)..."
            )

        results: List[Optional[RecordScanStats]] = [None] * len(entries)
        progress = tqdm(
            total=len(entries),
            desc="Scanning records",
            unit="record",
            leave=False,
            disable=not (self.show_progress and len(entries) > 1),
        )
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="hamsearch"
        ) as pool:
            futures: List[Future] = [
                pool.submit(self._scan_entry, source, entry, evaluator, sink)
                for entry in entries
            ]
            try:
                if self.ordered:
                    # Consume in submission order so buffers drain in record order
                    for idx, fut in enumerate(futures):
                        stats, buffer = fut.result()
                        if buffer is not None:
                            buffer.drain_into(sink)
                        results[idx] = stats
                        progress.update()
                else:
                    index: Dict[Future, int] = {f: i for i, f in enumerate(futures)}
                    for fut in as_completed(futures):
                        stats, _ = fut.result()
                        results[index[fut]] = stats
                        progress.update()
            except BaseException:
                for pending in futures:
                    pending.cancel()
                raise
            finally:
                progress.close()

        return [r for r in results if r is not None]
