"""Main application coordinator for HamSearch."""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

from .core import FastaRecordSource, ParallelDispatcher, RecordScanStats, WindowScanner
from .io import ResultSink, ScanSummaryWriter
from .utils import (
    MemoryMonitor,
    available_cpu_count,
    setup_logger,
    validate_search_parameters,
)

__all__ = ["HamSearchConfig", "HamSearchApp"]


@dataclass
class HamSearchConfig:
    """Configuration for HamSearch application.

    Attributes:
        fasta: Path to the FASTA file (index expected at ``<fasta>.fai``)
        query: Query sequence, matched byte-exactly
        prefix: Only scan records whose name starts with this prefix
        distance: Maximum mismatches for a window to be reported
        parallelism: Worker threads; None for all CPUs available to the process
        output: Output TSV path; None for stdout
        header: Write a column header line before the matches
        ordered: Emit records in index order instead of completion order
        build_index: Create a missing ``.fai`` index instead of failing
        summary_tsv: Optional per-record summary TSV path
        block_size: Window starts evaluated per vectorised block
        verbose: Whether to enable verbose logging
        log_level: Logging level override
        log_format: Logging format (text or json)

    Example:
        >>> config = HamSearchConfig(fasta=Path("ref.fa"), query="ACGA", distance=1)
        >>> config.prefix, config.ordered
        ('', False)
    """

    fasta: Path
    query: str
    prefix: str = ""
    distance: int = 6
    parallelism: Optional[int] = None
    output: Optional[Path] = None
    header: bool = False
    ordered: bool = False
    build_index: bool = False
    summary_tsv: Optional[Path] = None
    block_size: int = WindowScanner.DEFAULT_BLOCK_SIZE
    verbose: bool = True
    log_level: Optional[str] = None
    log_format: str = "text"


class HamSearchApp:
    """Main application coordinator with separated concerns."""

    def __init__(self, config: HamSearchConfig, stream: Optional[TextIO] = None):
        """Initialize HamSearch application with configuration.

        Args:
            config: Application configuration
            stream: Stream used when ``config.output`` is None (default stdout)
        """
        self.config = config
        self.stream = stream
        self.logger = setup_logger(
            "hamsearch", config.log_level, config.log_format, config.verbose
        )
        self.memory_monitor = MemoryMonitor(self.logger)
        self.summary_writer = ScanSummaryWriter()

    @contextmanager
    def _open_output(self) -> Iterator[TextIO]:
        if self.config.output is None:
            yield self.stream if self.stream is not None else sys.stdout
            return
        self.config.output.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config.output, "w", encoding="utf-8", newline="\n") as fh:
            yield fh

    def run(self) -> List[RecordScanStats]:
        """Execute the complete search.

        1. Parameter validation (before any input is touched)
        2. Index check and record selection
        3. Parallel scan, writing matches as they are found
        4. Optional summary TSV

        Returns:
            Per-record scan statistics, in index order

        Raises:
            ValidationError: On invalid parameters
            InputError: If the FASTA or its index cannot be used
        """
        cfg = self.config
        validate_search_parameters(
            cfg.query, cfg.distance, cfg.parallelism, cfg.block_size
        )
        parallelism = cfg.parallelism or available_cpu_count()
        self.memory_monitor.check_memory_and_warn("initialization")

        with FastaRecordSource(
            cfg.fasta, cfg.prefix, cfg.build_index, self.logger
        ) as source:
            entries = source.entries
            if entries:
                self.memory_monitor.warn_for_large_scan(
                    max(e.length for e in entries),
                    cfg.block_size,
                    min(parallelism, len(entries)),
                )

            dispatcher = ParallelDispatcher(
                parallelism,
                self.logger,
                show_progress=cfg.verbose,
                ordered=cfg.ordered,
                block_size=cfg.block_size,
            )
            with self._open_output() as stream:
                sink = ResultSink(stream, header=cfg.header)
                stats = dispatcher.run(
                    source, cfg.query.encode("ascii"), cfg.distance, sink
                )
                sink.flush()

        if self.logger.isEnabledFor(logging.INFO):
            total_windows = sum(s.windows for s in stats)
            total_matches = sum(s.matches for s in stats)
            self.logger.info(
                f"Done: {total_matches} matches in {total_windows} windows "
                f"across {len(stats)} records"
            )

        if cfg.summary_tsv is not None:
            path = self.summary_writer.write_summary(stats, cfg.summary_tsv)
            if self.logger.isEnabledFor(logging.INFO):
                self.logger.info(f"Summary TSV written: {path}")

        self.memory_monitor.check_memory_and_warn("scan complete")
        if self.logger.isEnabledFor(logging.INFO):
            final_memory = self.memory_monitor.get_memory_usage_mb()
            self.logger.info(f"Final memory usage: {final_memory:.1f}MB")

        return stats
