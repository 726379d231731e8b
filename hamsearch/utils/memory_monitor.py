"""Memory usage monitoring and CPU discovery."""

import logging

import psutil

__all__ = ["MemoryMonitor", "available_cpu_count"]


def available_cpu_count() -> int:
    """Number of CPUs this process may run on.

    Uses the scheduler affinity mask where the platform exposes one (Linux,
    Windows), otherwise the logical CPU count.
    """
    try:
        return max(1, len(psutil.Process().cpu_affinity()))
    except (AttributeError, NotImplementedError, psutil.Error):
        return max(1, psutil.cpu_count(logical=True) or 1)


class MemoryMonitor:
    """Utility class for monitoring memory usage and providing warnings."""

    # Dynamic threshold percentages of total system memory
    WARNING_THRESHOLD_PERCENT = 50.0
    CRITICAL_THRESHOLD_PERCENT = 90.0

    def __init__(self, logger: logging.Logger):
        """Initialize memory monitor with logger and dynamic thresholds.

        Args:
            logger: Logger instance for output

        Example:
            >>> from hamsearch.utils.logging_setup import setup_logger
            >>> monitor = MemoryMonitor(setup_logger("memory_monitor"))
            >>> monitor.warning_threshold_mb > 0
            True
        """
        self.logger = logger
        self.process = psutil.Process()

        total_memory_mb = psutil.virtual_memory().total / 1024 / 1024
        self.warning_threshold_mb = total_memory_mb * (
            self.WARNING_THRESHOLD_PERCENT / 100
        )
        self.critical_threshold_mb = total_memory_mb * (
            self.CRITICAL_THRESHOLD_PERCENT / 100
        )

        self.logger.debug(
            f"Memory thresholds calculated: Warning={self.warning_threshold_mb:.1f}MB "
            f"({self.WARNING_THRESHOLD_PERCENT}%), Critical={self.critical_threshold_mb:.1f}MB "
            f"({self.CRITICAL_THRESHOLD_PERCENT}%) of {total_memory_mb:.1f}MB total"
        )

    def get_memory_usage_mb(self) -> float:
        """Current resident set size in MB."""
        rss: int = self.process.memory_info().rss
        return float(rss / 1024 / 1024)

    def get_available_memory_mb(self) -> float:
        """Available system memory in MB."""
        available: int = psutil.virtual_memory().available
        return float(available / 1024 / 1024)

    def check_memory_and_warn(self, operation: str = "operation") -> None:
        """Check current memory usage and warn if approaching limits.

        Args:
            operation: Name of operation being performed (for logging context)
        """
        current_mb = self.get_memory_usage_mb()
        available_mb = self.get_available_memory_mb()

        if current_mb > self.critical_threshold_mb:
            self.logger.warning(
                f"CRITICAL: High memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.critical_threshold_mb:.1f}MB threshold). "
                f"Available: {available_mb:.1f}MB. Consider lowering --parallelism "
                "or --block-size."
            )
        elif current_mb > self.warning_threshold_mb:
            self.logger.warning(
                f"WARNING: Elevated memory usage during {operation}: {current_mb:.1f}MB "
                f"(>{self.warning_threshold_mb:.1f}MB threshold). "
                f"Available: {available_mb:.1f}MB. Monitor for potential issues."
            )
        else:
            self.logger.debug(f"Memory usage during {operation}: {current_mb:.1f}MB")

    @staticmethod
    def estimate_scan_memory_mb(
        record_length: int, block_size: int, workers: int
    ) -> float:
        """Estimate peak scan memory in MB for ``workers`` concurrent records.

        Each worker holds one record body (1 byte per base, plus the decoded
        str pysam returns) and per-block working arrays: int32 mismatch
        counts, int64 start positions and a bool comparison column.

        Example:
            >>> round(MemoryMonitor.estimate_scan_memory_mb(1_000_000, 1_000_000, 1), 1)
            15.3
        """
        block = min(block_size, max(record_length, 1))
        per_worker = record_length * 2 + block * (4 + 8 + 1 + 1)
        return per_worker * workers / 1024 / 1024

    def warn_for_large_scan(
        self, longest_record: int, block_size: int, workers: int
    ) -> None:
        """Warn if the estimated scan footprint approaches available memory."""
        estimated_mb = self.estimate_scan_memory_mb(longest_record, block_size, workers)
        available_mb = self.get_available_memory_mb()

        if estimated_mb > available_mb * 0.8:
            self.logger.warning(
                f"MEMORY WARNING: scanning with {workers} worker(s) and records up to "
                f"{longest_record} bases may require ~{estimated_mb:.1f}MB, but only "
                f"{available_mb:.1f}MB available. Consider lowering --parallelism."
            )
        elif estimated_mb > self.warning_threshold_mb:
            self.logger.warning(
                f"Estimated scan memory ~{estimated_mb:.1f}MB exceeds warning "
                f"threshold ({self.warning_threshold_mb:.1f}MB)."
            )
        else:
            self.logger.debug(f"Estimated scan memory: ~{estimated_mb:.1f}MB")

