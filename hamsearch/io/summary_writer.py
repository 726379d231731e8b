"""TSV summary of per-record scan statistics."""

import logging
from pathlib import Path
from typing import List

from ..core.records import RecordScanStats

__all__ = ["ScanSummaryWriter"]


class ScanSummaryWriter:
    """Handles TSV summary file output."""

    COLUMNS = ["seq_name", "length", "windows", "matches"]

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def write_summary(self, stats: List[RecordScanStats], summary_path: Path) -> Path:
        """Write one row per scanned record, in record order.

        Args:
            stats: Per-record statistics returned by the dispatcher
            summary_path: Destination TSV path (parent created if needed)

        Returns:
            Path of the written file

        Example:
            >>> writer = ScanSummaryWriter()
            >>> writer.write_summary([RecordScanStats("chr1", 8, 5, 2)], Path("s.tsv"))
            PosixPath('s.tsv')
        """
        summary_path = Path(summary_path)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        with open(summary_path, "w", encoding="utf-8") as f:
            f.write("\t".join(self.COLUMNS) + "\n")
            for s in stats:
                f.write(f"{s.name}\t{s.length}\t{s.windows}\t{s.matches}\n")
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Wrote {len(stats)} summary rows to {summary_path}")
        return summary_path
