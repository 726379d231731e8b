"""Output writers."""

from .result_sink import ResultSink, RecordBuffer, format_match_line, HEADER_LINE
from .summary_writer import ScanSummaryWriter

__all__ = [
    "ResultSink",
    "RecordBuffer",
    "format_match_line",
    "HEADER_LINE",
    "ScanSummaryWriter",
]
