"""Core scanning logic for HamSearch."""

from .records import SequenceRecord, Window, MatchResult, FaiEntry, RecordScanStats
from .records import read_fai_index
from .record_source import RecordSource, FastaRecordSource, InMemoryRecordSource
from .window_scanner import WindowScanner, WindowBlock
from .distance_evaluator import DistanceEvaluator, hamming_distance
from .dispatcher import ParallelDispatcher, scan_record

__all__ = [
    "SequenceRecord",
    "Window",
    "MatchResult",
    "FaiEntry",
    "RecordScanStats",
    "read_fai_index",
    "RecordSource",
    "FastaRecordSource",
    "InMemoryRecordSource",
    "WindowScanner",
    "WindowBlock",
    "DistanceEvaluator",
    "hamming_distance",
    "ParallelDispatcher",
    "scan_record",
]
