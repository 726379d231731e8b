"""HamSearch - exhaustive Hamming-distance motif search over FASTA records.

Reports every window of every selected record that differs from a query
sequence by at most a given number of substitutions.
"""

from .app import HamSearchApp, HamSearchConfig
from .core.records import SequenceRecord, Window, MatchResult
from .core.record_source import FastaRecordSource, InMemoryRecordSource
from .core.window_scanner import WindowScanner
from .core.distance_evaluator import DistanceEvaluator, hamming_distance
from .core.dispatcher import ParallelDispatcher
from .io.result_sink import ResultSink
from .errors import HamSearchError, InputError, ValidationError, ScanContractError
from .version import __version__

__all__ = [
    "HamSearchApp",
    "HamSearchConfig",
    "SequenceRecord",
    "Window",
    "MatchResult",
    "FastaRecordSource",
    "InMemoryRecordSource",
    "WindowScanner",
    "DistanceEvaluator",
    "hamming_distance",
    "ParallelDispatcher",
    "ResultSink",
    "HamSearchError",
    "InputError",
    "ValidationError",
    "ScanContractError",
    "__version__",
]
