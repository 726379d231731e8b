"""Utility modules for infrastructure and helpers."""

from .memory_monitor import MemoryMonitor, available_cpu_count
from .logging_setup import setup_logger
from .indexing import ensure_fasta_index
from .validation import validate_cli_arguments, validate_search_parameters

__all__ = [
    "MemoryMonitor",
    "available_cpu_count",
    "setup_logger",
    "ensure_fasta_index",
    "validate_cli_arguments",
    "validate_search_parameters",
]
