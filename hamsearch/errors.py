"""Exception types raised by HamSearch."""

__all__ = ["HamSearchError", "InputError", "ValidationError", "ScanContractError"]


class HamSearchError(Exception):
    """Base class for errors reported at the process boundary."""


class InputError(HamSearchError):
    """FASTA file or its index is missing, unreadable or malformed."""


class ValidationError(HamSearchError):
    """Search parameters rejected before any scanning starts."""


class ScanContractError(RuntimeError):
    """Window and query lengths disagree.

    Internal contract violation; not a HamSearchError, so the CLI lets it
    propagate with a traceback.
    """
