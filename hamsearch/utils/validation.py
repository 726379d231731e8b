"""Input validation utilities."""

import sys
import argparse
from typing import Optional

from ..errors import ValidationError

__all__ = ["validate_search_parameters", "validate_cli_arguments"]


def validate_search_parameters(
    query: str, distance: int, parallelism: Optional[int], block_size: int = 1
) -> None:
    """Reject parameters that make a search meaningless.

    Raises:
        ValidationError: On an empty query, or a non-positive distance,
            parallelism or block size
    """
    if not query:
        raise ValidationError("query sequence must not be empty")
    if not query.isascii():
        raise ValidationError("query sequence must be ASCII")
    if distance < 1:
        raise ValidationError(f"distance must be >= 1, got {distance}")
    if parallelism is not None and parallelism < 1:
        raise ValidationError(f"parallelism must be >= 1, got {parallelism}")
    if block_size < 1:
        raise ValidationError(f"block size must be >= 1, got {block_size}")


def validate_cli_arguments(args: argparse.Namespace) -> None:
    """Validate CLI argument values, exiting with a message on failure.

    Args:
        args: Parsed command line arguments
    """
    try:
        validate_search_parameters(
            args.sequence, args.distance, args.parallelism, args.block_size
        )
    except ValidationError as e:
        sys.exit(f"ERROR: {e}")
