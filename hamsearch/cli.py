"""Command-line interface for HamSearch."""

import argparse
import logging
import os
import sys
from pathlib import Path
import subprocess
import platform

from .app import HamSearchApp, HamSearchConfig
from .core.window_scanner import WindowScanner
from .errors import HamSearchError
from .utils.validation import validate_cli_arguments
from .version import __version__

__all__ = ["parser_resolve_path", "create_parser", "main"]


def _get_git_commit() -> str:
    """Return short git commit hash if available, else 'unknown'."""
    try:
        res = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            cwd=Path(__file__).resolve().parent,
        )
        return res.stdout.strip() or "unknown"
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def _build_version_string() -> str:
    """Compose version string with build and runtime info."""
    commit = _get_git_commit()
    py = platform.python_version()
    return f"HamSearch {__version__} (commit hash {commit})\nPython {py}"


def parser_resolve_path(path: str) -> Path:
    """Resolve CLI-provided path string to an absolute Path.

    Example:
        >>> path = parser_resolve_path("ref.fa")
        >>> path.is_absolute(), path.name
        (True, 'ref.fa')
    """
    return Path(path).resolve()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["-f", "ref.fa", "-s", "ACGA", "-d", "1"])
        >>> args.distance, args.prefix
        (1, '')
    """
    parser = argparse.ArgumentParser(
        prog="hamsearch",
        description=(
            "Report every window of the selected FASTA records that differs "
            "from a query sequence by at most N substitutions (Hamming distance)."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog=(
            "Output: one TSV line per match on stdout "
            "(seq_name, start, end, sequence, mismatches), 0-based half-open "
            "coordinates. The FASTA must be indexed with 'samtools faidx'."
        ),
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=_build_version_string(),
        help="Show program version, commit hash, and Python version, then exit",
    )

    grp_input = parser.add_argument_group("Input", "Reference and query")
    grp_input.add_argument(
        "-f",
        "--fasta",
        help="Path to the FASTA file",
        required=True,
        type=parser_resolve_path,
        metavar="FASTA",
    )
    grp_input.add_argument(
        "-s",
        "--sequence",
        help="Target sequence to search for",
        required=True,
        metavar="SEQUENCE",
    )
    grp_input.add_argument(
        "-p",
        "--prefix",
        help="Only search records whose name starts with this prefix",
        default="",
        metavar="PREFIX",
    )
    grp_input.add_argument(
        "--build-index",
        help="Create the .fai index with pysam if it is missing",
        action="store_true",
        default=False,
    )

    grp_search = parser.add_argument_group("Search", "Matching and parallelism")
    grp_search.add_argument(
        "-d",
        "--distance",
        help="Maximum number of mismatches allowed (Hamming distance)",
        default=6,
        type=int,
        metavar="DISTANCE",
    )
    grp_search.add_argument(
        "-t",
        "--parallelism",
        help="Number of worker threads (default: CPUs available to this process)",
        default=None,
        type=int,
        metavar="N",
    )
    grp_search.add_argument(
        "--block-size",
        help="Window starts evaluated per vectorised block (memory/speed trade-off)",
        default=WindowScanner.DEFAULT_BLOCK_SIZE,
        type=int,
        metavar="WINDOWS",
    )

    grp_output = parser.add_argument_group("Output", "Match output and summary")
    grp_output.add_argument(
        "-o",
        "--output",
        help="Write matches to this file instead of stdout",
        default=None,
        type=parser_resolve_path,
        metavar="TSV",
    )
    grp_output.add_argument(
        "--header",
        help="Write a column header line before the matches",
        action="store_true",
        default=False,
    )
    grp_output.add_argument(
        "--ordered",
        help="Emit records in index order (buffers each record's matches)",
        action="store_true",
        default=False,
    )
    grp_output.add_argument(
        "--summary-tsv",
        help="Write per-record counts (seq_name, length, windows, matches) here",
        default=None,
        type=parser_resolve_path,
        metavar="SUMMARY_TSV",
    )

    grp_log = parser.add_argument_group("Logging", "Logging verbosity and format")
    grp_log.add_argument(
        "-q",
        "--quiet",
        help="Suppress progress output",
        action="store_true",
        default=False,
    )
    grp_log.add_argument(
        "-L",
        "--log-level",
        help=(
            "Logging level (DEBUG, INFO, WARNING, ERROR); default depends on --quiet"
        ),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    grp_log.add_argument(
        "-F",
        "--log-format",
        help="Logging format: text or json",
        choices=["text", "json"],
        default="text",
    )

    return parser


def main() -> None:
    """CLI entry point.

    This function:
    1. Parses command line arguments
    2. Validates argument values
    3. Creates application configuration
    4. Runs the search

    Example:
        >>> # python -m hamsearch -f ref.fa -s ACGA -d 1 -t 4 > hits.tsv
    """
    parser = create_parser()
    args = parser.parse_args()

    validate_cli_arguments(args)

    config = HamSearchConfig(
        fasta=args.fasta,
        query=args.sequence,
        prefix=args.prefix,
        distance=args.distance,
        parallelism=args.parallelism,
        output=args.output,
        header=args.header,
        ordered=args.ordered,
        build_index=args.build_index,
        summary_tsv=args.summary_tsv,
        block_size=args.block_size,
        verbose=not args.quiet,
        log_level=args.log_level,
        log_format=args.log_format,
    )

    app = HamSearchApp(config)
    logger = app.logger
    if logger.isEnabledFor(logging.INFO):
        logger.info(f"Starting {_build_version_string().splitlines()[0]}")
        logger.info(f"FASTA: {config.fasta}")
        logger.info(
            f"Configuration: query={config.query} (length {len(config.query)}), "
            f"distance={config.distance}, prefix='{config.prefix}', "
            f"parallelism={config.parallelism or 'auto'}, ordered={config.ordered}"
        )

    try:
        app.run()
    except HamSearchError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user.", file=sys.stderr)
        sys.exit(1)
    except BrokenPipeError:
        # Downstream consumer (e.g. `head`) closed stdout
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(1)


if __name__ == "__main__":
    main()
