"""Tests for the application coordinator and ambient utilities."""

import io
import json
import logging
from pathlib import Path

import pytest

from hamsearch.app import HamSearchApp, HamSearchConfig
from hamsearch.errors import InputError, ValidationError
from hamsearch.utils.logging_setup import JsonFormatter, setup_logger
from hamsearch.utils.memory_monitor import MemoryMonitor, available_cpu_count

from .helpers import parse_matches, write_fasta


def _config(fasta: Path, **kwargs) -> HamSearchConfig:
    kwargs.setdefault("verbose", False)
    return HamSearchConfig(fasta=fasta, **kwargs)


def test_run_writes_to_given_stream(tmp_path: Path):
    fasta = write_fasta(tmp_path / "ref.fa", [("chr1", "ACGTACGT"), ("chr2", "GGGG")])
    out = io.StringIO()
    stats = HamSearchApp(_config(fasta, query="ACGA", distance=1, parallelism=2), out).run()
    assert sorted(parse_matches(out.getvalue())) == [
        ("chr1", 0, 4, "ACGT", 1),
        ("chr1", 4, 8, "ACGT", 1),
    ]
    assert [(s.name, s.windows, s.matches) for s in stats] == [("chr1", 5, 2), ("chr2", 1, 0)]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"query": "", "distance": 1},
        {"query": "ACGA", "distance": 0},
        {"query": "ACGA", "distance": 1, "parallelism": 0},
    ],
)
def test_validation_happens_before_input_is_touched(tmp_path: Path, kwargs):
    app = HamSearchApp(_config(tmp_path / "missing.fa", **kwargs), io.StringIO())
    with pytest.raises(ValidationError):
        app.run()


def test_input_error_for_missing_fasta(tmp_path: Path):
    app = HamSearchApp(_config(tmp_path / "missing.fa", query="ACGA", distance=1), io.StringIO())
    with pytest.raises(InputError):
        app.run()


def test_setup_logger_levels():
    logger = setup_logger("hamsearch.tests.levels", verbose=False)
    assert logger.level == logging.WARNING
    logger = setup_logger("hamsearch.tests.levels", level="debug")
    assert logger.level == logging.DEBUG


def test_json_formatter_payload():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    obj = json.loads(JsonFormatter().format(record))
    assert obj["level"] == "INFO"
    assert obj["message"] == "hello world"
    assert "time" in obj


def test_available_cpu_count_positive():
    assert available_cpu_count() >= 1


def test_scan_memory_estimate_scales_with_workers():
    one = MemoryMonitor.estimate_scan_memory_mb(10_000_000, 1_000_000, 1)
    four = MemoryMonitor.estimate_scan_memory_mb(10_000_000, 1_000_000, 4)
    assert four == pytest.approx(one * 4)
