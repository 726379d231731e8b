"""Tests for sliding-window enumeration."""

import pytest

from hamsearch.core.records import SequenceRecord
from hamsearch.core.window_scanner import WindowBlock, WindowScanner


@pytest.mark.parametrize(
    "length,window,expected", [(8, 4, 5), (4, 4, 1), (3, 4, 0), (0, 1, 0), (10, 1, 10)]
)
def test_window_count(length, window, expected):
    assert WindowScanner.window_count(length, window) == expected


def test_windows_in_increasing_start_order():
    rec = SequenceRecord("chr1", 8, b"ACGTACGT")
    windows = list(WindowScanner().windows(rec, 4))
    assert [(w.start, w.end, w.sequence) for w in windows] == [
        (0, 4, b"ACGT"),
        (1, 5, b"CGTA"),
        (2, 6, b"GTAC"),
        (3, 7, b"TACG"),
        (4, 8, b"ACGT"),
    ]
    assert all(w.record_name == "chr1" for w in windows)


def test_short_record_yields_nothing():
    rec = SequenceRecord("tiny", 3, b"ACG")
    assert list(WindowScanner().windows(rec, 4)) == []
    assert list(WindowScanner().blocks(rec, 4)) == []


def test_windows_is_single_pass():
    rec = SequenceRecord("chr1", 5, b"ACGTA")
    it = WindowScanner().windows(rec, 2)
    assert iter(it) is it
    assert len(list(it)) == 4
    assert list(it) == []


def test_blocks_cover_all_windows():
    rec = SequenceRecord("chr1", 20, b"A" * 20)
    blocks = list(WindowScanner(block_size=6).blocks(rec, 5))
    assert blocks == [WindowBlock(0, 6), WindowBlock(6, 12), WindowBlock(12, 16)]
    assert sum(len(b) for b in blocks) == WindowScanner.window_count(20, 5)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        WindowScanner(block_size=0)
    rec = SequenceRecord("chr1", 4, b"ACGT")
    with pytest.raises(ValueError):
        list(WindowScanner().windows(rec, 0))
