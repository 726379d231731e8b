"""Tests for FASTA-backed record sources."""

from pathlib import Path

import pysam
import pytest

from hamsearch.core.record_source import FastaRecordSource
from hamsearch.core.records import read_fai_index
from hamsearch.errors import InputError

from .helpers import write_fasta


def _fasta(tmp_path: Path, index: bool = True) -> Path:
    return write_fasta(
        tmp_path / "ref.fa",
        [
            ("chr1", "ACGTACGTAC" * 13),
            ("chr2", "acgtNNNNacgt"),
            ("scaffold_7", "TTTT"),
        ],
        line_width=60,
        index=index,
    )


def test_entries_follow_index_order(tmp_path: Path):
    with FastaRecordSource(_fasta(tmp_path)) as source:
        assert [(e.name, e.length) for e in source.entries] == [
            ("chr1", 130),
            ("chr2", 12),
            ("scaffold_7", 4),
        ]


def test_prefix_filter(tmp_path: Path):
    with FastaRecordSource(_fasta(tmp_path), prefix="chr") as source:
        assert [e.name for e in source.entries] == ["chr1", "chr2"]


def test_load_returns_exact_bytes(tmp_path: Path):
    with FastaRecordSource(_fasta(tmp_path)) as source:
        entries = {e.name: e for e in source.entries}
        rec = source.load(entries["chr2"])
        assert rec.body == b"acgtNNNNacgt"
        assert rec.length == 12
        wrapped = source.load(entries["chr1"])
        assert wrapped.body == b"ACGTACGTAC" * 13


def test_missing_fasta(tmp_path: Path):
    with pytest.raises(InputError, match="not found"):
        FastaRecordSource(tmp_path / "absent.fa")


def test_missing_index_is_an_error(tmp_path: Path):
    fasta = _fasta(tmp_path, index=False)
    with pytest.raises(InputError, match="index not found"):
        FastaRecordSource(fasta)


def test_build_index_creates_fai(tmp_path: Path):
    fasta = _fasta(tmp_path, index=False)
    with FastaRecordSource(fasta, build_index=True) as source:
        assert len(source.entries) == 3
    assert Path(str(fasta) + ".fai").exists()


def test_read_fai_index_parses_fields(tmp_path: Path):
    fasta = _fasta(tmp_path)
    entries = read_fai_index(Path(str(fasta) + ".fai"))
    first = entries[0]
    assert (first.name, first.length, first.offset) == ("chr1", 130, 6)
    assert (first.line_bases, first.line_width) == (60, 61)


def test_malformed_index(tmp_path: Path):
    fai = tmp_path / "bad.fa.fai"
    fai.write_text("chr1\t100\n")
    with pytest.raises(InputError, match="line 1"):
        read_fai_index(fai)

    fai.write_text("chr1\tabc\t6\t60\t61\n")
    with pytest.raises(InputError, match="non-integer"):
        read_fai_index(fai)


def test_stale_index_is_input_error(tmp_path: Path):
    fasta = write_fasta(tmp_path / "stale.fa", [("chr1", "ACGTACGT")])
    fasta.write_text(">chr1\nACG\n")
    with FastaRecordSource(fasta) as source:
        with pytest.raises(InputError, match="chr1"):
            source.load(source.entries[0])


def test_non_ascii_body_is_input_error(tmp_path: Path):
    fasta = tmp_path / "accent.fa"
    fasta.write_bytes(b">chr1\nACGT\xc3\xa9ACGT\n")
    pysam.faidx(str(fasta))
    with FastaRecordSource(fasta) as source:
        with pytest.raises(InputError, match="chr1"):
            source.load(source.entries[0])
