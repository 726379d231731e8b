import subprocess
import sys
from pathlib import Path
from typing import List, Sequence, Set, Tuple

import numpy as np
import pysam

Match = Tuple[str, int, int, str, int]


def _project_root() -> Path:
    # helpers.py resides in tests/, go one level up
    return Path(__file__).resolve().parents[1]


def write_fasta(
    path: Path,
    records: Sequence[Tuple[str, str]],
    line_width: int = 60,
    index: bool = True,
) -> Path:
    """Write records as a line-wrapped FASTA, optionally indexing it with pysam."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for name, seq in records:
            f.write(f">{name}\n")
            for i in range(0, len(seq), line_width):
                f.write(seq[i : i + line_width] + "\n")
    if index:
        pysam.faidx(str(path))
    return path


def random_records(
    n_records: int, min_len: int, max_len: int, seed: int = 0, alphabet: str = "ACGT"
) -> List[Tuple[str, str]]:
    rng = np.random.default_rng(seed)
    records = []
    for i in range(n_records):
        length = int(rng.integers(min_len, max_len + 1))
        seq = "".join(rng.choice(list(alphabet), size=length))
        records.append((f"chr{i + 1}", seq))
    return records


def naive_matches(
    records: Sequence[Tuple[str, str]], query: str, distance: int
) -> Set[Match]:
    """Brute-force reference: every window within ``distance`` of ``query``."""
    found: Set[Match] = set()
    q = len(query)
    for name, seq in records:
        for start in range(len(seq) - q + 1):
            window = seq[start : start + q]
            mm = sum(1 for a, b in zip(window, query) if a != b)
            if mm <= distance:
                found.add((name, start, start + q, window, mm))
    return found


def parse_matches(text: str) -> List[Match]:
    rows: List[Match] = []
    for line in text.splitlines():
        if not line or line.startswith("seq_name\t"):
            continue
        name, start, end, seq, mm = line.split("\t")
        rows.append((name, int(start), int(end), seq, int(mm)))
    return rows


def run_cli(args: List[str], check: bool = True) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "hamsearch", *args],
        cwd=_project_root(),
        check=check,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
