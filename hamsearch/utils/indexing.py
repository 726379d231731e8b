"""Index verification and creation for FASTA files."""

from pathlib import Path
from typing import Optional
import logging

import pysam

from ..errors import InputError

__all__ = ["ensure_fasta_index", "fai_path_for"]


def fai_path_for(fasta: Path) -> Path:
    """Return the samtools index path that belongs to ``fasta``."""
    return Path(str(fasta) + ".fai")


def ensure_fasta_index(
    fasta: Path, build_index: bool, logger: Optional[logging.Logger]
) -> Path:
    """Ensure a samtools ``.fai`` index exists next to ``fasta``.

    - Index present: returned as is
    - Index missing and ``build_index``: created with ``pysam.faidx``
    - Index missing otherwise: InputError

    Returns:
        Path to the index file
    """
    fai = fai_path_for(fasta)
    if fai.exists():
        return fai

    if not build_index:
        raise InputError(
            f"FASTA index not found: {fai} "
            "(run 'samtools faidx' or pass --build-index)"
        )

    if logger and logger.isEnabledFor(logging.INFO):
        logger.info(f"Index not found; creating {fai.name} via pysam.faidx...")
    try:
        pysam.faidx(str(fasta))
    except pysam.utils.SamtoolsError as e:
        if logger:
            logger.error(f"faidx failed: {e}")
        raise InputError(f"Failed to index {fasta}: {e}") from e

    if not fai.exists():
        raise InputError(f"faidx reported success but {fai} was not created")
    return fai
