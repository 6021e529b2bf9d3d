#!/usr/bin/env python

"""Write the LDhat sites and locs files.

sites file
----------
>>> <nout> <nsites> <ploidy>
>>> >name
>>> 0101?10011...   (wrapped at 50 characters per line)

Diploid sites are written as genotype codes (?, 0, 1, 2). Haploid
biallelic sites are written as the symbol index in TCAG (0-3), and
haploid sites with more than two alleles are written as letters.

locs file
---------
>>> <nsites> <max_position> <model>
>>> 57.000
>>> 180.000
"""

from typing import Dict, Iterator, TextIO, Tuple
import os
from pathlib import Path
from contextlib import contextmanager
import numpy as np
from loguru import logger
from ldprep.core.symbols import (
    Ploidy, HAPLOID_LETTERS, HAPLOID_DIGITS, DIPLOID_CODES, display_table,
)
from ldprep.load.sites import SequenceMatrix
from ldprep.load.locs import LocusList
from ldprep.convert.site_filter import SiteDecision

logger = logger.bind(name="ldprep")

LINE_WIDTH = 50


def get_encoding_table(ploidy: Ploidy) -> np.ndarray:
    """Return (2, 5) array of output chars indexed by [biallelic, symbol]."""
    if ploidy == Ploidy.DIPLOID:
        row = display_table(DIPLOID_CODES)
        return np.vstack([row, row])
    if ploidy == Ploidy.HAPLOID:
        return np.vstack([
            display_table(HAPLOID_LETTERS),
            display_table(HAPLOID_DIGITS),
        ])
    raise TypeError(f"no output encoding for ploidy {ploidy!r}")


def iter_encoded_sequences(
    matrix: SequenceMatrix,
    index: np.ndarray,
    decision: SiteDecision,
) -> Iterator[Tuple[str, str]]:
    """Generator of (name, encoded retained sites) for sampled sequences."""
    table = get_encoding_table(matrix.ploidy)
    cols = decision.columns
    kinds = decision.biallelic[cols].astype(np.intp)
    for sidx in index:
        chars = table[kinds, matrix.seqarr[sidx, cols]]
        yield matrix.names[sidx], "".join(chars.tolist())


def wrap(seq: str, width: int = LINE_WIDTH) -> str:
    """Return seq split into newline terminated lines of `width` chars."""
    return "".join(
        f"{seq[i: i + width]}\n" for i in range(0, len(seq), width))


def format_max_position(value: float) -> str:
    """Return a position without a trailing '.0' when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def write_sites(
    out: TextIO,
    matrix: SequenceMatrix,
    index: np.ndarray,
    decision: SiteDecision,
) -> None:
    """Write the encoded sequences of the sampled sequences."""
    out.write(f"{len(index)} {decision.nretained} {int(matrix.ploidy)}\n")
    for name, seq in iter_encoded_sequences(matrix, index, decision):
        out.write(f">{name}\n")
        out.write(wrap(seq))


def write_locs(out: TextIO, locs: LocusList, decision: SiteDecision) -> None:
    """Write the positions of the retained sites."""
    out.write(
        f"{decision.nretained} {format_max_position(locs.max_position)} "
        f"{locs.model.value}\n")
    for pos in locs.positions[decision.columns]:
        out.write(f"{pos:.3f}\n")


@contextmanager
def atomic_outputs(paths: Dict[str, Path]) -> Iterator[Dict[str, Path]]:
    """Yield tmp paths that are moved to their final paths on success.

    If any error is raised inside the block all tmp files are removed
    and none of the final paths are created or replaced. If a rename
    fails the remaining tmp files are also removed.
    """
    tmps = {}
    for key, path in paths.items():
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmps[key] = path.with_name(f".{path.name}.tmp")
    try:
        yield tmps
        for key, tmp in tmps.items():
            os.replace(tmp, paths[key])
            logger.debug(f"wrote {paths[key]}")
    except BaseException:
        for tmp in tmps.values():
            tmp.unlink(missing_ok=True)
        raise
