#!/usr/bin/env python

"""Count alleles at each site of a SequenceMatrix.

Symbols are counted per site with a jit-compiled loop, and the counts
are then converted to weighted allele counts by a matrix product with
the ploidy weight matrix. For haploid data this is the identity. For
diploid data N, T and C add 2 to their own bucket while A adds 1 to T
and G adds 1 to C, following the genotype coding of LDhat convert.

Example
-------
>>> tally = tally_alleles(matrix)
>>> tally.counts[1]      # weighted N, T, C, A, G counts at site 1
>>> tally.distinct[1]    # number of real alleles observed
>>> tally.to_dataframe()
"""

from pathlib import Path
from dataclasses import dataclass
import numpy as np
import pandas as pd
from numba import njit
from loguru import logger
from ldprep.core.symbols import Symbol, NSYMBOLS, TALLY_COLUMNS, weight_matrix
from ldprep.load.sites import SequenceMatrix

logger = logger.bind(name="ldprep")


@njit
def jcount_symbols(seqarr: np.ndarray, nsymbols: int) -> np.ndarray:
    """Return (nsites, nsymbols) counts of each symbol code per site."""
    nseqs, nsites = seqarr.shape
    counts = np.zeros((nsites, nsymbols), dtype=np.int64)
    for sidx in range(nseqs):
        for col in range(nsites):
            counts[col, seqarr[sidx, col]] += 1
    return counts


@dataclass(frozen=True, eq=False)
class AlleleTally:
    counts: np.ndarray
    """: (nsites, 5) weighted counts in N, T, C, A, G column order."""
    distinct: np.ndarray
    """: (nsites,) number of real alleles (T, C, A, G) with count > 0."""
    minor_count: np.ndarray
    """: (nsites,) smallest non-zero real count at biallelic sites, else -1."""
    minor_index: np.ndarray
    """: (nsites,) Symbol code (T=1..G=4) of the minor allele, else -1."""

    @property
    def nsites(self) -> int:
        return self.counts.shape[0]

    @property
    def missing(self) -> np.ndarray:
        """(nsites,) weighted count of unknown symbols."""
        return self.counts[:, Symbol.N]

    def to_dataframe(self) -> pd.DataFrame:
        """Return the weighted counts as a DataFrame with N T C A G columns."""
        return pd.DataFrame(self.counts, columns=TALLY_COLUMNS)

    def write_freqs(self, path: Path) -> None:
        """Write the allele count table, one row per site."""
        self.to_dataframe().to_csv(path, sep=" ", index=False)


def get_minor_alleles(real: np.ndarray):
    """Return (minor_count, minor_index) arrays for a (nsites, 4) array.

    The minor allele is the smallest non-zero real allele count. Ties
    go to the first allele in T, C, A, G order. Sites that do not have
    exactly two real alleles get -1 for both.
    """
    masked = np.where(real > 0, real, np.iinfo(np.int64).max)
    jmin = masked.argmin(axis=1)
    nmin = real[np.arange(real.shape[0]), jmin]
    biallelic = (real > 0).sum(axis=1) == 2
    minor_count = np.where(biallelic, nmin, -1)
    minor_index = np.where(biallelic, jmin + Symbol.T, -1)
    return minor_count.astype(np.int64), minor_index.astype(np.int64)


def tally_alleles(matrix: SequenceMatrix) -> AlleleTally:
    """Return the weighted AlleleTally for every site in a matrix."""
    symbol_counts = jcount_symbols(np.ascontiguousarray(matrix.seqarr), NSYMBOLS)
    counts = symbol_counts @ weight_matrix(matrix.ploidy)
    real = counts[:, Symbol.T:]
    distinct = (real > 0).sum(axis=1).astype(np.int64)
    minor_count, minor_index = get_minor_alleles(real)
    logger.debug(
        f"tallied {matrix.nsites} sites; sites w/ >1 allele: {(distinct > 1).sum()}")
    return AlleleTally(
        counts=counts,
        distinct=distinct,
        minor_count=minor_count,
        minor_index=minor_index,
    )


if __name__ == "__main__":
    from ldprep.load.sites import parse_sites
    TEST = "2 10 1\n>SampleA\nTCCGC??RTT\n>SampleB\nTACGC??GTA\n"
    print(tally_alleles(parse_sites(TEST.splitlines())).to_dataframe())
