#!/usr/bin/env python

"""Select the sites to write from an AlleleTally.

Filters
-------
Sites outside of the [lower, upper) sites_range are never retained.
If `only2` is set, or `freqcut` > 0, a site must have exactly two
alleles (mode 2), otherwise any polymorphic site is retained (mode 1).
In mode 2 a site must also pass the minor allele frequency and the
missing data cutoffs, both as proportions of nseqs * ploidy.

Unknown symbols (N) are never counted as an allele.
"""

from typing import Optional, Tuple
from dataclasses import dataclass, field
import numpy as np
from loguru import logger
from ldprep.core.symbols import Ploidy
from ldprep.core.exceptions import NoDataError
from ldprep.convert.tally import AlleleTally
from ldprep.schema.stats_schema import FilterStats

logger = logger.bind(name="ldprep")


@dataclass(frozen=True, eq=False)
class SiteDecision:
    retained: np.ndarray
    """: (nsites,) bool, True if the site is written."""
    biallelic: np.ndarray
    """: (nsites,) bool, False if >2 alleles; uses letter encoding."""
    stats: FilterStats = field(default_factory=FilterStats)
    """: number of sites removed by each filter."""

    @property
    def nretained(self) -> int:
        return int(self.retained.sum())

    @property
    def columns(self) -> np.ndarray:
        """Indices of the retained sites in ascending order."""
        return np.flatnonzero(self.retained)


def get_range_mask(nsites: int, sites_range: Optional[Tuple[int, int]]) -> np.ndarray:
    """Return bool mask of sites in [lower, upper)."""
    mask = np.zeros(nsites, dtype=bool)
    lower, upper = sites_range if sites_range else (0, nsites)
    mask[lower:upper] = True
    return mask


def filter_sites(
    tally: AlleleTally,
    nseqs: int,
    ploidy: Ploidy,
    only2: bool = False,
    freqcut: float = 0.0,
    missfreqcut: float = 1.0,
    sites_range: Optional[Tuple[int, int]] = None,
) -> SiteDecision:
    """Return a SiteDecision with the retained and biallelic masks.

    Parameters
    ----------
    tally: AlleleTally
        Weighted allele counts per site.
    nseqs: int
        Number of sequences that were tallied (after the cap).
    ploidy: Ploidy
        Weight of a single sequence in the frequency denominators.
    only2: bool
        Only retain sites with exactly two alleles.
    freqcut: float
        Minor allele frequency must be greater than this value.
        Setting a value > 0 also implies only2.
    missfreqcut: float
        Proportion of missing data must be at most this value. Only
        applied when only2 is set or freqcut > 0.
    sites_range: Tuple[int, int] or None
        Only consider sites with index in [lower, upper).

    Raises
    ------
    NoDataError
        If no sites are retained.
    """
    stats = FilterStats(nsites_before_filtering=tally.nsites)
    in_range = get_range_mask(tally.nsites, sites_range)
    stats.filtered_by_sites_range = int((~in_range).sum())
    distinct = tally.distinct

    # mode 1: any polymorphic site.
    if not (only2 or freqcut > 0):
        invariant = in_range & (distinct < 2)
        retained = in_range & ~invariant
        stats.filtered_by_invariant = int(invariant.sum())

    # mode 2: exactly two alleles passing frequency cutoffs.
    else:
        total = nseqs * int(ploidy)
        minor = tally.minor_count
        keep = in_range.copy()
        filters = [
            ("filtered_by_invariant", distinct < 2),
            ("filtered_by_non_biallelic", distinct > 2),
            ("filtered_by_fixed_minor_allele", minor == total),
            ("filtered_by_minor_allele_frequency", minor <= total * freqcut),
            ("filtered_by_missing_data", tally.missing > total * missfreqcut),
        ]
        for name, fail in filters:
            dropped = keep & fail
            setattr(stats, name, int(dropped.sum()))
            keep &= ~dropped
        retained = keep

    biallelic = distinct <= 2
    stats.nsites_after_filtering = int(retained.sum())
    logger.debug(f"site filter stats: {stats.model_dump()}")
    if not stats.nsites_after_filtering:
        raise NoDataError(
            f"No data to output: none of {tally.nsites} sites passed filtering")
    return SiteDecision(retained=retained, biallelic=biallelic, stats=stats)
