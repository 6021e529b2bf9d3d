#!/usr/bin/env python

"""Stats recorded while filtering sites for output."""

from pydantic import BaseModel


class FilterStats(BaseModel):
    """A dict-like class with the number of sites removed by each filter.

    Each removed site is counted only under the first filter it fails,
    in the order the filters are applied.
    """
    nsites_before_filtering: int = 0
    filtered_by_sites_range: int = 0
    filtered_by_invariant: int = 0
    filtered_by_non_biallelic: int = 0
    filtered_by_fixed_minor_allele: int = 0
    filtered_by_minor_allele_frequency: int = 0
    filtered_by_missing_data: int = 0
    nsites_after_filtering: int = 0

    def __str__(self):
        return self.model_dump_json(indent=2)
