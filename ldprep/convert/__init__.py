#!/usr/bin/env python

"""Tally, filter, subsample and write sites in LDhat format."""

from ldprep.convert.convert import Convert, ConvertResult, convert
from ldprep.convert.tally import AlleleTally, tally_alleles
from ldprep.convert.site_filter import SiteDecision, filter_sites
from ldprep.convert.sampler import SequenceSampler
