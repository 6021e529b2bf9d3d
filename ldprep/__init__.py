#!/usr/bin/env python

"""API level functions for converting alignments to LDhat input files.

Examples
--------
>>> import ldprep
>>> result = ldprep.convert("seqs.fa", locs_path="locs.txt", freqcut=0.05)
>>> result.nsites

>>> tool = ldprep.Convert(sites_path="seqs.fa", only2=True, prefix="out_")
>>> result = tool.run()
"""

# bring nested functions to top for API access
from ldprep.core.logger_setup import set_log_level
from ldprep.core.exceptions import LDPrepError, ParseError, NoDataError, ConfigError
from ldprep.load import read_sites, read_locs
from ldprep.convert import Convert, ConvertResult, convert

__version__ = "0.1.0"
__author__ = "ldprep developers"

# configure the logger
set_log_level("INFO")
