#!/usr/bin/env python

"""The 'load' module contains parsers for the sites and locs input files.

Functions
---------
read_sites()
read_locs()
"""

from .sites import read_sites, parse_sites, SequenceMatrix, SEQ_MAX
from .locs import read_locs, parse_locs, LocusList
