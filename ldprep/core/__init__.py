#!/usr/bin/env python

from ldprep.core.exceptions import LDPrepError, ParseError, NoDataError, ConfigError
from ldprep.core.symbols import Symbol, Ploidy, Model
