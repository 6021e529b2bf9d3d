#!/usr/bin/env python

from ldprep.schema.params_schema import ConvertParams
from ldprep.schema.stats_schema import FilterStats
