#!/usr/bin/env python

"""Exceptions raised by ldprep.

All expected failures derive from LDPrepError so that the CLI can
catch them in one place, log the message and exit with status 1.
"""


class LDPrepError(Exception):
    """Raise a custom exception that will report with traceback.

    This is used to catch and report errors in the inputs or in the
    parameters of a conversion, and the traceback will include the
    source error and error type for debugging.
    """
    def __init__(self, *args, **kwargs):
        Exception.__init__(self, *args, **kwargs)


class ParseError(LDPrepError):
    """A sites or locs input file is malformed or inconsistent."""


class NoDataError(LDPrepError):
    """No sites passed the filters, so there is nothing to write."""


class ConfigError(LDPrepError):
    """Invalid parameter values for a conversion."""
