#!/usr/bin/env python

"""Logger for ldprep to STDERR and optionally to a LOGFILE.

logging to STDERR
-----------------
DEBUG: used by developers to examine extra details.
INFO: info reported to users, input dims, output files. (DEFAULT)
WARNING: warnings to users, e.g., the sequence cap was applied.
ERROR: printed along with raised errors by the CLI.

Examples
--------
>>> import ldprep
>>> ldprep.set_log_level("DEBUG")
>>> ldprep.set_log_level("DEBUG", log_file="/tmp/ldprep-log.txt")
"""

from typing import Optional, Iterator, List
import sys
from pathlib import Path
from contextlib import contextmanager
from loguru import logger
import IPython

LOGGERS = [0]


def formatter(record):
    """Custom formatter with level and source file columns."""
    end = record["extra"].get("end", "\n")
    fmessage = (
        "{time:hh:mm:ss} | "
        "<level>{level:<8}</level> <white>|</white> "
        "<magenta>{file:<16}</magenta> <white>|</white> "
        "{message}"
    ) + end
    return fmessage


def color_support():
    """Check for color support in stderr as a notebook or terminal/tty."""
    # check if we're in IPython/jupyter
    tty1 = bool(IPython.get_ipython())
    # check if we're in a terminal
    tty2 = sys.stderr.isatty()
    return tty1 or tty2


def _is_ldprep(record) -> bool:
    return record["extra"].get("name") == "ldprep"


def set_log_level(log_level: str = "DEBUG", log_file: Optional[Path] = None):
    """Add logger for ldprep to stderr or to a file.

    These loggers are bound to the 'extra' keyword 'ldprep'. Thus, any
    module that aims to use this formatted logger should put
    `logger = logger.bind(name="ldprep")` at the top of the module.

    The logger will use EITHER a STDERR or a LOGFILE, but not both.
    """
    # remove any previous loggers created by ldprep
    for idx in LOGGERS:
        try:
            logger.remove(idx)
        except ValueError:
            pass

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(exist_ok=True)
        log_file.touch(exist_ok=True)
        idx = logger.add(
            sink=log_file,
            level=log_level,
            colorize=False,
            format=formatter,
            filter=_is_ldprep,
            rotation="50 MB",
        )
    else:
        idx = logger.add(
            sink=sys.stderr,
            level=log_level,
            colorize=color_support(),
            format=formatter,
            filter=_is_ldprep,
        )
    LOGGERS.append(idx)

    # activate
    logger.enable("ldprep")
    logger.bind(name="ldprep").debug(f"ldprep logging enabled: {log_level}")


def get_logger():
    return logger.bind(name="ldprep")


@contextmanager
def capture_logs(log_level: str = "INFO") -> Iterator[List[str]]:
    """Collect formatted ldprep log messages in a list.

    Each message is formatted as 'LEVEL:module.name:message'.

    Example
    -------
    >>> with capture_logs("WARNING") as cap:
    >>>     ldprep.convert("seqs.fa")
    >>> assert any("Using first" in msg for msg in cap)
    """
    messages = []
    idx = logger.add(
        sink=lambda msg: messages.append(str(msg).rstrip("\n")),
        level=log_level,
        format="{level}:{name}:{message}",
        filter=_is_ldprep,
        colorize=False,
    )
    try:
        yield messages
    finally:
        logger.remove(idx)


if __name__ == "__main__":
    set_log_level("DEBUG")
    log = get_logger()
    log.info("HI")
