#!/usr/bin/env python

"""Parse an LDhat locs file of SNP positions.

Format
------
The first line is a header with the number of sites, the total
length of the region, and the recombination model (L=crossing-over,
C=gene conversion). It is followed by the site positions separated by
any whitespace, which must be positive and strictly increasing.

>>> 10 1200 L
>>> 1 57 180 187 223 250 438 509 878 1034
"""

from typing import Union
from pathlib import Path
from dataclasses import dataclass
import numpy as np
from loguru import logger
from ldprep.core.symbols import Model
from ldprep.core.exceptions import ParseError

logger = logger.bind(name="ldprep")


@dataclass(frozen=True, eq=False)
class LocusList:
    positions: np.ndarray
    """: float64 array of strictly increasing site positions."""
    length: float
    """: total length of the region declared in the header."""
    model: Model = Model.CROSSING_OVER
    """: recombination model tag, passed through to the output."""

    def __post_init__(self):
        self.positions.flags.writeable = False

    def __len__(self) -> int:
        return self.positions.size

    @property
    def max_position(self) -> float:
        """The last (largest) site position."""
        return float(self.positions[-1])

    @classmethod
    def contiguous(cls, nsites: int) -> "LocusList":
        """Return positions 1..nsites for data without a locs file."""
        positions = np.arange(1, nsites + 1, dtype=np.float64)
        return cls(positions=positions, length=float(nsites))


def parse_locs(content: str) -> LocusList:
    """Return a LocusList parsed from the text of a locs file."""
    lines = content.splitlines()
    if not lines:
        raise ParseError("locs file is empty")

    # header: nsites length model
    header = lines[0].split()
    if len(header) != 3:
        raise ParseError(
            f"locs header must be '<nsites> <length> <model>', not '{lines[0]}'")
    try:
        nsites = int(header[0])
        length = float(header[1])
    except ValueError as err:
        raise ParseError(f"bad numeric value in locs header: '{lines[0]}'") from err
    if not np.isfinite(length):
        raise ParseError(f"locs header length must be a finite number, not {header[1]}")
    try:
        model = Model(header[2])
    except ValueError as err:
        raise ParseError(
            f"locs model must be 'L' or 'C', not '{header[2]}'") from err
    if nsites < 1:
        raise ParseError(f"locs header declares {nsites} sites")

    # the rest is a whitespace separated list of positions
    tokens = " ".join(lines[1:]).split()
    try:
        positions = np.array([float(i) for i in tokens], dtype=np.float64)
    except ValueError as err:
        raise ParseError(f"non-numeric position in locs file: {err}") from err
    if not np.all(np.isfinite(positions)):
        bad = int(np.argmin(np.isfinite(positions)))
        raise ParseError(f"locs positions must be finite numbers, not {tokens[bad]}")
    if positions.size != nsites:
        raise ParseError(
            f"locs header declares {nsites} sites but {positions.size} "
            "positions were found")
    if positions[0] <= 0:
        raise ParseError(f"locs positions must be positive, first is {tokens[0]}")
    steps = np.diff(positions)
    if np.any(steps <= 0):
        bad = int(np.argmax(steps <= 0))
        raise ParseError(
            "locs file SNPs not monotonically increasing: "
            f"{tokens[bad]} is followed by {tokens[bad + 1]}")
    logger.debug(f"parsed {nsites} positions, length={length}, model={model.value}")
    return LocusList(positions=positions, length=length, model=model)


def read_locs(path: Union[str, Path]) -> LocusList:
    """Return a LocusList parsed from a locs file path."""
    path = Path(path).expanduser()
    try:
        with open(path, 'r', encoding="utf-8") as indata:
            content = indata.read()
    except OSError as err:
        raise ParseError(f"cannot read locs file {path}: {err}") from err
    return parse_locs(content)


if __name__ == "__main__":
    print(parse_locs("10  1200 L\n1 57 180 187 223 250 438 509 878 1034"))
