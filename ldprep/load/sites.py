#!/usr/bin/env python

"""Parse an LDhat-style sites file of aligned sequences.

Format
------
The first line is a header with the number of sequences, the number
of sites, and the ploidy code (1=haploid, 2=diploid). It is followed
by FASTA records whose sequence data can span multiple lines.

>>> 4 10 1
>>> >SampleA
>>> TCCGC??RTT
>>> >SampleB
>>> TACGC??GTA
>>> ...

Bases are stored as uint8 Symbol codes (see ldprep.core.symbols).
"""

from typing import Iterator, Iterable, Tuple, Union
from pathlib import Path
from dataclasses import dataclass
import numpy as np
from loguru import logger
from ldprep.core.symbols import Ploidy, encode_symbols
from ldprep.core.exceptions import ParseError

logger = logger.bind(name="ldprep")

# LDhat cannot use more sequences than this.
SEQ_MAX = 1000


@dataclass(frozen=True, eq=False)
class SequenceMatrix:
    names: Tuple[str, ...]
    """: Unique sequence names in input order."""
    seqarr: np.ndarray
    """: uint8 array of Symbol codes with shape (nseqs, nsites)."""
    ploidy: Ploidy
    """: Ploidy declared in the header."""

    def __post_init__(self):
        self.seqarr.flags.writeable = False

    @property
    def nseqs(self) -> int:
        return self.seqarr.shape[0]

    @property
    def nsites(self) -> int:
        return self.seqarr.shape[1]

    def head(self, nseqs: int) -> "SequenceMatrix":
        """Return a matrix with only the first nseqs sequences."""
        if nseqs >= self.nseqs:
            return self
        return SequenceMatrix(
            names=self.names[:nseqs],
            seqarr=self.seqarr[:nseqs].copy(),
            ploidy=self.ploidy,
        )


def parse_header(line: str) -> Tuple[int, int, Ploidy]:
    """Return (nseqs, nsites, ploidy) from the first line of a sites file."""
    header = line.split()
    if len(header) != 3:
        raise ParseError(
            f"sites header must be '<nseqs> <nsites> <ploidy>', not '{line.strip()}'")
    try:
        nseqs, nsites = int(header[0]), int(header[1])
    except ValueError as err:
        raise ParseError(f"bad numeric value in sites header: '{line.strip()}'") from err
    try:
        ploidy = Ploidy.from_code(header[2])
    except ValueError as err:
        raise ParseError(str(err)) from err
    if nseqs < 1 or nsites < 1:
        raise ParseError(
            f"sites header declares {nseqs} sequences of length {nsites}")
    return nseqs, nsites, ploidy


def iter_fasta_records(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Generator of (name, sequence) from FASTA lines.

    Sequence lines are concatenated and whitespace is removed. The
    name is the first whitespace delimited token after '>'.
    """
    name = None
    chunks = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith(">"):
            if name is not None:
                yield name, "".join(chunks)
            fields = line[1:].split()
            if not fields:
                raise ParseError("FASTA record with an empty name")
            name = fields[0]
            chunks = []
        else:
            if name is None:
                raise ParseError(
                    f"sequence data before the first '>' name line: '{line[:20]}'")
            chunks.append("".join(line.split()))
    if name is not None:
        yield name, "".join(chunks)


def parse_sites(lines: Iterable[str]) -> SequenceMatrix:
    """Return a SequenceMatrix parsed from the lines of a sites file."""
    lines = iter(lines)
    try:
        first = next(lines)
    except StopIteration:
        raise ParseError("sites file is empty") from None
    nseqs, nsites, ploidy = parse_header(first)

    names = []
    seen = set()
    rows = []
    for name, seq in iter_fasta_records(lines):
        if len(seq) != nsites:
            raise ParseError(
                f"sequence {name} has length {len(seq)}, header declares {nsites}")
        if name in seen:
            raise ParseError(f"sequence name {name} is repeated")
        names.append(name)
        seen.add(name)
        rows.append(encode_symbols(seq))

    if len(names) != nseqs:
        raise ParseError(
            f"sites header declares {nseqs} sequences but {len(names)} were found")
    seqarr = np.vstack(rows).astype(np.uint8)
    logger.debug(f"parsed {nseqs} sequences of {nsites} sites, ploidy={int(ploidy)}")
    return SequenceMatrix(names=tuple(names), seqarr=seqarr, ploidy=ploidy)


def read_sites(path: Union[str, Path]) -> SequenceMatrix:
    """Return a SequenceMatrix parsed from a sites file path."""
    path = Path(path).expanduser()
    try:
        with open(path, 'r', encoding="utf-8", errors="replace") as indata:
            return parse_sites(indata)
    except OSError as err:
        raise ParseError(f"cannot read sites file {path}: {err}") from err


if __name__ == "__main__":
    TEST = "2 10 1\n>SampleA\nTCCGC??RTT\n>SampleB\nTACGC??GTA\n"
    print(parse_sites(TEST.splitlines()))
