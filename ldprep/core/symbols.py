#!/usr/bin/env python

"""Nucleotide symbols, ploidy and recombination model enums.

Symbols are stored as uint8 codes in the order N, T, C, A, G, which is
also the column order of every allele tally table. Raw characters are
mapped to codes with a 256-entry lookup table so that a whole sequence
can be converted with a single numpy indexing operation.

Every transcoding table below is keyed by each Symbol member. A table
missing a member raises at import, so adding a new Symbol requires
updating every table.
"""

from typing import Dict, TypeVar
from enum import Enum, IntEnum
import numpy as np

T = TypeVar("T")


class Symbol(IntEnum):
    """Nucleotide or unknown (gap, ambiguity code, missing)."""
    N = 0
    T = 1
    C = 2
    A = 3
    G = 4


class Ploidy(IntEnum):
    """Haploid or diploid data. The value is the allele weight."""
    HAPLOID = 1
    DIPLOID = 2

    @classmethod
    def from_code(cls, code: str) -> "Ploidy":
        """Return Ploidy from the header code '1' or '2'."""
        try:
            return cls(int(code))
        except ValueError as err:
            raise ValueError(f"ploidy code must be 1 or 2, not '{code}'") from err


class Model(str, Enum):
    """Recombination model tag stored in the locs file."""
    CROSSING_OVER = "L"
    GENE_CONVERSION = "C"

    def __str__(self):
        return self.value


NSYMBOLS = len(Symbol)
REAL_SYMBOLS = (Symbol.T, Symbol.C, Symbol.A, Symbol.G)
TALLY_COLUMNS = [i.name for i in Symbol]


def _exhaustive(table: Dict[Symbol, T], name: str) -> Dict[Symbol, T]:
    """Raise if a transcoding table does not cover every Symbol."""
    missing = set(Symbol) - set(table)
    if missing:
        raise TypeError(f"table {name} is missing symbols: {sorted(missing)}")
    return table


# raw input characters accepted for each real symbol
INPUT_CHARS = _exhaustive({
    Symbol.N: "",
    Symbol.T: "0Tt",
    Symbol.C: "1Cc",
    Symbol.A: "2Aa",
    Symbol.G: "3Gg",
}, "INPUT_CHARS")

# haploid sites with >2 alleles are written as letters
HAPLOID_LETTERS = _exhaustive({
    Symbol.N: "?",
    Symbol.T: "T",
    Symbol.C: "C",
    Symbol.A: "A",
    Symbol.G: "G",
}, "HAPLOID_LETTERS")

# haploid biallelic sites are written as the symbol index in TCAG
HAPLOID_DIGITS = _exhaustive({
    Symbol.N: "?",
    Symbol.T: "0",
    Symbol.C: "1",
    Symbol.A: "2",
    Symbol.G: "3",
}, "HAPLOID_DIGITS")

# diploid genotype codes; G and T both display as 0
DIPLOID_CODES = _exhaustive({
    Symbol.N: "?",
    Symbol.A: "2",
    Symbol.C: "1",
    Symbol.G: "0",
    Symbol.T: "0",
}, "DIPLOID_CODES")

# (bucket, weight) that an observed symbol adds to the allele tally
ALLELE_WEIGHTS = {
    Ploidy.HAPLOID: _exhaustive({
        Symbol.N: (Symbol.N, 1),
        Symbol.T: (Symbol.T, 1),
        Symbol.C: (Symbol.C, 1),
        Symbol.A: (Symbol.A, 1),
        Symbol.G: (Symbol.G, 1),
    }, "HAPLOID_WEIGHTS"),
    Ploidy.DIPLOID: _exhaustive({
        Symbol.N: (Symbol.N, 2),
        Symbol.T: (Symbol.T, 2),
        Symbol.C: (Symbol.C, 2),
        Symbol.A: (Symbol.T, 1),
        Symbol.G: (Symbol.C, 1),
    }, "DIPLOID_WEIGHTS"),
}
if set(ALLELE_WEIGHTS) != set(Ploidy):
    raise TypeError("ALLELE_WEIGHTS must have an entry for every Ploidy")


def _build_lookup() -> np.ndarray:
    """Return a (256,) uint8 array mapping byte values to Symbol codes."""
    lookup = np.full(256, Symbol.N, dtype=np.uint8)
    for symbol, chars in INPUT_CHARS.items():
        for char in chars:
            lookup[ord(char)] = symbol
    return lookup


LOOKUP = _build_lookup()


def encode_symbols(seq: str) -> np.ndarray:
    """Return a uint8 array of Symbol codes for a raw sequence string."""
    raw = np.frombuffer(seq.encode("latin-1", errors="replace"), dtype=np.uint8)
    return LOOKUP[raw]


def weight_matrix(ploidy: Ploidy) -> np.ndarray:
    """Return (5, 5) int64 array where [symbol, bucket] = weight.

    Multiplying per-site symbol counts (nsites, 5) by this matrix
    returns the weighted allele tally (nsites, 5).
    """
    mat = np.zeros((NSYMBOLS, NSYMBOLS), dtype=np.int64)
    for symbol, (bucket, weight) in ALLELE_WEIGHTS[Ploidy(ploidy)].items():
        mat[symbol, bucket] = weight
    return mat


def display_table(table: Dict[Symbol, str]) -> np.ndarray:
    """Return (5,) array of single characters indexed by Symbol code."""
    return np.array([table[i] for i in Symbol], dtype="<U1")


if __name__ == "__main__":
    print(encode_symbols("TCCGC??RTT"))
    print(weight_matrix(Ploidy.DIPLOID))
