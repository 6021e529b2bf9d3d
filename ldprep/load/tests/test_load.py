#!/usr/bin/env python

"""Unittests for parsing sites and locs files.

Tests
-----
1. Parse a locs file; header values and positions.
2. Reject locs that are not strictly increasing, not positive, not finite,
   or whose number of positions differs from the header.
3. Parse a sites file; names, symbol codes, ploidy, multi-line records.
4. Reject sites files with a bad ploidy, or a record count or length
   that differs from the header.
"""

import tempfile
import unittest
from pathlib import Path
import numpy as np
from ldprep.core.symbols import Model, Ploidy
from ldprep.core.exceptions import ParseError
from ldprep.load import (
    parse_locs, read_locs, parse_sites, read_sites, LocusList,
)

SITES = """\
4 10 1
>SampleA
TCCGC??RTT
>SampleB
TACGC??GTA
>SampleC
TC?-CTTGTA
>SampleD
TCC-CTTGTT
"""

LOCS = """\
10  1200 L
1 57 180 187 223 250 438 509 878 1034
"""


class TestParseLocs(unittest.TestCase):

    def test_parse_locs(self):
        locs = parse_locs(LOCS)
        self.assertEqual(len(locs), 10)
        self.assertEqual(locs.length, 1200.0)
        self.assertEqual(locs.model, Model.CROSSING_OVER)
        self.assertEqual(
            locs.positions.tolist(),
            [1., 57., 180., 187., 223., 250., 438., 509., 878., 1034.])
        self.assertEqual(locs.max_position, 1034.0)

    def test_parse_locs_multiline_reals(self):
        locs = parse_locs("3 10.5 C\n1.25\n2.5   7.75\n\n")
        self.assertEqual(locs.positions.tolist(), [1.25, 2.5, 7.75])
        self.assertEqual(locs.model, Model.GENE_CONVERSION)

    def test_contiguous(self):
        locs = LocusList.contiguous(5)
        self.assertEqual(locs.positions.tolist(), [1., 2., 3., 4., 5.])
        self.assertEqual(locs.model, Model.CROSSING_OVER)
        self.assertEqual(locs.length, 5.0)

    def test_positions_are_immutable(self):
        locs = parse_locs(LOCS)
        with self.assertRaises(ValueError):
            locs.positions[0] = 2.0

    def test_not_increasing(self):
        with self.assertRaises(ParseError) as cm:
            parse_locs("3 10 L\n1 5 3\n")
        self.assertIn("not monotonically increasing", str(cm.exception))

    def test_repeated_position(self):
        with self.assertRaises(ParseError):
            parse_locs("3 10 L\n1 5 5\n")

    def test_not_positive(self):
        with self.assertRaises(ParseError):
            parse_locs("3 10 L\n0 5 6\n")

    def test_count_mismatch(self):
        with self.assertRaises(ParseError):
            parse_locs("4 10 L\n1 2 3\n")
        with self.assertRaises(ParseError):
            parse_locs("2 10 L\n1 2 3\n")

    def test_bad_header(self):
        for content in ("", "3 10\n1 2 3", "x 10 L\n1 2 3", "3 10 Q\n1 2 3"):
            with self.assertRaises(ParseError):
                parse_locs(content)

    def test_non_numeric_position(self):
        with self.assertRaises(ParseError):
            parse_locs("3 10 L\n1 two 3\n")

    def test_non_finite_values(self):
        """nan and inf are rejected as positions and as the length."""
        for content in (
            "3 10 L\n1 nan 3\n",
            "3 10 L\n1 2 inf\n",
            "3 10 L\n-inf 2 3\n",
            "3 inf L\n1 2 3\n",
            "3 nan L\n1 2 3\n",
        ):
            with self.assertRaises(ParseError):
                parse_locs(content)

    def test_read_locs_missing_file(self):
        with self.assertRaises(ParseError):
            read_locs("/nonexistent/ldprep/locs.txt")


class TestParseSites(unittest.TestCase):

    def test_parse_sites(self):
        matrix = parse_sites(SITES.splitlines())
        self.assertEqual(matrix.ploidy, Ploidy.HAPLOID)
        self.assertEqual(matrix.names, ("SampleA", "SampleB", "SampleC", "SampleD"))
        self.assertEqual(matrix.nseqs, 4)
        self.assertEqual(matrix.nsites, 10)
        self.assertEqual(matrix.seqarr[0].tolist(), [1, 2, 2, 4, 2, 0, 0, 0, 1, 1])

    def test_read_sites(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "seqs.fa"
            path.write_text(SITES)
            matrix = read_sites(path)
        self.assertEqual(matrix.seqarr.shape, (4, 10))

    def test_multiline_records(self):
        content = "2 6 2\n>a desc\n01\n2?\n\n10\n>b\n012012\n"
        matrix = parse_sites(content.splitlines())
        self.assertEqual(matrix.ploidy, Ploidy.DIPLOID)
        self.assertEqual(matrix.names, ("a", "b"))
        self.assertEqual(matrix.seqarr[0].tolist(), [1, 2, 3, 0, 2, 1])

    def test_bad_ploidy(self):
        with self.assertRaises(ParseError):
            parse_sites("1 2 3\n>a\nTC\n".splitlines())

    def test_bad_header(self):
        for content in ("", "1 2\n>a\nTC\n", "one 2 1\n>a\nTC\n"):
            with self.assertRaises(ParseError):
                parse_sites(content.splitlines())

    def test_count_mismatch(self):
        with self.assertRaises(ParseError) as cm:
            parse_sites(SITES.replace("4 10 1", "5 10 1").splitlines())
        self.assertIn("5 sequences but 4", str(cm.exception))
        with self.assertRaises(ParseError):
            parse_sites(SITES.replace("4 10 1", "3 10 1").splitlines())

    def test_length_mismatch(self):
        with self.assertRaises(ParseError):
            parse_sites(SITES.replace("4 10 1", "4 11 1").splitlines())
        with self.assertRaises(ParseError):
            parse_sites(SITES.replace("TACGC??GTA", "TACGC??GT").splitlines())

    def test_repeated_name(self):
        with self.assertRaises(ParseError):
            parse_sites(SITES.replace("SampleB", "SampleA").splitlines())

    def test_data_before_name(self):
        with self.assertRaises(ParseError):
            parse_sites("1 2 1\nTC\n>a\nTC\n".splitlines())

    def test_head(self):
        matrix = parse_sites(SITES.splitlines())
        head = matrix.head(2)
        self.assertEqual(head.names, ("SampleA", "SampleB"))
        self.assertTrue(np.array_equal(head.seqarr, matrix.seqarr[:2]))
        self.assertIs(matrix.head(10), matrix)


if __name__ == "__main__":
    unittest.main()
