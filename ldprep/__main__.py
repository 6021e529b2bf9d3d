#!/usr/bin/env python

"""Command line interface.

Examples
--------
>>> ldprep convert seqs.fa
>>> ldprep convert seqs.fa -l locs.txt --freqcut 0.05 --missfreqcut 0.1
>>> ldprep convert seqs.fa --2only --sites 0 500 --nout 50 --seed 123
"""

from typing import List, Optional
import argparse
from pathlib import Path
from loguru import logger
import ldprep
from ldprep.core.exceptions import LDPrepError

logger = logger.bind(name="ldprep")

VERSION = str(ldprep.__version__)
HEADER = f"""
-------------------------------------------------------------
 ldprep [v.{VERSION}]
 Convert sequence alignments to LDhat sites and locs files
-------------------------------------------------------------\
"""

DESCRIPTION = " ldprep command line tool. Select a positional subcommand:"
EPILOG = """\
Note
----
Each subcommand has its own additional help screen, e.g.,:
>>> ldprep convert -h

Examples
--------
>>> # convert: filter sites and write {prefix}sites.txt and {prefix}locs.txt
>>> ldprep convert seqs.fa
>>> ldprep convert seqs.fa -l locs.txt --freqcut 0.05 --prefix ./ldhat/
"""

CONVERT_EPILOG = """\
Examples
--------
>>> ldprep convert seqs.fa
>>> ldprep convert seqs.fa -l locs.txt --2only
>>> ldprep convert seqs.fa -l locs.txt --freqcut 0.05 --missfreqcut 0.2
>>> ldprep convert seqs.fa --sites 100 600 --nout 40 --seed 123 --freqs
>>> ldprep convert seqs.fa --prefix run1_ --logger DEBUG run1.log
"""


def setup_convert_subparser(subparsers: argparse._SubParsersAction) -> argparse._SubParsersAction:
    """Add `ldprep convert` subcommand parser.

    """
    convert = subparsers.add_parser(
        "convert",
        description=HEADER + "\n" + " ldprep convert: convert FASTA-style file to LDhat format",
        help="Convert FASTA-style file to LDhat sites and locs files.",
        epilog=CONVERT_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    convert.add_argument(
        "seq", metavar="FILE", type=Path,
        help="Input FASTA-style sites file with a '<nseqs> <nsites> <ploidy>' header line.",
    )
    convert.add_argument(
        "-l", "--loc", metavar="FILE", type=Path,
        help="SNP positions of the sites in the seq file. Assumed contiguous if absent.",
    )
    convert.add_argument(
        "--only2", "--2only", dest="only2", action="store_true",
        help="Only output sites with exactly two alleles.",
    )
    convert.add_argument(
        "--freqcut", metavar="FLOAT", type=float, default=0.0,
        help="Min minor allele frequency (between 0 and 1). Default=0.",
    )
    convert.add_argument(
        "--missfreqcut", metavar="FLOAT", type=float, default=1.0,
        help="Max missing data frequency (between 0 and 1). Default=1.",
    )
    convert.add_argument(
        "--sites", metavar="INT", type=int, nargs=2,
        help="Only output sites with index between these two values [lower, upper).",
    )
    convert.add_argument(
        "--nout", metavar="INT", type=int,
        help="Number of sequences to output. Default=all.",
    )
    convert.add_argument(
        "--prefix", metavar="STRING", type=str, default="",
        help="Prefix of output files, e.g., './ldhat/run1_'.",
    )
    convert.add_argument(
        "--seed", metavar="INT", type=int,
        help="Random seed for subsampling sequences. Drawn from entropy if absent.",
    )
    convert.add_argument(
        "--freqs", action="store_true",
        help="Also write allele counts per site to {prefix}freqs.txt.",
    )
    convert.add_argument(
        "--logger", type=str, nargs="*", default=("INFO", None),
        help=(
            "Logging info entered as one value for LOGLEVEL, or two values "
            "for LOGLEVEL LOGFILE; e.g., 'DEBUG' or 'DEBUG ldprep.txt'.")
    )
    return convert


def setup_parsers() -> argparse.ArgumentParser:
    """Setup and return an ArgumentParser w/ subcommands."""
    parser = argparse.ArgumentParser(
        prog="ldprep",
        description=HEADER + "\n" + DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action='version', version=f"ldprep {VERSION}")
    subparsers = parser.add_subparsers(help="sub-commands", dest="subcommand")

    # add subcommands
    setup_convert_subparser(subparsers)
    return parser


def main(argv: Optional[List[str]] = None):
    """Parse user CLI args and perform actions."""
    parser = setup_parsers()
    args = parser.parse_args(argv)

    # set logging ---------------------------------------------------
    if hasattr(args, "logger") and args.logger:
        if len(args.logger) > 1 and args.logger[1]:
            ldprep.set_log_level(args.logger[0], args.logger[1])
        else:
            ldprep.set_log_level(args.logger[0])

    if args.subcommand is None:
        parser.print_help()
        raise SystemExit(1)

    # convert job ---------------------------------------------------
    if args.subcommand == "convert":
        try:
            ldprep.convert(
                sites_path=args.seq,
                locs_path=args.loc,
                only2=args.only2,
                freqcut=args.freqcut,
                missfreqcut=args.missfreqcut,
                sites_range=args.sites,
                nout=args.nout,
                prefix=args.prefix,
                seed=args.seed,
                write_freqs=args.freqs,
            )
        except LDPrepError as err:
            logger.error(str(err))
            raise SystemExit(1) from err
        raise SystemExit(0)


if __name__ == "__main__":
    main()
