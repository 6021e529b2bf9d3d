#!/usr/bin/env python

"""Convert a FASTA-style sites file to LDhat sites and locs files.

API
---
>>> tool = Convert(
>>>     sites_path="./seqs.fa",
>>>     locs_path="./locs.txt",
>>>     freqcut=0.05,
>>>     missfreqcut=0.2,
>>>     nout=100,
>>>     prefix="./ldhat/run1_",
>>>     seed=123,
>>> )
>>> result = tool.run()

CLI
---
$ ldprep convert ./seqs.fa -l ./locs.txt --freqcut 0.05 --nout 100 --seed 123
"""

from typing import Dict, List, Optional
from pathlib import Path
from dataclasses import dataclass
import numpy as np
from loguru import logger
from ldprep.core.exceptions import ConfigError, ParseError
from ldprep.load.sites import SequenceMatrix, read_sites
from ldprep.load.locs import LocusList, read_locs
from ldprep.convert.tally import AlleleTally, tally_alleles
from ldprep.convert.site_filter import SiteDecision, filter_sites
from ldprep.convert.sampler import SequenceSampler
from ldprep.convert.writer import atomic_outputs, write_sites, write_locs
from ldprep.schema.params_schema import ConvertParams
from ldprep.schema.stats_schema import FilterStats

logger = logger.bind(name="ldprep")


@dataclass
class ConvertResult:
    outfiles: Dict[str, Path]
    """: Paths of the written files keyed by 'sites', 'locs', 'freqs'."""
    nsites: int
    """: Number of retained sites written."""
    names: List[str]
    """: Names of the sampled sequences in output order."""
    index: np.ndarray
    """: Indices of the sampled sequences in the (capped) input."""
    seed: int
    """: Seed of the sequence sampler."""
    stats: FilterStats
    """: Number of sites removed by each filter."""


class Convert:
    """Filter sites and write them in LDhat format.

    Parameters are validated when the tool is created (see
    ConvertParams), which raises ConfigError before any input file
    is read.
    """
    def __init__(self, **kwargs):
        self.params = ConvertParams.build(**kwargs)
        """Validated parameters."""

        # attrs to be filled by run()
        self.locs: Optional[LocusList] = None
        """: The parsed or contiguous site positions."""
        self.matrix: Optional[SequenceMatrix] = None
        """: The parsed sequences, capped at max_sequences."""
        self.tally: Optional[AlleleTally] = None
        """: Weighted allele counts per site."""
        self.decision: Optional[SiteDecision] = None
        """: Retained and biallelic masks."""

    def run(self) -> ConvertResult:
        """Run the conversion and write the output files."""
        self._load_locs()
        self._load_sites()
        self._check_dimensions()
        self.tally = tally_alleles(self.matrix)
        self.decision = filter_sites(
            self.tally,
            nseqs=self.matrix.nseqs,
            ploidy=self.matrix.ploidy,
            only2=self.params.only2,
            freqcut=self.params.freqcut,
            missfreqcut=self.params.missfreqcut,
            sites_range=self.params.sites_range,
        )
        self._report_stats()
        sampler = SequenceSampler(self.params.seed)
        index = sampler.sample(self.matrix.nseqs, self.params.nout)
        outfiles = self._write_outputs(index)
        return ConvertResult(
            outfiles=outfiles,
            nsites=self.decision.nretained,
            names=[self.matrix.names[i] for i in index],
            index=index,
            seed=sampler.seed,
            stats=self.decision.stats,
        )

    def _load_locs(self) -> None:
        """Parse locs file first so that bad positions fail early."""
        if self.params.locs_path is not None:
            self.locs = read_locs(self.params.locs_path)

    def _load_sites(self) -> None:
        """Parse sites file and apply the max sequences cap."""
        matrix = read_sites(self.params.sites_path)
        cap = self.params.max_sequences
        if matrix.nseqs > cap:
            logger.warning(
                f"More than max no. sequences ({matrix.nseqs}): "
                f"Using first {cap} for analysis")
            matrix = matrix.head(cap)
        self.matrix = matrix
        logger.info(
            f"Reading {matrix.nseqs} sequences of length {matrix.nsites} bases")

    def _check_dimensions(self) -> None:
        """Check locs and sites_range against the number of sites."""
        nsites = self.matrix.nsites
        if self.locs is None:
            self.locs = LocusList.contiguous(nsites)
        elif len(self.locs) != nsites:
            raise ParseError(
                f"locs file has {len(self.locs)} positions but sequences "
                f"have {nsites} sites")
        if self.params.sites_range:
            _, upper = self.params.sites_range
            if upper > nsites:
                raise ConfigError(
                    f"sites_range {self.params.sites_range} is outside of "
                    f"the {nsites} sites in the data")

    def _report_stats(self) -> None:
        stats = self.decision.stats
        logger.info(
            f"Retained {stats.nsites_after_filtering} of "
            f"{stats.nsites_before_filtering} sites")
        logger.debug(f"filter stats:\n{stats}")

    def _write_outputs(self, index: np.ndarray) -> Dict[str, Path]:
        """Write all output files, or none if an error is raised."""
        outfiles = {
            "sites": self.params.sites_out,
            "locs": self.params.locs_out,
        }
        if self.params.write_freqs:
            outfiles["freqs"] = self.params.freqs_out

        with atomic_outputs(outfiles) as tmps:
            with open(tmps["sites"], 'w', encoding="utf-8") as out:
                write_sites(out, self.matrix, index, self.decision)
            with open(tmps["locs"], 'w', encoding="utf-8") as out:
                write_locs(out, self.locs, self.decision)
            if "freqs" in tmps:
                self.tally.write_freqs(tmps["freqs"])

        logger.info(f"Segregating sites written to file\t: {outfiles['sites']}")
        logger.info(f"Locations of segregating sites to file\t: {outfiles['locs']}")
        if "freqs" in outfiles:
            logger.info(f"Allele frequencies written to file\t: {outfiles['freqs']}")
        return outfiles


def convert(sites_path, **kwargs) -> ConvertResult:
    """Run a conversion of a sites file and return the result.

    See Convert and ConvertParams for the keyword arguments.
    """
    return Convert(sites_path=sites_path, **kwargs).run()
