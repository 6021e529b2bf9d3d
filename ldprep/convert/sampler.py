#!/usr/bin/env python

"""Random subsampling of the sequences to write.

The sampler owns its own numpy Generator, so a conversion is a pure
function of its inputs, parameters and seed. If no seed is entered a
new one is drawn from system entropy and logged so that the same
subset can be drawn again.
"""

from typing import Optional
import numpy as np
from loguru import logger

logger = logger.bind(name="ldprep")


class SequenceSampler:
    """Draw sorted subsets of sequence indices.

    Parameters
    ----------
    seed: int or None
        A uint64 seed. If None a seed is drawn from system entropy.

    Example
    -------
    >>> sampler = SequenceSampler(seed=123)
    >>> sampler.sample(nseqs=10, nout=4)
    array([1, 3, 4, 8])
    """
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(np.random.SeedSequence().generate_state(1, dtype=np.uint64)[0])
            logger.info(f"random seed drawn from entropy: {seed}")
        self.seed = seed
        """The uint64 seed of the generator."""
        self.rng = np.random.default_rng(seed)
        """The numpy Generator used to draw subsets."""

    def sample(self, nseqs: int, nout: Optional[int] = None) -> np.ndarray:
        """Return nout distinct indices from [0, nseqs) in ascending order.

        nout defaults to nseqs and is clipped to nseqs.
        """
        nout = nseqs if nout is None else min(nout, nseqs)
        index = self.rng.choice(nseqs, size=nout, replace=False)
        index.sort()
        return index
