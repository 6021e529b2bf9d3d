#!/usr/bin/env python

"""Params schema for type checking and validating a conversion.

Pydantic Models are similar to dataclases but they also include
*type validation*, meaning that if you try to set an attribute to
the wrong type it will raise an error. Validation errors are
re-raised as ConfigError by `ConvertParams.build()` so that bad
parameters are reported before any input file is read.

Checks that need the parsed data (e.g., that sites_range is inside
the matrix) are done later in Convert.
"""

# pylint: disable=no-self-argument, no-name-in-module

from pathlib import Path
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from loguru import logger
from ldprep.core.exceptions import ConfigError
from ldprep.load.sites import SEQ_MAX

logger = logger.bind(name="ldprep")


class ConvertParams(BaseModel):
    """Parameters of a sites/locs conversion."""
    sites_path: Path
    locs_path: Optional[Path] = None
    # site filtering options
    only2: bool = False
    freqcut: float = Field(0.0, ge=0.0, le=1.0)
    missfreqcut: float = Field(1.0, ge=0.0, le=1.0)
    sites_range: Optional[Tuple[int, int]] = None
    # sequence sampling options
    nout: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = Field(None, ge=0, lt=2 ** 64)
    max_sequences: int = Field(SEQ_MAX, ge=1, le=SEQ_MAX)
    # output options
    prefix: str = ""
    write_freqs: bool = False

    class Config:
        """Enables type checking validation when using setattr in API."""
        validate_assignment = True

    def __str__(self):
        return self.model_dump_json(indent=2)

    @classmethod
    def build(cls, **kwargs) -> "ConvertParams":
        """Return validated params or raise ConfigError."""
        try:
            return cls(**kwargs)
        except ValidationError as err:
            raise ConfigError(f"invalid parameters:\n{err}") from err

    @property
    def sites_out(self) -> Path:
        return Path(f"{self.prefix}sites.txt")

    @property
    def locs_out(self) -> Path:
        return Path(f"{self.prefix}locs.txt")

    @property
    def freqs_out(self) -> Path:
        return Path(f"{self.prefix}freqs.txt")

    ##################################################################
    # custom validator funcs in addition to type checking.
    ##################################################################

    @field_validator("sites_path", "locs_path")
    @classmethod
    def _path_validator(cls, value: Optional[Path]) -> Optional[Path]:
        """Expand user paths. Existence is checked when reading."""
        if value is None:
            return value
        value = value.expanduser()
        if value.is_dir():
            raise ValueError(f"{value} is a directory, a file path is required.")
        return value

    @field_validator("sites_range")
    @classmethod
    def _range_validator(cls, value: Optional[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
        """Require 0 <= lower < upper."""
        if value is None:
            return value
        lower, upper = value
        if lower < 0:
            raise ValueError(f"sites_range lower bound must be >= 0, not {lower}")
        if upper <= lower:
            raise ValueError(
                f"sites_range upper bound ({upper}) must be > lower ({lower})")
        return value

    @model_validator(mode="after")
    def _outputs_validator(self) -> "ConvertParams":
        """The outputs must not overwrite the inputs."""
        inputs = {self.sites_path.resolve()}
        if self.locs_path:
            inputs.add(self.locs_path.resolve())
        for path in (self.sites_out, self.locs_out, self.freqs_out):
            if path.resolve() in inputs:
                raise ValueError(f"output file {path} would overwrite an input file")
        return self


if __name__ == "__main__":
    params = ConvertParams.build(sites_path="seqs.fa", freqcut=0.1)
    print(params)
