# -*- coding: utf-8 -*-
"""Configuration of the re-annotation"""

import enum
import sys
import typing
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .exceptions import InvalidConfiguration

PositiveSeconds = Annotated[float, Field(gt=0)]
"""A positive number of seconds."""


class GenomeAssembly(enum.StrEnum):
    GRCH38 = "GRCh38"
    HG38 = "hg38"
    GRCH37 = "GRCh37"
    HG19 = "hg19"


class ReannotatorModel(BaseModel):
    """
    Base class for the configuration models.
    Extra fields are forbidden, attribute docstrings are used for field descriptions,
    enum member values instead of names are used, and default values are validated.
    """

    model_config = ConfigDict(
        extra="forbid",
        use_attribute_docstrings=True,
        use_enum_values=True,
        validate_default=True,
    )

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        """
        Return the value of the field with the given key, or the default value if it doesn't exist.
        Simply delegates to getattr.
        """
        return getattr(self, key, default)


class ReannotationConfig(ReannotatorModel):
    genome_assembly: GenomeAssembly = GenomeAssembly.GRCH38
    """Genome assembly of the input, written to ``##reference``"""

    vep_timeout: PositiveSeconds = 120
    """Timeout of each VEP request in seconds"""

    civic_timeout: PositiveSeconds = 60
    """Timeout of each CIViC request in seconds"""

    vep_base_url: str | None = None
    """Ensembl REST server; chosen from the assembly when not set"""

    civic_base_url: str = "https://civicdb.org/api"
    """CIViC API base URL"""

    vep_interval: Annotated[float, Field(ge=0)] = 0.3
    """Minimal pause between two VEP requests in seconds"""

    civic_interval: Annotated[float, Field(ge=0)] = 0.5
    """Minimal pause between two CIViC requests in seconds"""

    progress_every: Annotated[int, Field(gt=0)] = 10
    """Log progress every this many variants"""


def build_config(**kwargs) -> ReannotationConfig:
    """Construct configuration, ``None`` values are ignored"""
    values = {key: value for key, value in kwargs.items() if value is not None}
    try:
        return ReannotationConfig(**values)
    except ValidationError as e:
        raise InvalidConfiguration("Invalid configuration: {}".format(e)) from e


def load_config(path: str, **overrides) -> ReannotationConfig:
    """Load configuration from YAML file at ``path`` and apply non-``None`` ``overrides``"""
    yaml = YAML(typ="safe")
    try:
        with open(path, "rt") as inputf:
            data = yaml.load(inputf) or {}
    except (OSError, YAMLError) as e:
        raise InvalidConfiguration("Could not load configuration {}: {}".format(path, e)) from e
    if not isinstance(data, dict):
        raise InvalidConfiguration("Configuration {} must be a mapping".format(path))
    data.update({key: value for key, value in overrides.items() if value is not None})
    return build_config(**data)


def print_config(config: ReannotationConfig, file=sys.stderr):
    """Print human-readable version of configuration to ``file``"""
    print("\nConfiguration", file=file)
    print("-------------\n", file=file)
    yaml = YAML()
    return yaml.dump(config.model_dump(mode="json"), stream=file)
