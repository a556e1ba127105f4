# -*- coding: utf-8 -*-
"""Structural validation of the raw VCF text

Only the header is inspected here: the ``##fileformat`` declaration, the
``#CHROM`` column header and the ``##reference`` lines.  Data lines are merely
counted; malformed data lines are dealt with when stripping.
"""

import gzip
import os
import re
import typing
import warnings

import attr
from logzero import logger

from .exceptions import (
    AssemblyWarning,
    EmptyError,
    FileAccessError,
    FormatError,
    InputFileMissing,
)

#: Pattern for the file format declaration
PATTERN_FILEFORMAT = re.compile(r"^##fileformat=VCF")
#: Pattern for the column header line
PATTERN_CHROM = re.compile(r"^#CHROM")
#: Pattern for reference lines
PATTERN_REFERENCE = re.compile(r"^##reference=")
#: Pattern for accepted assemblies in reference lines
PATTERN_GRCH38 = re.compile(r"hg38|GRCh38", re.IGNORECASE)

#: File name suffixes of compressed input files
GZIP_SUFFIXES = (".gz", ".bgz")


@attr.s(frozen=True, auto_attribs=True)
class ValidatedInput:
    """Result of successfully validating a VCF file"""

    #: All lines of the file without line endings
    lines: typing.Tuple[str, ...]
    #: 0-based index of the ``#CHROM`` line
    header_index: int
    #: Number of (non-blank) data lines after the ``#CHROM`` line
    record_count: int
    #: The ``##reference=`` lines
    reference_lines: typing.Tuple[str, ...] = ()

    @property
    def header_lines(self) -> typing.Tuple[str, ...]:
        return self.lines[: self.header_index + 1]

    @property
    def column_header(self) -> str:
        return self.lines[self.header_index]

    def data_lines(self) -> typing.Iterator[typing.Tuple[int, str]]:
        """Yield pairs of 1-based line number and non-blank data line"""
        for idx in range(self.header_index + 1, len(self.lines)):
            line = self.lines[idx]
            if line.strip():
                yield idx + 1, line


def read_lines(path: str) -> typing.List[str]:
    """Read lines of (optionally gzip-compressed) text file at ``path``"""
    if not os.path.exists(path):
        raise InputFileMissing("VCF file not found: {}".format(path))
    if path.endswith(GZIP_SUFFIXES):
        opener = gzip.open
    else:
        opener = open
    try:
        with opener(path, "rt", encoding="utf-8") as inputf:
            return inputf.read().splitlines()
    except UnicodeDecodeError as e:
        raise FormatError("Invalid VCF: {} is not UTF-8 text: {}".format(path, e)) from e
    except OSError as e:
        raise FileAccessError("Could not read VCF file {}: {}".format(path, e)) from e


def check_assembly(reference_lines: typing.Sequence[str]) -> bool:
    """Warn if the reference lines do not point to GRCh38, return whether it is fine"""
    if not reference_lines:
        msg = "No ##reference header found. Assuming hg38/GRCh38."
    elif not any(PATTERN_GRCH38.search(line) for line in reference_lines):
        msg = "VCF reference is not explicitly hg38/GRCh38. Proceeding with caution."
    else:
        return True
    logger.warning(msg)
    warnings.warn(AssemblyWarning(msg))
    return False


def validate_lines(lines: typing.Sequence[str]) -> ValidatedInput:
    """Validate the VCF given as sequence of lines

    Raises ``FormatError`` on missing file format line or when there is not exactly one
    ``#CHROM`` line and ``EmptyError`` if no data line follows.
    """
    lines = tuple(lines)
    if not any(PATTERN_FILEFORMAT.match(line) for line in lines):
        raise FormatError("Invalid VCF: Missing ##fileformat header")

    header_idxs = [i for i, line in enumerate(lines) if PATTERN_CHROM.match(line)]
    if len(header_idxs) != 1:
        raise FormatError(
            "Invalid VCF: Missing or multiple #CHROM header lines (found {})".format(
                len(header_idxs)
            )
        )

    reference_lines = tuple(line for line in lines if PATTERN_REFERENCE.match(line))
    check_assembly(reference_lines)

    header_index = header_idxs[0]
    record_count = sum(1 for line in lines[header_index + 1 :] if line.strip())
    if not record_count:
        raise EmptyError("VCF contains no variant records")

    return ValidatedInput(
        lines=lines,
        header_index=header_index,
        record_count=record_count,
        reference_lines=reference_lines,
    )


def validate_vcf(path: str) -> ValidatedInput:
    """Read and validate VCF file at ``path``"""
    return validate_lines(read_lines(path))
