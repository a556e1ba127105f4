# -*- coding: utf-8 -*-
"""In-memory representation of the VCF file being re-annotated"""

import enum
import math
import typing

import attr

#: Separator of the VCF columns
COLUMN_SEP = "\t"

#: Minimal number of columns of a VCF data line (CHROM to INFO)
MIN_COLUMNS = 8

#: 0-based index of the INFO column
INFO_COLUMN = 7

#: Value of an empty column
MISSING = "."

#: Prefix of UCSC-style chromosome names
CHR_PREFIX = "chr"


class ClinicalSignificance(enum.StrEnum):
    """Clinical significance as written to INFO/CLNSIG"""

    PATHOGENIC = "Pathogenic"
    LIKELY_PATHOGENIC = "Likely_Pathogenic"
    BENIGN = "Benign"
    LIKELY_BENIGN = "Likely_Benign"
    VUS = "VUS"


@attr.s(auto_attribs=True)
class VariantRecord:
    """One variant from a data line of the input VCF"""

    #: Chromosome name as used for lookups, without ``chr`` prefix
    chrom: str
    #: 1-based position, textual as in the file
    pos: str
    #: Value of the ID column
    id: str
    #: Reference allele
    ref: str
    #: Alternative allele(s) as in the file
    alt: str
    #: Value of the QUAL column
    qual: str
    #: Value of the FILTER column
    filter: str
    #: Value of the INFO column, ``"."`` after stripping
    info: str
    #: The tab-separated line after stripping
    original_line: str
    #: Chromosome name as found in the input
    raw_chrom: str
    #: Colon-separated FORMAT keys, if any
    format: typing.Optional[str] = None
    #: Colon-separated values of the first sample, if any
    sample_values: typing.Optional[str] = None

    @property
    def fields(self) -> typing.List[str]:
        """Columns of ``original_line``"""
        return self.original_line.split(COLUMN_SEP)

    def describe(self) -> str:
        """Human readable coordinate, e.g. ``7:140753336 A>T``"""
        return "{}:{} {}>{}".format(self.chrom, self.pos, self.ref, self.alt)


@attr.s(frozen=True, auto_attribs=True)
class Accepted:
    """A data line that could be turned into a ``VariantRecord``"""

    record: VariantRecord


@attr.s(frozen=True, auto_attribs=True)
class Rejected:
    """A data line that was dropped"""

    #: 1-based line number in the input file
    line_no: int
    #: The offending line
    line: str
    #: Reason for dropping the line
    reason: str


@attr.s(frozen=True, auto_attribs=True)
class AnnotationResult:
    """Result of the VEP lookup of one variant, ``AnnotationResult()`` is "unknown"."""

    #: Maximal gnomAD allele frequency, if any
    gnomad_af: typing.Optional[float] = None
    #: The most severe consequence, if any
    consequence: typing.Optional[str] = None

    @property
    def has_frequency(self) -> bool:
        return self.gnomad_af is not None and math.isfinite(self.gnomad_af)


@attr.s(auto_attribs=True)
class VcfDocument:
    """Header lines and records of one VCF file"""

    #: Header lines in file order, including the ``#CHROM`` line
    header_lines: typing.List[str] = attr.Factory(list)
    #: The records that survived stripping
    records: typing.List[VariantRecord] = attr.Factory(list)
    #: The lines dropped during stripping
    rejected: typing.List[Rejected] = attr.Factory(list)

    @property
    def column_header(self) -> str:
        """The ``#CHROM`` line"""
        for line in self.header_lines:
            if line.startswith("#CHROM"):
                return line
        raise ValueError("No #CHROM line in header")

    def chromosomes(self) -> typing.List[str]:
        """Distinct lookup chromosome names in order of first occurrence"""
        return list(dict.fromkeys(record.chrom for record in self.records))
