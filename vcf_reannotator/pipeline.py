# -*- coding: utf-8 -*-
"""Driver for validating, stripping, re-annotating and writing a VCF file

Fatal problems with the input raise a ``ReannotationError`` before any external
call is made and no output file is written.  Problems with single records or
single lookups only degrade the affected record.
"""

import collections
import datetime
import time
import typing

import attr
from logzero import logger

from .clients import CivicClient, VepClient
from .document import AnnotationResult, ClinicalSignificance, VcfDocument
from .models import ReannotationConfig, build_config
from .pacing import MinIntervalGate
from .reconstruct import build, write_output
from .significance import map_significance
from .stripping import strip_records
from .validation import validate_vcf


@attr.s(frozen=True, auto_attribs=True)
class AnnotationSummary:
    """Aggregate counts of one run"""

    #: Path to the written VCF file
    output_path: str
    #: Number of data lines in the input
    n_input: int
    #: Number of records written
    n_records: int
    #: Number of data lines dropped for having too few columns
    n_dropped: int
    #: Number of records with gnomAD allele frequency
    n_with_af: int
    #: Number of records with VEP consequence
    n_with_consequence: int
    #: Number of records per clinical significance
    significance_counts: typing.Dict[str, int]

    def log(self):
        logger.info("=== Annotation Summary ===")
        logger.info("Total variants: %d", self.n_records)
        logger.info("Dropped lines: %d", self.n_dropped)
        logger.info("With gnomAD AF: %d", self.n_with_af)
        logger.info("With VEP consequence: %d", self.n_with_consequence)
        logger.info("Clinical Significance breakdown:")
        for name, count in self.significance_counts.items():
            logger.info("  %s: %d", name, count)


def count_significances(
    significances: typing.Iterable[ClinicalSignificance],
) -> typing.Dict[str, int]:
    """Return counts for all ``ClinicalSignificance`` values, in declaration order"""
    counter = collections.Counter(ClinicalSignificance(s).value for s in significances)
    return {member.value: counter.get(member.value, 0) for member in ClinicalSignificance}


class Preprocessor:
    """Re-annotation of one VCF file"""

    def __init__(
        self,
        config: typing.Optional[ReannotationConfig] = None,
        vep_client: typing.Optional[VepClient] = None,
        civic_client: typing.Optional[CivicClient] = None,
        clock: typing.Callable[[], float] = time.monotonic,
        sleep: typing.Callable[[float], None] = time.sleep,
        file_date: typing.Optional[datetime.date] = None,
    ):
        #: The configuration
        self.config = config or ReannotationConfig()
        #: Client for VEP lookups
        self.vep_client = vep_client or VepClient(
            base_url=self.config.vep_base_url, timeout=self.config.vep_timeout
        )
        #: Client for CIViC lookups
        self.civic_client = civic_client or CivicClient(
            base_url=self.config.civic_base_url, timeout=self.config.civic_timeout
        )
        #: Pacing of VEP lookups
        self.vep_gate = MinIntervalGate(self.config.vep_interval, "VEP", clock, sleep)
        #: Pacing of CIViC lookups
        self.civic_gate = MinIntervalGate(self.config.civic_interval, "CIViC", clock, sleep)
        #: Date for the ``##fileDate`` header, today if ``None``
        self.file_date = file_date

    def _log_progress(self, i: int, total: int):
        if i % self.config.progress_every == 0:
            logger.info("  Progress: %d / %d", i, total)

    def annotate_vep(self, document: VcfDocument) -> typing.List[AnnotationResult]:
        logger.info("Annotating with Ensembl VEP REST API...")
        result = []
        total = len(document.records)
        for i, record in enumerate(document.records, 1):
            self._log_progress(i, total)
            result.append(
                self.vep_gate.call(
                    self.vep_client.annotate,
                    record,
                    self.config.genome_assembly,
                    self.config.vep_timeout,
                )
            )
        logger.info("VEP annotation complete")
        return result

    def annotate_civic(self, document: VcfDocument) -> typing.List[ClinicalSignificance]:
        logger.info("Annotating with CIViC API for clinical significance...")
        result = []
        total = len(document.records)
        for i, record in enumerate(document.records, 1):
            self._log_progress(i, total)
            raw = self.civic_gate.call(
                self.civic_client.annotate, record, self.config.civic_timeout
            )
            result.append(map_significance(raw))
        logger.info("CIViC annotation complete")
        return result

    def run(self, vcf_path: str, output_vcf_path: str) -> AnnotationSummary:
        logger.info("Step 1: Validating VCF format...")
        validated = validate_vcf(vcf_path)
        logger.info("Found %d variant records", validated.record_count)

        logger.info("Step 2: Removing previous annotations...")
        document = strip_records(validated)

        logger.info("Step 3: Annotating %d variants...", len(document.records))
        annotations = self.annotate_vep(document)
        significances = self.annotate_civic(document)

        logger.info("Step 4: Building annotated VCF...")
        text = build(
            document,
            annotations,
            significances,
            assembly=self.config.genome_assembly,
            file_date=self.file_date,
        )
        write_output(output_vcf_path, text)

        summary = AnnotationSummary(
            output_path=output_vcf_path,
            n_input=validated.record_count,
            n_records=len(document.records),
            n_dropped=len(document.rejected),
            n_with_af=sum(1 for a in annotations if a.has_frequency),
            n_with_consequence=sum(1 for a in annotations if a.consequence is not None),
            significance_counts=count_significances(significances),
        )
        summary.log()
        return summary


def preprocess_and_annotate_vcf(
    vcf_path: str,
    output_vcf_path: str,
    genome_assembly: str = "GRCh38",
    vep_timeout: float = 120,
    civic_timeout: float = 60,
    config: typing.Optional[ReannotationConfig] = None,
    **kwargs,
) -> AnnotationSummary:
    """Validate, strip and re-annotate ``vcf_path`` into ``output_vcf_path``

    Explicit ``config`` takes precedence over the keyword arguments; further
    ``kwargs`` are passed to ``Preprocessor``.
    """
    if config is None:
        config = build_config(
            genome_assembly=genome_assembly, vep_timeout=vep_timeout, civic_timeout=civic_timeout
        )
    return Preprocessor(config, **kwargs).run(vcf_path, output_vcf_path)
