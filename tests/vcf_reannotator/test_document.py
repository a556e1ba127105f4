# -*- coding: utf-8 -*-
"""Tests for ``vcf_reannotator.document`` and ``vcf_reannotator.exceptions``"""

import pytest

from vcf_reannotator.document import AnnotationResult, ClinicalSignificance, VcfDocument
from vcf_reannotator.exceptions import (
    AssemblyWarning,
    EmptyError,
    FormatError,
    InputFileMissing,
    ReannotationError,
)
from vcf_reannotator.stripping import strip_line


def test_annotation_result_has_frequency():
    assert AnnotationResult(gnomad_af=0.0).has_frequency
    assert AnnotationResult(gnomad_af=0.3).has_frequency
    assert not AnnotationResult().has_frequency
    assert not AnnotationResult(gnomad_af=float("nan")).has_frequency
    assert not AnnotationResult(gnomad_af=float("inf")).has_frequency


def test_clinical_significance_values():
    assert [s.value for s in ClinicalSignificance] == [
        "Pathogenic",
        "Likely_Pathogenic",
        "Benign",
        "Likely_Benign",
        "VUS",
    ]
    assert str(ClinicalSignificance.LIKELY_BENIGN) == "Likely_Benign"


def test_variant_record_describe_and_fields():
    record = strip_line(1, "chr17\t7675088\t.\tC\tT\t.\tPASS\t.").record
    assert record.describe() == "17:7675088 C>T"
    assert record.fields == ["chr17", "7675088", ".", "C", "T", ".", "PASS", "."]
    # fields are a fresh copy
    record.fields[0] = "x"
    assert record.original_line.startswith("chr17\t")


def test_vcf_document_without_column_header():
    with pytest.raises(ValueError):
        VcfDocument(header_lines=["##fileformat=VCFv4.2"]).column_header


def test_vcf_document_chromosomes():
    document = VcfDocument(
        records=[
            strip_line(1, "chr2\t1\t.\tA\tG\t.\t.\t.").record,
            strip_line(2, "1\t1\t.\tA\tG\t.\t.\t.").record,
            strip_line(3, "chr2\t5\t.\tA\tG\t.\t.\t.").record,
        ]
    )
    assert document.chromosomes() == ["2", "1"]


@pytest.mark.parametrize("klass", [InputFileMissing, FormatError, EmptyError])
def test_fatal_errors(klass):
    error_msg = "Raised {}".format(klass.__name__)
    with pytest.raises(ReannotationError) as exec_info:
        raise klass(error_msg)
    assert exec_info.value.args[0] == error_msg


def test_assembly_warning_is_user_warning():
    assert issubclass(AssemblyWarning, UserWarning)
