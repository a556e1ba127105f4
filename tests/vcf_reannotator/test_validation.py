# -*- coding: utf-8 -*-
"""Tests for ``vcf_reannotator.validation``"""

import gzip
import textwrap

import pytest

from vcf_reannotator.exceptions import (
    AssemblyWarning,
    EmptyError,
    FileAccessError,
    FormatError,
    InputFileMissing,
)
from vcf_reannotator.validation import (
    check_assembly,
    read_lines,
    validate_lines,
    validate_vcf,
)


def test_validate_lines(vcf_text):
    validated = validate_lines(vcf_text.splitlines())

    assert validated.header_index == 3
    assert validated.record_count == 10
    assert validated.reference_lines == ("##reference=GRCh38",)
    assert validated.column_header.startswith("#CHROM\tPOS")
    assert len(validated.header_lines) == 4
    line_nos = [line_no for line_no, _ in validated.data_lines()]
    assert line_nos == list(range(5, 15))


def test_validate_lines_missing_fileformat(vcf_text):
    lines = [line for line in vcf_text.splitlines() if not line.startswith("##fileformat")]
    with pytest.raises(FormatError) as exc_info:
        validate_lines(lines)
    assert "##fileformat" in str(exc_info.value)


def test_validate_lines_no_chrom_line():
    lines = ["##fileformat=VCFv4.2", "##reference=GRCh38", "chr1\t1\t.\tA\tT\t.\t.\t."]
    with pytest.raises(FormatError):
        validate_lines(lines)


def test_validate_lines_two_chrom_lines(vcf_text):
    lines = vcf_text.splitlines()
    lines.insert(5, lines[3])
    with pytest.raises(FormatError) as exc_info:
        validate_lines(lines)
    assert "found 2" in str(exc_info.value)


def test_validate_lines_empty(vcf_factory):
    lines = vcf_factory(n=0).splitlines()
    with pytest.raises(EmptyError):
        validate_lines(lines)


def test_validate_lines_only_blank_after_header(vcf_factory):
    lines = vcf_factory(n=0).splitlines() + ["", "   "]
    with pytest.raises(EmptyError):
        validate_lines(lines)


def test_validate_lines_ignores_blank_lines(vcf_factory):
    lines = vcf_factory(n=2).splitlines()
    lines.insert(5, "")
    validated = validate_lines(lines)
    assert validated.record_count == 2
    assert [line_no for line_no, _ in validated.data_lines()] == [5, 7]


def test_check_assembly_grch38():
    assert check_assembly(["##reference=file:///refs/GRCh38.fa"])
    assert check_assembly(["##reference=HG38"])


def test_check_assembly_other():
    with pytest.warns(AssemblyWarning, match="not explicitly hg38/GRCh38"):
        assert not check_assembly(["##reference=hg19"])


def test_check_assembly_missing():
    with pytest.warns(AssemblyWarning, match="No ##reference header found"):
        assert not check_assembly([])


def test_validate_lines_warns_on_assembly(vcf_text):
    lines = [line.replace("GRCh38", "GRCh37") for line in vcf_text.splitlines()]
    with pytest.warns(AssemblyWarning):
        validated = validate_lines(lines)
    assert validated.record_count == 10


def test_read_lines_missing(tmp_path):
    with pytest.raises(InputFileMissing):
        read_lines(str(tmp_path / "missing.vcf"))


def test_read_lines_not_utf8(tmp_path):
    path = tmp_path / "input.vcf"
    path.write_bytes(b"##fileformat=VCFv4.2\n#CHROM\tPOS\n1\t\xff\xfe\n")
    with pytest.raises(FormatError, match="not UTF-8"):
        read_lines(str(path))


def test_read_lines_directory(tmp_path):
    with pytest.raises(FileAccessError):
        read_lines(str(tmp_path))


def test_read_lines_gzip(tmp_path, vcf_text):
    path = tmp_path / "input.vcf.gz"
    with gzip.open(str(path), "wt") as outputf:
        outputf.write(vcf_text)
    assert read_lines(str(path)) == vcf_text.splitlines()


def test_validate_vcf(tmp_path):
    path = tmp_path / "input.vcf"
    path.write_text(
        textwrap.dedent(
            """
            ##fileformat=VCFv4.1
            ##reference=hg38
            #CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
            1\t100\t.\tA\tG\t.\tPASS\t.
            """
        ).lstrip()
    )
    validated = validate_vcf(str(path))
    assert validated.record_count == 1
    assert validated.header_index == 2
