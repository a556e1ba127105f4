# -*- coding: utf-8 -*-
"""Shared fixtures for the unit tests"""

import datetime
import textwrap

import pytest

from vcf_reannotator.document import AnnotationResult

#: Header of the example VCF files
VCF_HEADER = textwrap.dedent(
    """
    ##fileformat=VCFv4.2
    ##reference=GRCh38
    ##INFO=<ID=OLD,Number=1,Type=String,Description="Stale annotation">
    #CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tTUMOR
    """
).lstrip()


def make_data_line(i, chrom="chr7", info="OLD=x;gnomAD_AF=0.5", columns=10):
    """Return data line number ``i`` (1-based) truncated to ``columns`` columns"""
    fields = [
        chrom,
        str(1000 + i),
        "var{}".format(i),
        "A",
        "T",
        "50",
        "PASS",
        info,
        "GT:AD:DP",
        "0/1:10,{}:{}".format(i, 20 + i),
    ]
    return "\t".join(fields[:columns])


def make_vcf_text(n=10, short=(), header=VCF_HEADER):
    """Return VCF text with ``n`` records; 1-based record numbers in ``short`` get 5 columns"""
    lines = [make_data_line(i, columns=5 if i in short else 10) for i in range(1, n + 1)]
    return header + "".join(line + "\n" for line in lines)


class FakeVepClient:
    """Replacement for ``VepClient`` returning canned results by position"""

    def __init__(self, results=None, default=None):
        self.results = dict(results or {})
        self.default = default or AnnotationResult(gnomad_af=0.001, consequence="missense_variant")
        self.calls = []

    def annotate(self, variant, assembly="GRCh38", timeout=None):
        self.calls.append((variant.chrom, variant.pos, assembly, timeout))
        return self.results.get(variant.pos, self.default)


class FakeCivicClient:
    """Replacement for ``CivicClient`` returning canned raw significance by position"""

    def __init__(self, results=None, default="Oncogenic"):
        self.results = dict(results or {})
        self.default = default
        self.calls = []

    def annotate(self, variant, timeout=None):
        self.calls.append((variant.chrom, variant.pos, timeout))
        return self.results.get(variant.pos, self.default)


class FakeClock:
    """Clock that only advances when sleeping or on ``advance()``"""

    def __init__(self, now=100.0):
        self.now = now
        self.sleeps = []

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def vcf_text():
    return make_vcf_text()


@pytest.fixture
def input_vcf(tmp_path, vcf_text):
    """Path to VCF file with 10 records in temporary directory"""
    path = tmp_path / "input.vcf"
    path.write_text(vcf_text)
    return str(path)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def file_date():
    return datetime.date(2024, 3, 1)


@pytest.fixture
def vcf_factory():
    """Return function building VCF text, see ``make_vcf_text()``"""
    return make_vcf_text


@pytest.fixture
def fake_vep():
    """Return ``FakeVepClient`` class"""
    return FakeVepClient


@pytest.fixture
def fake_civic():
    """Return ``FakeCivicClient`` class"""
    return FakeCivicClient
