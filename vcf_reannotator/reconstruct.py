# -*- coding: utf-8 -*-
"""Reconstruction of the standardized, re-annotated VCF"""

import datetime
import os
import tempfile
import typing

from logzero import logger
import vcfpy

from .document import (
    CHR_PREFIX,
    COLUMN_SEP,
    INFO_COLUMN,
    AnnotationResult,
    ClinicalSignificance,
    VariantRecord,
    VcfDocument,
)
from .exceptions import FileAccessError

#: File format written to the output
FILEFORMAT = "VCFv4.2"

#: Separator of INFO entries
INFO_SEP = ";"
#: Separator of FORMAT keys and sample values
FORMAT_SEP = ":"


def info_line(id_, number, type_, description):
    return vcfpy.InfoHeaderLine.from_mapping(
        {"ID": id_, "Number": number, "Type": type_, "Description": description}
    )


def format_line(id_, number, type_, description):
    return vcfpy.FormatHeaderLine.from_mapping(
        {"ID": id_, "Number": number, "Type": type_, "Description": description}
    )


#: Declarations for depth and genotype fields, after fileformat/fileDate/reference
DEPTH_HEADER_LINES = (
    info_line("DP", "1", "Integer", "Total Depth"),
    format_line("GT", "1", "String", "Genotype"),
    format_line("AD", "R", "Integer", "Allelic Depths"),
    format_line("DP", "1", "Integer", "Read Depth"),
)

#: Declarations for the annotation written by this tool
ANNOTATION_HEADER_LINES = (
    info_line("gnomAD_AF", "A", "Float", "gnomAD Allele Frequency from VEP"),
    info_line("CLNSIG", ".", "String", "Clinical Significance from CIViC"),
    info_line("VEP_Consequence", ".", "String", "Most severe consequence from VEP"),
)


class HeaderTemplate:
    """Ordered list of the required header declarations"""

    def __init__(self, assembly: str, file_date: typing.Optional[datetime.date] = None):
        #: Value for the ``##reference`` line
        self.assembly = assembly
        #: Value for the ``##fileDate`` line
        self.file_date = file_date or datetime.date.today()

    def essential_lines(self) -> typing.List[vcfpy.HeaderLine]:
        return [
            vcfpy.HeaderLine("fileformat", FILEFORMAT),
            vcfpy.HeaderLine("fileDate", self.file_date.strftime("%Y%m%d")),
            vcfpy.HeaderLine("reference", self.assembly),
        ] + list(DEPTH_HEADER_LINES)

    def render(self, chromosomes: typing.Iterable[str], column_header: str) -> typing.List[str]:
        """Return header lines for the given lookup chromosome names and ``#CHROM`` line"""
        result = [line.serialize() for line in self.essential_lines()]
        result += [line.serialize() for line in ANNOTATION_HEADER_LINES]
        result += [contig_line(CHR_PREFIX + chrom) for chrom in chromosomes]
        result.append(column_header)
        return result


def contig_line(name: str) -> str:
    return "##contig=<ID={id_}>".format(id_=name)


def extract_depth(fields: typing.Sequence[str]) -> typing.Optional[str]:
    """Return DP value of the first sample if declared in FORMAT"""
    if len(fields) < 10:
        return None
    keys = fields[8].split(FORMAT_SEP)
    values = fields[9].split(FORMAT_SEP)
    if "DP" not in keys:
        return None
    idx = keys.index("DP")
    if idx >= len(values):
        return None
    return values[idx]


def build_info(
    fields: typing.Sequence[str],
    annotation: AnnotationResult,
    significance: ClinicalSignificance,
) -> str:
    """Return INFO column with DP, gnomAD_AF, CLNSIG and VEP_Consequence"""
    parts = []
    depth = extract_depth(fields)
    if depth is not None:
        parts.append("DP={}".format(depth))
    if annotation.has_frequency:
        parts.append("gnomAD_AF={:.6f}".format(annotation.gnomad_af))
    else:
        parts.append("gnomAD_AF=.")
    parts.append("CLNSIG={}".format(ClinicalSignificance(significance).value))
    if annotation.consequence is not None:
        parts.append("VEP_Consequence={}".format(annotation.consequence))
    return INFO_SEP.join(parts)


def build_record_line(
    record: VariantRecord, annotation: AnnotationResult, significance: ClinicalSignificance
) -> str:
    fields = record.fields
    fields[INFO_COLUMN] = build_info(fields, annotation, significance)
    fields[0] = CHR_PREFIX + record.chrom
    return COLUMN_SEP.join(fields)


def build(
    document: VcfDocument,
    annotations: typing.Sequence[AnnotationResult],
    significances: typing.Sequence[ClinicalSignificance],
    assembly: str,
    file_date: typing.Optional[datetime.date] = None,
) -> str:
    """Return the text of the re-annotated VCF file"""
    if not (len(document.records) == len(annotations) == len(significances)):
        raise ValueError(
            "Got {} records but {} annotations and {} significances".format(
                len(document.records), len(annotations), len(significances)
            )
        )
    lines = HeaderTemplate(assembly, file_date).render(
        document.chromosomes(), document.column_header
    )
    for record, annotation, significance in zip(document.records, annotations, significances):
        lines.append(build_record_line(record, annotation, significance))
    return "".join(line + "\n" for line in lines)


def current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def remove_if_exists(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def write_output(path: str, text: str) -> None:
    """Write ``text`` to ``path`` via a temporary file in the same directory

    The file gets the permissions of a newly created file (``0o666`` minus umask).
    """
    dirname = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".tmp.", suffix=".vcf", dir=dirname)
    except OSError as e:
        raise FileAccessError("Could not write output VCF {}: {}".format(path, e)) from e
    try:
        with os.fdopen(fd, "wt") as outputf:
            outputf.write(text)
        os.chmod(tmp_path, 0o666 & ~current_umask())
        os.replace(tmp_path, path)
    except OSError as e:
        remove_if_exists(tmp_path)
        raise FileAccessError("Could not write output VCF {}: {}".format(path, e)) from e
    except BaseException:
        remove_if_exists(tmp_path)
        raise
    logger.info("Annotated VCF written to: %s", path)
