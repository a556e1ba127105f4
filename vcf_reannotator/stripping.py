# -*- coding: utf-8 -*-
"""Removal of previous annotation and extraction of the lookup fields"""

import typing

from logzero import logger

from .document import (
    CHR_PREFIX,
    COLUMN_SEP,
    INFO_COLUMN,
    MIN_COLUMNS,
    MISSING,
    Accepted,
    Rejected,
    VariantRecord,
    VcfDocument,
)
from .validation import ValidatedInput


def strip_chr(chrom: str) -> str:
    """Remove leading literal ``chr`` as VEP expects bare chromosome names"""
    if chrom.startswith(CHR_PREFIX):
        return chrom[len(CHR_PREFIX) :]
    return chrom


def strip_line(line_no: int, line: str) -> typing.Union[Accepted, Rejected]:
    """Reset the INFO column of ``line`` and parse the result into a ``VariantRecord``"""
    fields = line.split(COLUMN_SEP)
    if len(fields) < MIN_COLUMNS:
        return Rejected(
            line_no=line_no,
            line=line,
            reason="expected at least {} columns but found {}".format(MIN_COLUMNS, len(fields)),
        )
    fields[INFO_COLUMN] = MISSING
    chrom, pos, id_, ref, alt, qual, filter_, info = fields[:MIN_COLUMNS]
    record = VariantRecord(
        chrom=strip_chr(chrom),
        pos=pos,
        id=id_,
        ref=ref,
        alt=alt,
        qual=qual,
        filter=filter_,
        info=info,
        original_line=COLUMN_SEP.join(fields),
        raw_chrom=chrom,
        format=fields[8] if len(fields) > 8 else None,
        sample_values=fields[9] if len(fields) > 9 else None,
    )
    return Accepted(record)


def strip_records(validated: ValidatedInput) -> VcfDocument:
    """Build ``VcfDocument`` from validated input with all INFO columns set to ``"."``"""
    document = VcfDocument(header_lines=list(validated.header_lines))
    for line_no, line in validated.data_lines():
        result = strip_line(line_no, line)
        if isinstance(result, Accepted):
            document.records.append(result.record)
        else:
            logger.debug("Dropping line %d: %s", result.line_no, result.reason)
            document.rejected.append(result)
    logger.info(
        "Stripped %d records to baseline format (%d dropped)",
        len(document.records) + len(document.rejected),
        len(document.rejected),
    )
    return document
