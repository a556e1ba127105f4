# -*- coding: utf-8 -*-
"""Exceptions and warnings raised during re-annotation"""


class ReannotationError(Exception):
    """Base class for fatal errors; no output file is written"""


class InputFileMissing(ReannotationError):
    """Raised when the input VCF file does not exist"""


class FormatError(ReannotationError):
    """Raised on structural problems with the VCF header"""


class EmptyError(ReannotationError):
    """Raised when there are no data lines after the ``#CHROM`` line"""


class FileAccessError(ReannotationError):
    """Raised when the input cannot be read or the output cannot be written"""


class InvalidConfiguration(Exception):
    """Raised on invalid configuration"""


class AssemblyWarning(UserWarning):
    """Raised when the VCF reference is not (explicitly) GRCh38"""
