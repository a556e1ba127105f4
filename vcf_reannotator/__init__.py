# -*- coding: utf-8 -*-

from vcf_reannotator._version import __version__

from .pipeline import AnnotationSummary, preprocess_and_annotate_vcf

__all__ = ["__version__", "AnnotationSummary", "preprocess_and_annotate_vcf"]
