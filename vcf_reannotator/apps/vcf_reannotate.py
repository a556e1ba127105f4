# -*- coding: utf-8 -*-
"""Validate a VCF file, strip its annotation and re-annotate with VEP and CIViC

Usage::

    $ vcf-reannotate --input-vcf IN.vcf --output-vcf OUT.vcf
"""

import argparse
import sys

from .. import __version__
from ..exceptions import InvalidConfiguration, ReannotationError
from ..models import GenomeAssembly, build_config, load_config, print_config
from ..pipeline import Preprocessor
from .impl.logging import LVL_ERROR, LVL_SUCCESS, banner, log, set_verbosity


def config_from_args(args):
    """Return configuration from ``--config`` file and command line overrides"""
    overrides = {
        "genome_assembly": args.genome_assembly,
        "vep_timeout": args.vep_timeout,
        "civic_timeout": args.civic_timeout,
    }
    if args.config:
        return load_config(args.config, **overrides)
    return build_config(**overrides)


def run_preprocessing(args):
    """Run the re-annotation, return summary or ``None`` on fatal errors"""
    try:
        config = config_from_args(args)
    except InvalidConfiguration as e:
        log("{msg}", {"msg": e}, level=LVL_ERROR)
        return None
    if args.verbose:
        print_config(config)
    try:
        return Preprocessor(config).run(args.input_vcf, args.output_vcf)
    except ReannotationError as e:
        log("{msg}", {"msg": e}, level=LVL_ERROR)
        return None


def run(args):
    """Program entry point after argument parsing"""
    banner("VCF re-annotation -- vcf_reannotate")
    set_verbosity(args.verbose)
    summary = run_preprocessing(args)
    if summary is None:
        return 1
    log(
        "Preprocessing complete, annotated VCF written to {path}",
        {"path": summary.output_path},
        level=LVL_SUCCESS,
    )
    return 0


def add_arguments(parser):
    """Add the arguments shared with ``vcf-reannotate-pipeline``"""
    parser.add_argument("--version", action="version", version="%%(prog)s %s" % __version__)
    parser.add_argument(
        "--verbose",
        "-v",
        dest="verbose",
        default=False,
        action="store_true",
        help="Enable verbose logging",
    )

    group = parser.add_argument_group("Configuration")
    group.add_argument("--config", help="Path to YAML configuration file")
    group.add_argument(
        "--genome-assembly",
        choices=[a.value for a in GenomeAssembly],
        help="Genome assembly of the input, default: GRCh38",
    )
    group.add_argument("--vep-timeout", type=float, help="VEP timeout in seconds, default: 120")
    group.add_argument("--civic-timeout", type=float, help="CIViC timeout in seconds, default: 60")


def main(argv=None):
    """Program's main entry point (before parsing command line arguments)."""
    parser = argparse.ArgumentParser(description="Re-annotate VCF with gnomAD AF and CIViC")
    add_arguments(parser)

    group = parser.add_argument_group("Input / Output")
    group.add_argument("--input-vcf", required=True, help="Path to input VCF file")
    group.add_argument("--output-vcf", required=True, help="Path to output VCF file")

    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
