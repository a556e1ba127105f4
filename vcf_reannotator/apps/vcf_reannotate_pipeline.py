# -*- coding: utf-8 -*-
"""Complete pipeline: VCF re-annotation followed by a downstream command

Phase 1 writes the cleaned VCF.  Phase 2 runs the downstream command (e.g., the
enrichment and reporting pipeline reading ``gnomAD_AF`` and ``CLNSIG``) on the
cleaned VCF.  Phase 2 is only started when phase 1 succeeded.

Usage::

    $ vcf-reannotate-pipeline --input-vcf IN.vcf --cleaned-vcf CLEAN.vcf \\
        --output-base final --downstream-cmd 'Rscript koios.R {cleaned_vcf} {output_base}'
"""

import argparse
import re
import shlex
import subprocess
import sys

from .impl.logging import (
    LVL_ERROR,
    LVL_IMPORTANT,
    LVL_INFO,
    LVL_SUCCESS,
    banner,
    log,
    set_verbosity,
)
from .vcf_reannotate import add_arguments, run_preprocessing

#: Default allele frequency threshold passed to the downstream command
DEFAULT_AF_THRESHOLD = 0.01

#: Placeholders in the downstream command
PATTERN_PLACEHOLDER = re.compile(r"\{(cleaned_vcf|output_base|af_threshold)\}")


def build_downstream_cmd(template, cleaned_vcf, output_base, af_threshold):
    """Return downstream command as argument list with placeholders filled in

    Only ``{cleaned_vcf}``, ``{output_base}`` and ``{af_threshold}`` are replaced, other
    braces are kept as they are.
    """
    values = {
        "cleaned_vcf": str(cleaned_vcf),
        "output_base": str(output_base),
        "af_threshold": str(af_threshold),
    }
    return [
        PATTERN_PLACEHOLDER.sub(lambda m: values[m.group(1)], token)
        for token in shlex.split(template)
    ]


def run_downstream(args):
    """Run the downstream command, return its exit code"""
    cmd = build_downstream_cmd(
        args.downstream_cmd, args.output_vcf, args.output_base, args.af_threshold
    )
    log("running {cmd}", {"cmd": " ".join(map(shlex.quote, cmd))}, level=LVL_INFO)
    try:
        return subprocess.run(cmd, text=True).returncode
    except OSError as e:
        log("could not start downstream command: {msg}", {"msg": e}, level=LVL_ERROR)
        return 1


def run(args):
    """Program entry point after argument parsing"""
    banner("COMPLETE CANCER VARIANT ANNOTATION & REPORTING PIPELINE")
    set_verbosity(args.verbose)

    log("PHASE 1: VCF Validation and Re-annotation", level=LVL_IMPORTANT)
    summary = run_preprocessing(args)
    if summary is None:
        log("Pipeline aborted.", level=LVL_ERROR)
        return 1

    if not args.downstream_cmd:
        log("No downstream command given, skipping phase 2", level=LVL_INFO)
    else:
        log("PHASE 2: Downstream Enrichment", level=LVL_IMPORTANT)
        retcode = run_downstream(args)
        if retcode:
            log(
                "downstream command failed with exit code {code}",
                {"code": retcode},
                level=LVL_ERROR,
            )
            log("Pipeline aborted.", level=LVL_ERROR)
            return retcode

    log("Cleaned VCF: {path}", {"path": summary.output_path})
    log("Variants: {n}, with gnomAD AF: {n_af}", {"n": summary.n_records, "n_af": summary.n_with_af})
    log("All phases completed successfully.", level=LVL_SUCCESS)
    return 0


def main(argv=None):
    """Program entry point including command line argument parsing"""
    parser = argparse.ArgumentParser(description="Re-annotate VCF and run downstream pipeline")
    add_arguments(parser)

    group = parser.add_argument_group("Input / Output")
    group.add_argument("--input-vcf", required=True, help="Path to raw input VCF file")
    group.add_argument(
        "--cleaned-vcf", dest="output_vcf", required=True, help="Path to cleaned VCF file"
    )
    group.add_argument(
        "--output-base", default="final", help="Base name of downstream outputs, default: final"
    )

    group = parser.add_argument_group("Downstream")
    group.add_argument(
        "--downstream-cmd",
        help=(
            "Command to run on the cleaned VCF; {cleaned_vcf}, {output_base} and {af_threshold} "
            "are replaced"
        ),
    )
    group.add_argument(
        "--af-threshold",
        type=float,
        default=DEFAULT_AF_THRESHOLD,
        help="Allele frequency threshold for the downstream filter, default: %(default)s",
    )

    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
