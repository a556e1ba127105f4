# -*- coding: utf-8 -*-
"""Lookup of gnomAD frequencies and consequences at the Ensembl VEP REST API

Failures never propagate: a transport error, a timeout, an HTTP error status or
an unparseable body yield ``AnnotationResult()`` and a logged warning.
"""

import math
import typing

from logzero import logger
import requests

from ..document import AnnotationResult, VariantRecord

#: Ensembl REST server for GRCh38
DEFAULT_BASE_URL = "https://rest.ensembl.org"
#: Ensembl REST server for GRCh37
GRCH37_BASE_URL = "https://grch37.rest.ensembl.org"

#: Assemblies served by ``GRCH37_BASE_URL``
GRCH37_ASSEMBLIES = ("grch37", "hg19")

#: Query parameters of each request
QUERY_PARAMS = {"canonical": 1, "vcf_string": 1, "variant_class": 1}

#: Headers of each request
HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

#: Frequency keys in order of preference
FREQUENCY_KEYS = ("gnomADg", "gnomADe")


def base_url_for_assembly(assembly: str) -> str:
    """Return Ensembl REST server for the given assembly"""
    if assembly.lower() in GRCH37_ASSEMBLIES:
        return GRCH37_BASE_URL
    return DEFAULT_BASE_URL


def region_path(variant: VariantRecord) -> str:
    """Return region query path ``{chrom}:{pos}-{pos}:{ref}/{alt}/1`` for ``variant``"""
    return "{chrom}:{pos}-{pos}:{ref}/{alt}/1".format(
        chrom=variant.chrom, pos=variant.pos, ref=variant.ref, alt=variant.alt
    )


def numeric_leaves(value) -> typing.Iterator[float]:
    """Yield all finite non-negative numbers in a (nested) JSON value"""
    if isinstance(value, bool):
        return
    elif isinstance(value, (int, float)):
        if math.isfinite(value) and value >= 0:
            yield float(value)
    elif isinstance(value, dict):
        for inner in value.values():
            yield from numeric_leaves(inner)
    elif isinstance(value, list):
        for inner in value:
            yield from numeric_leaves(inner)


def extract_gnomad_af(result: dict) -> typing.Optional[float]:
    """Return maximal gnomAD frequency from the first colocated variant that has one

    ``gnomADg`` is preferred over ``gnomADe`` of the same colocated variant.
    """
    colocated_variants = result.get("colocated_variants")
    if not isinstance(colocated_variants, list):
        return None
    for colocated in colocated_variants:
        if not isinstance(colocated, dict):
            continue
        frequencies = colocated.get("frequencies")
        if not isinstance(frequencies, dict):
            continue
        for key in FREQUENCY_KEYS:
            if frequencies.get(key) is not None:
                values = list(numeric_leaves(frequencies[key]))
                return max(values) if values else None
    return None


def parse_response(payload) -> AnnotationResult:
    """Parse VEP JSON ``payload`` (object or list of objects) into ``AnnotationResult``"""
    if isinstance(payload, list):
        payload = payload[0] if payload else None
    if not isinstance(payload, dict):
        return AnnotationResult()
    consequence = payload.get("most_severe_consequence")
    return AnnotationResult(
        gnomad_af=extract_gnomad_af(payload),
        consequence=str(consequence) if consequence else None,
    )


class VepClient:
    """Client for the VEP region endpoint, holds configuration only

    Callers are responsible for pacing consecutive calls.
    """

    def __init__(self, base_url: typing.Optional[str] = None, timeout: float = 120):
        #: Base URL of the Ensembl REST server, chosen from the assembly if ``None``
        self.base_url = base_url
        #: Default timeout in seconds
        self.timeout = timeout

    def url_for(self, variant: VariantRecord, assembly: str) -> str:
        base_url = self.base_url or base_url_for_assembly(assembly)
        return "{}/vep/human/region/{}".format(base_url.rstrip("/"), region_path(variant))

    def annotate(
        self,
        variant: VariantRecord,
        assembly: str = "GRCh38",
        timeout: typing.Optional[float] = None,
    ) -> AnnotationResult:
        """Look up ``variant``, return ``AnnotationResult()`` on any failure"""
        url = self.url_for(variant, assembly)
        logger.debug("VEP request: %s", url)
        try:
            response = requests.get(
                url,
                params=QUERY_PARAMS,
                headers=HEADERS,
                timeout=timeout if timeout is not None else self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("VEP API error for %s - %s", variant.describe(), e)
            return AnnotationResult()
        return parse_response(payload)
