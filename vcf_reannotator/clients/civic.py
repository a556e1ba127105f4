# -*- coding: utf-8 -*-
"""Lookup of clinical significance at the CIViC GraphQL API

The lookup is by coordinate only: start and end position equal the variant
position on GRCh38, chromosome and gene are not part of the query.  Variants at
the same numeric position on different chromosomes therefore share results.
The first edge of the first page wins.
"""

import typing

from logzero import logger
import requests

from ..document import VariantRecord

#: CIViC API base URL
DEFAULT_BASE_URL = "https://civicdb.org/api"

#: Headers of each request
HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

#: GraphQL query template, ``{position}`` is filled in
QUERY_TEMPLATE = """
{{
  variants(
    entrezSymbol: "*"
    startPosition: {position}
    endPosition: {position}
    referenceBuild: GRCH38
  ) {{
    edges {{
      node {{
        clinicalSignificance
        variantTypes {{
          name
        }}
      }}
    }}
  }}
}}
"""


def build_query(variant: VariantRecord) -> str:
    """Return GraphQL query document for ``variant``"""
    return QUERY_TEMPLATE.format(position=variant.pos)


def extract_significance(payload) -> typing.Optional[str]:
    """Return ``data.variants.edges[0].node.clinicalSignificance`` or ``None``"""
    try:
        edges = payload["data"]["variants"]["edges"]
        if not edges:
            return None
        significance = edges[0]["node"]["clinicalSignificance"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(significance, list):
        significance = significance[0] if significance else None
    if significance is None or significance == "":
        return None
    return str(significance)


class CivicClient:
    """Client for the CIViC GraphQL endpoint, holds configuration only

    Callers are responsible for pacing consecutive calls.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 60):
        #: Base URL of the CIViC API
        self.base_url = base_url
        #: Default timeout in seconds
        self.timeout = timeout

    @property
    def url(self) -> str:
        return "{}/graphql".format(self.base_url.rstrip("/"))

    def annotate(
        self, variant: VariantRecord, timeout: typing.Optional[float] = None
    ) -> typing.Optional[str]:
        """Return raw clinical significance of ``variant`` or ``None`` if unknown"""
        try:
            response = requests.post(
                self.url,
                json={"query": build_query(variant)},
                headers=HEADERS,
                timeout=timeout if timeout is not None else self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("CIViC API error for %s - %s", variant.describe(), e)
            return None
        return extract_significance(payload)
