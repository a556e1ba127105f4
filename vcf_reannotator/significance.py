# -*- coding: utf-8 -*-
"""Normalization of free-text clinical significance to ``ClinicalSignificance``

The rules are evaluated in order and the first match wins.  Note that the first
rule matches every text containing "pathogenic", so "Likely Pathogenic" is
classified as ``Pathogenic`` and the ``Likely_Pathogenic`` rule is never
reached; the same holds for "Likely Benign" and ``Benign``.  Consequently, the
mapping only ever yields ``Pathogenic``, ``Benign`` or ``VUS``.
"""

import typing

from .document import ClinicalSignificance


def contains_any(*needles: str) -> typing.Callable[[str], bool]:
    """Return predicate checking whether any of ``needles`` is a substring"""

    def predicate(text: str) -> bool:
        return any(needle in text for needle in needles)

    return predicate


def contains_all(*needles: str) -> typing.Callable[[str], bool]:
    """Return predicate checking whether all of ``needles`` are substrings"""

    def predicate(text: str) -> bool:
        return all(needle in text for needle in needles)

    return predicate


#: Ordered ``(predicate, outcome)`` rules on the lower-cased input, first match wins
RULES: typing.Tuple[typing.Tuple[typing.Callable[[str], bool], ClinicalSignificance], ...] = (
    (contains_any("pathogenic", "oncogenic", "sensitiv"), ClinicalSignificance.PATHOGENIC),
    (contains_all("likely", "pathogenic"), ClinicalSignificance.LIKELY_PATHOGENIC),
    (contains_any("benign", "neutral"), ClinicalSignificance.BENIGN),
    (contains_all("likely", "benign"), ClinicalSignificance.LIKELY_BENIGN),
)


def map_significance(raw: typing.Optional[str]) -> ClinicalSignificance:
    """Map raw clinical significance text (or ``None``) to ``ClinicalSignificance``"""
    if raw is None:
        return ClinicalSignificance.VUS
    text = str(raw).lower()
    for predicate, outcome in RULES:
        if predicate(text):
            return outcome
    return ClinicalSignificance.VUS
