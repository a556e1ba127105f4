# -*- coding: utf-8 -*-
"""Shared fixtures for the apps unit tests"""

import textwrap

import pytest


@pytest.fixture
def no_pacing_config(tmp_path):
    """Path to configuration file disabling pacing"""
    path = tmp_path / "config.yaml"
    path.write_text(
        textwrap.dedent(
            """
            vep_interval: 0
            civic_interval: 0
            """
        ).lstrip()
    )
    return str(path)


@pytest.fixture
def mock_services(mocker):
    """Patch VEP and CIViC HTTP calls with successful responses"""
    vep_response = mocker.MagicMock()
    vep_response.json.return_value = [
        {
            "most_severe_consequence": "missense_variant",
            "colocated_variants": [{"frequencies": {"gnomADg": {"T": 0.25}}}],
        }
    ]
    civic_response = mocker.MagicMock()
    civic_response.json.return_value = {
        "data": {"variants": {"edges": [{"node": {"clinicalSignificance": "Benign"}}]}}
    }
    return (
        mocker.patch("vcf_reannotator.clients.vep.requests.get", return_value=vep_response),
        mocker.patch("vcf_reannotator.clients.civic.requests.post", return_value=civic_response),
    )
