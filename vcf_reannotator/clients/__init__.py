# -*- coding: utf-8 -*-
"""Clients for the external annotation services"""

from .civic import CivicClient
from .vep import VepClient

__all__ = ["CivicClient", "VepClient"]
