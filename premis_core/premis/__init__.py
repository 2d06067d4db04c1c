"""
PREMIS Pipeline
===============

FOXML retrieval, PREMIS generation and HTML rendering.
"""

from premis_core.premis.extensions import CharacteristicsResolver, PRIMARY_DSID
from premis_core.premis.fetcher import fetch_native_export
from premis_core.premis.generator import PremisGenerator, premis_parameters

__all__ = [
    "CharacteristicsResolver",
    "PRIMARY_DSID",
    "fetch_native_export",
    "PremisGenerator",
    "premis_parameters",
]
