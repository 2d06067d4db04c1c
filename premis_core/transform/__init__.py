"""
Transformation Framework
========================

XSLT execution for the PREMIS pipeline.

Components:
- run_transform: Transform an XML string with a stylesheet
- load_xslt_transform: Load XSLT from file with extension functions
- xslt_parameters: Flatten namespaced stylesheet parameters
"""

from premis_core.transform.xslt import (
    EXTENSION_NAMESPACE,
    load_xslt_transform,
    run_transform,
    xslt_parameters,
)

__all__ = [
    "EXTENSION_NAMESPACE",
    "load_xslt_transform",
    "run_transform",
    "xslt_parameters",
]
