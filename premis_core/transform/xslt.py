"""
XSLT Transformer
================

Runs a single XSLT stylesheet over an XML string.

Extension functions are handed to the engine per call as a table of
name -> callable, registered in EXTENSION_NAMESPACE. Stylesheets call them as
``ext:name(...)`` with ``xmlns:ext="urn:premis-core:extensions"``.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from lxml import etree

from premis_core.errors import StylesheetError

logger = logging.getLogger(__name__)

EXTENSION_NAMESPACE = "urn:premis-core:extensions"

# FOXML exports carry inline base64 content and can exceed libxml2's limits
_PARSER_OPTIONS = {"huge_tree": True}


def xml_parser() -> 'etree.XMLParser':
    """Parser used for transform input and documents handed back by callbacks."""
    return etree.XMLParser(**_PARSER_OPTIONS)


def _bind(function: Callable) -> Callable:
    """Drop the engine's context argument so callbacks see only call-site args."""

    def call(_context, *args):
        return function(*args)

    call.__name__ = getattr(function, "__name__", "extension")
    return call


def load_xslt_transform(
    xslt_path: Path,
    extensions: Optional[Mapping[str, Callable]] = None,
) -> 'etree.XSLT':
    """
    Load and compile an XSLT stylesheet from file.

    Args:
        xslt_path: Path to the XSLT stylesheet file
        extensions: Optional mapping of function name -> callable exposed to
            the stylesheet in EXTENSION_NAMESPACE

    Returns:
        Compiled XSLT transform

    Raises:
        StylesheetError: If the stylesheet is missing, malformed or invalid
    """
    xslt_path = Path(xslt_path)
    if not xslt_path.exists():
        raise StylesheetError(f"XSLT stylesheet not found: {xslt_path}")

    extension_table = {
        (EXTENSION_NAMESPACE, name): _bind(function)
        for name, function in (extensions or {}).items()
    }

    logger.info(f"Loading XSLT stylesheet: {xslt_path}")
    try:
        xslt_doc = etree.parse(str(xslt_path))
        transform = etree.XSLT(xslt_doc, extensions=extension_table)
    except (etree.XMLSyntaxError, etree.XSLTParseError) as e:
        raise StylesheetError(f"Invalid XSLT stylesheet {xslt_path}: {e}") from e
    return transform


def xslt_parameters(parameters: Optional[Mapping[str, Mapping[str, Any]]]) -> Dict[str, Any]:
    """
    Flatten namespaced parameters into keyword arguments for the engine.

    Args:
        parameters: Mapping of namespace URI ("" for none) to a mapping of
            parameter name -> value

    Returns:
        Dictionary of quoted string parameters keyed by name, or by
        ``{uri}name`` for parameters in a namespace
    """
    flattened = {}
    for namespace, values in (parameters or {}).items():
        for name, value in values.items():
            key = f"{{{namespace}}}{name}" if namespace else name
            flattened[key] = etree.XSLT.strparam("" if value is None else str(value))
    return flattened


def run_transform(
    input_xml: str,
    stylesheet_path: Path,
    functions: Optional[Mapping[str, Callable]] = None,
    parameters: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> str:
    """
    Transform an XML string with a stylesheet.

    Args:
        input_xml: Source document as a string
        stylesheet_path: Path to the XSLT stylesheet
        functions: Callbacks the stylesheet may invoke, keyed by name
        parameters: Namespaced stylesheet parameters

    Returns:
        Serialized transform output. Empty when the input cannot be parsed or
        the transform fails; callers treat that as "no content".

    Raises:
        StylesheetError: If the stylesheet cannot be loaded
    """
    transform = load_xslt_transform(stylesheet_path, functions)

    try:
        xml_doc = etree.fromstring((input_xml or "").encode("utf-8"), xml_parser()).getroottree()
    except etree.XMLSyntaxError as e:
        logger.warning(f"Input for {Path(stylesheet_path).name} is not well-formed XML: {e}")
        return ""

    logger.info(f"Applying XSLT transformation: {Path(stylesheet_path).name}")
    try:
        result = transform(xml_doc, **xslt_parameters(parameters))
    except Exception as e:
        logger.error(f"XSLT transformation failed: {e}")
        logger.debug(f"Error log: {transform.error_log}")
        return ""

    for entry in transform.error_log:
        logger.debug(f"  XSLT warning: {entry}")

    return str(result)
