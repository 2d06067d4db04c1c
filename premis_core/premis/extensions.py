"""
Characteristics Extension
=========================

Callback invoked by the FOXML to PREMIS stylesheet for each datastream. For
the primary content stream (OBJ) it returns the object's technical metadata
document (FITS output) so the stylesheet can embed it as an
objectCharacteristicsExtension.
"""

import logging
from typing import Any, List, Optional

from lxml import etree

from premis_core.errors import RepositoryError
from premis_core.repository.base import VIEW_ACTION, ObjectStore
from premis_core.transform.xslt import xml_parser

logger = logging.getLogger(__name__)

PRIMARY_DSID = "OBJ"


def _as_text(argument: Any) -> str:
    """Reduce an XPath argument (string or node-set) to its string value."""
    if isinstance(argument, (list, tuple)):
        if not argument:
            return ""
        argument = argument[0]
    if isinstance(argument, etree._Element):
        return "".join(argument.itertext())
    return str(argument)


class CharacteristicsResolver:
    """
    Looks up the technical metadata datastream of an object.

    Args:
        object_store: Store used to load objects and check datastream access
        techmd_dsid: Id of the datastream holding technical metadata
    """

    function_name = "characteristics_extension"

    def __init__(self, object_store: ObjectStore, techmd_dsid: str = "TECHMD"):
        self.object_store = object_store
        self.techmd_dsid = techmd_dsid

    def resolve_extension(self, object_id: str, datastream_id: str) -> Optional['etree._ElementTree']:
        """
        Return the parsed technical metadata for an object's OBJ datastream.

        Returns:
            The parsed document, or None when datastream_id is not OBJ, the
            technical metadata stream is missing or not viewable, or its
            content is not XML
        """
        if datastream_id != PRIMARY_DSID:
            return None

        try:
            obj = self.object_store.load(object_id)
            if obj is None:
                return None

            datastream = obj.get_datastream(self.techmd_dsid)
            if datastream is None or not self.object_store.is_authorized(VIEW_ACTION, datastream):
                return None

            content = datastream.content()
        except RepositoryError as e:
            logger.warning(f"Could not read {self.techmd_dsid} of {object_id}: {e}")
            return None

        try:
            return etree.fromstring(content, xml_parser()).getroottree()
        except (etree.XMLSyntaxError, ValueError) as e:
            logger.warning(f"{self.techmd_dsid} of {object_id} is not well-formed XML: {e}")
            return None

    def xslt_function(self, object_id: Any, datastream_id: Any) -> List['etree._Element']:
        """Stylesheet binding: a one-element node-set, or an empty one."""
        document = self.resolve_extension(_as_text(object_id), _as_text(datastream_id))
        if document is None:
            return []
        return [document.getroot()]

    def functions(self) -> dict:
        """Extension function table for run_transform."""
        return {self.function_name: self.xslt_function}
