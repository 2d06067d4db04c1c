"""FOXML export retrieval."""

import logging
from typing import Optional

from premis_core.errors import RepositoryError
from premis_core.repository.base import FOXML_FORMAT, MIGRATE_CONTEXT, RepositoryService

logger = logging.getLogger(__name__)


def fetch_native_export(repository: RepositoryService, object_id: str) -> Optional[str]:
    """
    Fetch the FOXML export of an object in the migrate context.

    The migrate context inlines managed datastream content instead of
    referencing it by URL.

    Returns:
        The FOXML document as a string, or None if the export failed
    """
    try:
        return repository.export(
            object_id,
            format=FOXML_FORMAT,
            context=MIGRATE_CONTEXT,
            encoding="UTF-8",
        )
    except RepositoryError as e:
        logger.error(f"Error exporting FOXML for {object_id}: {e}")
        return None
