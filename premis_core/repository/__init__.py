"""
Repository Access
=================

Interfaces to the digital repository and a Fedora 3 REST implementation.
"""

from premis_core.repository.base import (
    DOWNLOAD_ACTION,
    FOXML_FORMAT,
    MIGRATE_CONTEXT,
    VIEW_ACTION,
    Datastream,
    ObjectStore,
    RepositoryObject,
    RepositoryService,
)
from premis_core.repository.fedora import (
    FedoraDatastream,
    FedoraObject,
    FedoraRepository,
)

__all__ = [
    "DOWNLOAD_ACTION",
    "FOXML_FORMAT",
    "MIGRATE_CONTEXT",
    "VIEW_ACTION",
    "Datastream",
    "ObjectStore",
    "RepositoryObject",
    "RepositoryService",
    "FedoraDatastream",
    "FedoraObject",
    "FedoraRepository",
]
