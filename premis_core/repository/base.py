"""
Repository Interfaces
=====================

Abstract interfaces for the two repository collaborators of the pipeline:

- RepositoryService: object export and repository description
- ObjectStore: object/datastream lookup and access checks

FedoraRepository implements both against the Fedora 3 REST API; tests use
in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


FOXML_FORMAT = "info:fedora/fedora-system:FOXML-1.1"
MIGRATE_CONTEXT = "migrate"

VIEW_ACTION = "view"
DOWNLOAD_ACTION = "download"


class Datastream(ABC):
    """A named content stream attached to a repository object."""

    id: str
    object_id: str
    label: str = ""
    mime_type: str = ""
    state: str = "A"

    @abstractmethod
    def content(self) -> bytes:
        """
        Fetch the raw datastream content.

        Raises:
            RepositoryError: If the content cannot be retrieved
        """
        pass


class RepositoryObject(ABC):
    """A repository object exposing datastream lookup by id."""

    id: str

    @abstractmethod
    def get_datastream(self, dsid: str) -> Optional[Datastream]:
        """Return the datastream with this id, or None if the object has none."""
        pass

    def __contains__(self, dsid: str) -> bool:
        return self.get_datastream(dsid) is not None


class RepositoryService(ABC):
    """Remote calls made against the repository service."""

    @abstractmethod
    def export(
        self,
        object_id: str,
        format: str = FOXML_FORMAT,
        context: str = MIGRATE_CONTEXT,
        encoding: str = "UTF-8",
    ) -> str:
        """
        Export an object in a serialization format.

        Returns:
            The exported XML as a string

        Raises:
            RepositoryError: On any transport or API failure
        """
        pass

    @abstractmethod
    def describe_repository(self) -> Dict[str, Any]:
        """
        Describe the repository.

        Returns:
            Mapping containing at least ``repositoryVersion``

        Raises:
            RepositoryError: On any transport or API failure
        """
        pass


class ObjectStore(ABC):
    """Object loading and datastream-level access checks."""

    @abstractmethod
    def load(self, object_id: str) -> Optional[RepositoryObject]:
        """
        Load an object.

        Returns:
            The object, or None if it does not exist

        Raises:
            RepositoryError: On any transport or API failure
        """
        pass

    @abstractmethod
    def is_authorized(self, action: str, datastream: Datastream) -> bool:
        """Check whether the current caller may perform ``action`` on a datastream."""
        pass
