"""
Fedora Repository Client
========================

Fedora Commons 3.x REST API client implementing both RepositoryService and
ObjectStore.

Usage:
    repository = FedoraRepository.from_config(config.repository)
    foxml = repository.export("islandora:1")
    obj = repository.load("islandora:1")
    techmd = obj.get_datastream("TECHMD")
"""

import logging
from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

import requests
from lxml import etree

from premis_core.errors import RepositoryError
from premis_core.repository.base import (
    FOXML_FORMAT,
    MIGRATE_CONTEXT,
    Datastream,
    ObjectStore,
    RepositoryObject,
    RepositoryService,
)

logger = logging.getLogger(__name__)

_DENIED_STATUS = (401, 403)


def _quote(value: str) -> str:
    return quote(value, safe=":")


def _profile_fields(content: bytes) -> Dict[str, str]:
    """Read the child elements of a Fedora profile document into a dict."""
    try:
        root = etree.fromstring(content)
    except etree.XMLSyntaxError as e:
        raise RepositoryError(f"Unreadable response from repository: {e}") from e

    fields = {}
    for child in root:
        if not isinstance(child.tag, str):
            continue
        fields[etree.QName(child).localname] = (child.text or "").strip()
    return fields


class FedoraDatastream(Datastream):
    """Datastream whose content is fetched on demand."""

    def __init__(self, repository: 'FedoraRepository', object_id: str, dsid: str,
                 label: str = "", mime_type: str = "", state: str = "A"):
        self.repository = repository
        self.object_id = object_id
        self.id = dsid
        self.label = label
        self.mime_type = mime_type
        self.state = state

    @staticmethod
    def path_for(object_id: str, dsid: str) -> str:
        return f"objects/{_quote(object_id)}/datastreams/{_quote(dsid)}/content"

    @property
    def content_path(self) -> str:
        return self.path_for(self.object_id, self.id)

    def content(self) -> bytes:
        return self.repository.request("GET", self.content_path).content

    def __repr__(self) -> str:
        return f"FedoraDatastream({self.object_id!r}, {self.id!r})"


class FedoraObject(RepositoryObject):
    """Object loaded from the repository; datastreams are looked up lazily."""

    def __init__(self, repository: 'FedoraRepository', object_id: str, label: str = ""):
        self.repository = repository
        self.id = object_id
        self.label = label

    def get_datastream(self, dsid: str) -> Optional[FedoraDatastream]:
        response = self.repository.request(
            "GET",
            f"objects/{_quote(self.id)}/datastreams/{_quote(dsid)}",
            params={"format": "xml"},
            missing_ok=True,
        )
        if response is None:
            return None

        profile = _profile_fields(response.content)
        return FedoraDatastream(
            self.repository,
            self.id,
            dsid,
            label=profile.get("dsLabel", ""),
            mime_type=profile.get("dsMIME", ""),
            state=profile.get("dsState", "A"),
        )

    def __repr__(self) -> str:
        return f"FedoraObject({self.id!r})"


class FedoraRepository(RepositoryService, ObjectStore):
    """
    Fedora 3 REST API client.

    Access checks combine the actions granted to this client by configuration
    with the repository's own policy enforcement: a datastream whose content
    request is refused (401/403) is treated as unauthorized.
    """

    def __init__(self,
                 base_url: str,
                 username: str = "",
                 password: str = "",
                 timeout: Optional[float] = None,
                 granted_actions: Iterable[str] = ("view", "download"),
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.granted_actions = set(granted_actions)
        self.session = session or requests.Session()
        if username:
            self.session.auth = (username, password)

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> 'FedoraRepository':
        """Create a client from a RepositoryConfig."""
        return cls(
            config.base_url,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
            granted_actions=config.granted_actions,
            session=session,
        )

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                missing_ok: bool = False) -> Optional[requests.Response]:
        """
        Send a request to the REST API.

        Args:
            method: HTTP method
            path: Path relative to the repository base URL
            params: Query parameters
            missing_ok: Return None instead of raising on 404

        Raises:
            RepositoryError: On connection errors and unexpected status codes
        """
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RepositoryError(f"{method} {url} failed: {e}") from e

        if response.status_code == 404 and missing_ok:
            return None
        if not response.ok:
            raise RepositoryError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    # RepositoryService

    def export(self,
               object_id: str,
               format: str = FOXML_FORMAT,
               context: str = MIGRATE_CONTEXT,
               encoding: str = "UTF-8") -> str:
        response = self.request(
            "GET",
            f"objects/{_quote(object_id)}/export",
            params={"format": format, "context": context, "encoding": encoding},
        )
        response.encoding = encoding
        return response.text

    def describe_repository(self) -> Dict[str, Any]:
        response = self.request("GET", "describe", params={"xml": "true"})
        return _profile_fields(response.content)

    # ObjectStore

    def load(self, object_id: str) -> Optional[FedoraObject]:
        response = self.request(
            "GET", f"objects/{_quote(object_id)}", params={"format": "xml"}, missing_ok=True
        )
        if response is None:
            logger.debug(f"Object {object_id} does not exist")
            return None

        profile = _profile_fields(response.content)
        return FedoraObject(self, object_id, label=profile.get("objLabel", ""))

    def is_authorized(self, action: str, datastream: Datastream) -> bool:
        if action not in self.granted_actions:
            return False
        if datastream.state == "D":
            return False

        url = f"{self.base_url}/{FedoraDatastream.path_for(datastream.object_id, datastream.id)}"
        try:
            response = self.session.head(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Access check for {datastream.object_id}/{datastream.id} failed: {e}")
            return False
        if response.status_code in _DENIED_STATUS:
            return False
        if not response.ok:
            logger.warning(
                f"Access check for {datastream.object_id}/{datastream.id} returned {response.status_code}"
            )
            return False
        return True
