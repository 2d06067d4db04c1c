"""
PREMIS Generator
================

Two-stage pipeline:

    FOXML export --foxml_to_premis.xsl--> PREMIS XML --premis_to_html.xsl--> HTML

The first stage receives the organization agent details and the repository
version as stylesheet parameters, and may call back into
CharacteristicsResolver to embed technical metadata.
"""

import logging
from html import escape
from typing import Dict, Optional

from premis_core.config.settings import PremisConfig
from premis_core.errors import ObjectNotFoundError, RepositoryError
from premis_core.premis.extensions import CharacteristicsResolver
from premis_core.premis.fetcher import fetch_native_export
from premis_core.repository.base import ObjectStore, RepositoryService
from premis_core.transform.xslt import run_transform

logger = logging.getLogger(__name__)


def premis_parameters(config: PremisConfig, repository_version: str) -> Dict[str, Dict[str, str]]:
    """Stylesheet parameters for the FOXML to PREMIS stage, in the default namespace."""
    organization = config.organization
    return {
        "": {
            "premis_agent_name_organization": organization.name,
            "premis_agent_identifier_organization": organization.identifier,
            "premis_agent_identifier_type": organization.identifier_type,
            "premis_agent_type_organization": organization.agent_type,
            "fedora_commons_version": repository_version,
        }
    }


def download_filename(object_id: str) -> str:
    """File name offered for an object's PREMIS download."""
    return f"{object_id.replace(':', '_')}_premis.xml"


class PremisGenerator:
    """
    Generates PREMIS XML and its HTML rendering for repository objects.

    Args:
        repository: Service used for FOXML export and repository description
        object_store: Store used by the characteristics extension callback
        config: Pipeline configuration (defaults when omitted)
    """

    def __init__(self,
                 repository: RepositoryService,
                 object_store: ObjectStore,
                 config: Optional[PremisConfig] = None):
        self.repository = repository
        self.config = config or PremisConfig()
        self.resolver = CharacteristicsResolver(object_store, self.config.techmd_dsid)

    def repository_version(self) -> str:
        """Query the repository version; empty if the repository cannot say."""
        try:
            description = self.repository.describe_repository()
        except RepositoryError as e:
            logger.warning(f"Could not describe repository: {e}")
            return ""
        return str(description.get("repositoryVersion", ""))

    def generate_premis(self, object_id: str) -> str:
        """
        Generate the PREMIS document for an object.

        Raises:
            ObjectNotFoundError: If the FOXML export cannot be retrieved
            StylesheetError: If the stylesheet cannot be loaded
        """
        foxml = fetch_native_export(self.repository, object_id)
        if foxml is None:
            raise ObjectNotFoundError(object_id)

        logger.info(f"Generating PREMIS for {object_id}")
        return run_transform(
            foxml,
            self.config.transform.premis_stylesheet,
            functions=self.resolver.functions(),
            parameters=premis_parameters(self.config, self.repository_version()),
        )

    def render_html(self, object_id: str) -> str:
        """
        Render the PREMIS document for an object as an HTML fragment.

        Raises:
            ObjectNotFoundError: If the FOXML export cannot be retrieved
        """
        premis = self.generate_premis(object_id)
        return run_transform(premis, self.config.transform.html_stylesheet)

    def render_tab(self, object_id: str, download_url: Optional[str] = None) -> str:
        """HTML fragment for an object's PREMIS tab, with an optional download link."""
        html = self.render_html(object_id)
        link = ""
        if download_url:
            link = f'<p class="premis-download"><a href="{escape(download_url)}">Download PREMIS</a></p>\n'
        return f'<div class="premis-tab">\n{link}{html}</div>\n'
