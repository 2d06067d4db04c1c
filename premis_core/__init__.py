"""
PREMIS Core Library
===================

Preservation metadata for Fedora Commons objects:

- FOXML export retrieval from the repository
- FOXML to PREMIS transformation (XSLT)
- Technical metadata (FITS) embedded as a characteristics extension
- PREMIS to HTML rendering for display

Architecture
------------

    premis_core/
    ├── config/        - Configuration management
    ├── repository/    - Repository interfaces and Fedora REST client
    ├── transform/     - XSLT execution with extension functions
    ├── premis/        - Fetcher, extension resolver, generator
    ├── xslt/          - Stylesheets
    ├── api.py         - REST API (FastAPI)
    └── cli.py         - Command line

Usage
-----

    from premis_core import FedoraRepository, PremisGenerator, load_config

    config = load_config(Path("premis.yaml"))
    repository = FedoraRepository.from_config(config.repository)
    generator = PremisGenerator(repository, repository, config)

    premis_xml = generator.generate_premis("islandora:1")
    html = generator.render_html("islandora:1")
"""

__version__ = "1.0.0"

from premis_core.errors import (
    PremisError,
    ObjectNotFoundError,
    RepositoryError,
    StylesheetError,
)

from premis_core.config.settings import (
    PremisConfig,
    OrganizationConfig,
    RepositoryConfig,
    TransformConfig,
    load_config,
    save_config,
)

from premis_core.repository.base import (
    Datastream,
    ObjectStore,
    RepositoryObject,
    RepositoryService,
)

from premis_core.repository.fedora import FedoraRepository

from premis_core.transform.xslt import run_transform

from premis_core.premis.extensions import CharacteristicsResolver
from premis_core.premis.fetcher import fetch_native_export
from premis_core.premis.generator import PremisGenerator

__all__ = [
    # Version
    "__version__",
    # Errors
    "PremisError",
    "ObjectNotFoundError",
    "RepositoryError",
    "StylesheetError",
    # Config
    "PremisConfig",
    "OrganizationConfig",
    "RepositoryConfig",
    "TransformConfig",
    "load_config",
    "save_config",
    # Repository
    "Datastream",
    "ObjectStore",
    "RepositoryObject",
    "RepositoryService",
    "FedoraRepository",
    # Pipeline
    "run_transform",
    "CharacteristicsResolver",
    "fetch_native_export",
    "PremisGenerator",
]
