"""
Configuration Settings
======================

Configuration dataclasses for the PREMIS pipeline.
"""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Optional, List
import json
import logging
import os

import yaml

logger = logging.getLogger(__name__)

PACKAGED_XSLT_DIR = Path(__file__).resolve().parent.parent / "xslt"


def _build_section(section_cls, name: str, values: dict):
    """Build a config section, rejecting keys it does not define."""
    if not isinstance(values, dict):
        raise ValueError(f"Setting '{name}' must be a mapping")
    known = {f.name for f in fields(section_cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown {name} setting(s): {', '.join(unknown)}")
    return section_cls(**values)


@dataclass
class OrganizationConfig:
    """The organization recorded as the preserving agent."""

    name: str = "Your Organization"
    identifier: str = "some_unique_identifier"
    identifier_type: str = "MARC Organization Codes"
    agent_type: str = "organization"


@dataclass
class RepositoryConfig:
    """Fedora repository connection settings."""

    base_url: str = "http://localhost:8080/fedora"
    username: str = ""
    password: str = ""
    timeout: Optional[float] = None  # None waits indefinitely
    granted_actions: List[str] = field(default_factory=lambda: ["view", "download"])


@dataclass
class TransformConfig:
    """Stylesheet locations."""

    xslt_dir: str = ""  # Empty means use the packaged stylesheets
    premis_xslt: str = "foxml_to_premis.xsl"
    html_xslt: str = "premis_to_html.xsl"

    @property
    def stylesheet_dir(self) -> Path:
        return Path(self.xslt_dir) if self.xslt_dir else PACKAGED_XSLT_DIR

    @property
    def premis_stylesheet(self) -> Path:
        return self.stylesheet_dir / self.premis_xslt

    @property
    def html_stylesheet(self) -> Path:
        return self.stylesheet_dir / self.html_xslt


@dataclass
class PremisConfig:
    """
    Complete pipeline configuration.

    Contains:
    - Organization agent details written into PREMIS
    - Repository connection settings
    - Stylesheet locations
    - The datastream holding technical metadata (FITS)

    Example:
        config = PremisConfig()
        config.organization.name = "Example University Library"
        save_config(config, Path("premis.yaml"))
    """

    organization: OrganizationConfig = field(default_factory=OrganizationConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    transform: TransformConfig = field(default_factory=TransformConfig)

    techmd_dsid: str = "TECHMD"
    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'organization': asdict(self.organization),
            'repository': asdict(self.repository),
            'transform': asdict(self.transform),
            'techmd_dsid': self.techmd_dsid,
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PremisConfig':
        """Create from dictionary."""
        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")

        config = cls()

        if 'organization' in data:
            config.organization = _build_section(OrganizationConfig, 'organization', data['organization'])
        if 'repository' in data:
            config.repository = _build_section(RepositoryConfig, 'repository', data['repository'])
        if 'transform' in data:
            config.transform = _build_section(TransformConfig, 'transform', data['transform'])

        if 'techmd_dsid' in data:
            config.techmd_dsid = data['techmd_dsid']
        if 'log_level' in data:
            config.log_level = data['log_level']

        return config


def load_config(config_path: Path) -> PremisConfig:
    """
    Load configuration from file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config_path: Path to config file

    Returns:
        PremisConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is not supported or a setting is unknown
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f) or {}
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    logger.info(f"Loaded configuration from {config_path}")
    return PremisConfig.from_dict(data)


def save_config(config: PremisConfig, config_path: Path) -> None:
    """
    Save configuration to file.

    Supports JSON and YAML formats based on file extension.

    Raises:
        ValueError: If file format is not supported or a setting is unknown
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()
    data = config.to_dict()

    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config format: {suffix}")

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def apply_env_overrides(config: PremisConfig) -> PremisConfig:
    """Override settings from PREMIS_* environment variables."""
    env = os.environ
    if env.get("PREMIS_FEDORA_URL"):
        config.repository.base_url = env["PREMIS_FEDORA_URL"]
    if env.get("PREMIS_FEDORA_USER"):
        config.repository.username = env["PREMIS_FEDORA_USER"]
    if env.get("PREMIS_FEDORA_PASSWORD"):
        config.repository.password = env["PREMIS_FEDORA_PASSWORD"]
    if env.get("PREMIS_ORGANIZATION_NAME"):
        config.organization.name = env["PREMIS_ORGANIZATION_NAME"]
    if env.get("PREMIS_TECHMD_DSID"):
        config.techmd_dsid = env["PREMIS_TECHMD_DSID"]
    if env.get("PREMIS_LOG_LEVEL"):
        config.log_level = env["PREMIS_LOG_LEVEL"]
    return config


def get_default_config() -> PremisConfig:
    """Get default configuration."""
    return PremisConfig()
