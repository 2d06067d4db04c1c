"""
Configuration Management
========================

Configuration utilities for the PREMIS pipeline.
"""

from premis_core.config.settings import (
    PremisConfig,
    OrganizationConfig,
    RepositoryConfig,
    TransformConfig,
    load_config,
    save_config,
    apply_env_overrides,
    get_default_config,
)

__all__ = [
    "PremisConfig",
    "OrganizationConfig",
    "RepositoryConfig",
    "TransformConfig",
    "load_config",
    "save_config",
    "apply_env_overrides",
    "get_default_config",
]
