#!/usr/bin/env python3
"""
PREMIS REST API

FastAPI application exposing the PREMIS pipeline to a host UI:

- GET /api/v1/objects/{object_id}/premis - Download PREMIS XML
- GET /api/v1/objects/{object_id}/premis/view - PREMIS tab as HTML

Callers are expected to have checked view/download permission for the object
before routing a request here.

Usage:
    # Start the API server
    uvicorn premis_core.api:app --host 0.0.0.0 --port 8000

    # Or programmatically
    from premis_core.api import create_app
    app = create_app(generator=my_generator)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, Response

from premis_core import __version__
from premis_core.config.settings import PremisConfig, apply_env_overrides, load_config
from premis_core.errors import ObjectNotFoundError, StylesheetError
from premis_core.premis.generator import PremisGenerator, download_filename
from premis_core.repository.fedora import FedoraRepository

logger = logging.getLogger(__name__)


def config_from_environment() -> PremisConfig:
    """Load the file named by PREMIS_CONFIG (if any), then apply env overrides."""
    config_path = os.environ.get("PREMIS_CONFIG")
    config = load_config(Path(config_path)) if config_path else PremisConfig()
    return apply_env_overrides(config)


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name and the UTF-8 name (RFC 6266)."""
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "_").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def create_app(generator: Optional[PremisGenerator] = None,
               config: Optional[PremisConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        generator: Pipeline to serve; built from config against Fedora when omitted
        config: Configuration used when building the generator; read from
            the environment when omitted
    """
    if generator is None:
        config = config or config_from_environment()
        repository = FedoraRepository.from_config(config.repository)
        generator = PremisGenerator(repository, repository, config)

    app = FastAPI(
        title="PREMIS API",
        description="PREMIS preservation metadata for Fedora Commons objects.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ========================================================================
    # PREMIS ENDPOINTS
    # ========================================================================

    @app.get("/api/v1/objects/{object_id}/premis", tags=["PREMIS"])
    def download_premis(object_id: str):
        """Download the PREMIS XML for an object."""
        try:
            premis = generator.generate_premis(object_id)
        except ObjectNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except StylesheetError as e:
            logger.error(f"PREMIS stylesheet error: {e}")
            raise HTTPException(status_code=500, detail="PREMIS stylesheet unavailable")

        return Response(
            content=premis,
            media_type="application/xml",
            headers={
                "Content-Disposition": content_disposition(download_filename(object_id))
            },
        )

    @app.get("/api/v1/objects/{object_id}/premis/view", response_class=HTMLResponse, tags=["PREMIS"])
    def view_premis(object_id: str):
        """PREMIS tab markup for an object."""
        try:
            html = generator.render_tab(
                object_id, download_url=f"/api/v1/objects/{object_id}/premis"
            )
        except ObjectNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except StylesheetError as e:
            logger.error(f"PREMIS stylesheet error: {e}")
            raise HTTPException(status_code=500, detail="PREMIS stylesheet unavailable")

        return HTMLResponse(content=html)

    # ========================================================================
    # HEALTH & INFO ENDPOINTS
    # ========================================================================

    @app.get("/api/v1/health", tags=["System"])
    def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }

    @app.get("/api/v1/info", tags=["System"])
    def get_info():
        """Get API configuration and stylesheet availability."""
        transform = generator.config.transform
        return {
            "name": "premis-core",
            "version": __version__,
            "organization": {
                "name": generator.config.organization.name,
                "identifier": generator.config.organization.identifier,
                "identifier_type": generator.config.organization.identifier_type,
                "agent_type": generator.config.organization.agent_type,
            },
            "techmd_dsid": generator.config.techmd_dsid,
            "stylesheets": {
                "premis": transform.premis_stylesheet.exists(),
                "html": transform.html_stylesheet.exists(),
            },
        }

    return app


# Create default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
