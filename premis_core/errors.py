"""
Exceptions
==========

Error types raised by the PREMIS pipeline.

Only ObjectNotFoundError is meant to reach callers of the pipeline;
RepositoryError is recovered inside the fetcher and the extension resolver,
and StylesheetError signals a broken installation or configuration.
"""

from typing import Optional


class PremisError(Exception):
    """Base class for all premis_core errors."""


class ObjectNotFoundError(PremisError):
    """The native export of an object could not be retrieved."""

    def __init__(self, object_id: str, message: Optional[str] = None):
        self.object_id = object_id
        super().__init__(message or f"Object not found: {object_id}")


class RepositoryError(PremisError):
    """A repository call failed at the transport or API level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class StylesheetError(PremisError):
    """An XSLT stylesheet is missing, malformed or fails to compile."""
