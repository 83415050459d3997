"""Custom exception hierarchy for the ExpBoard search pipeline."""

from __future__ import annotations


class ExpBoardError(Exception):
    """Base exception for all ExpBoard errors."""


class UpstreamServiceError(ExpBoardError):
    """Raised when an external service fails or returns an unusable response."""


class UpstreamTimeoutError(UpstreamServiceError):
    """Raised when an external service does not answer within the request timeout."""


class GeocodingError(UpstreamServiceError):
    """Raised when the geocoding service lookup fails."""


class SemanticSearchError(UpstreamServiceError):
    """Raised when the semantic match oracle fails."""


class OpportunityNotFoundError(ExpBoardError):
    """Raised when a posting ID does not exist in the store."""


class InvalidSearchRequestError(ExpBoardError):
    """Raised when strict query-parameter parsing meets a malformed value."""
