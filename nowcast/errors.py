"""Error kinds that terminate a pipeline run."""
from __future__ import annotations

from typing import Dict, Type


class PipelineError(RuntimeError):
    """Base pipeline error.

    Every kind carries a fixed ``user_message`` suitable for display; the
    exception text itself is meant for logs.
    """

    code = "pipeline_error"
    user_message = "Something went wrong."


class UrlError(PipelineError):
    code = "url_error"
    user_message = "The weather service is not working."


class NetworkRequestFailed(PipelineError):
    code = "network_request_failed"
    user_message = "The network appears to be down."


class SerializationFailed(PipelineError):
    """Raised when an outgoing request body cannot be encoded."""

    code = "serialization_failed"
    user_message = "We're having trouble processing weather data."


class ParsingFailed(PipelineError):
    code = "parsing_failed"
    user_message = "We're having trouble parsing weather data."


class LocationUnavailable(PipelineError):
    code = "location_unavailable"
    user_message = "We're having trouble getting user location."


class AuthorizationDenied(PipelineError):
    code = "authorization_denied"
    user_message = "Location access has been denied."


class ImproperlyConfigured(RuntimeError):
    """Raised when required settings are missing or malformed."""


ERROR_KINDS: Dict[str, Type[PipelineError]] = {
    kind.code: kind
    for kind in (
        UrlError,
        NetworkRequestFailed,
        SerializationFailed,
        ParsingFailed,
        LocationUnavailable,
        AuthorizationDenied,
    )
}


__all__ = [
    "AuthorizationDenied",
    "ERROR_KINDS",
    "ImproperlyConfigured",
    "LocationUnavailable",
    "NetworkRequestFailed",
    "ParsingFailed",
    "PipelineError",
    "SerializationFailed",
    "UrlError",
]
