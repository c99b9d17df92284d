"""
Error taxonomy shared by the curriculum and assistant layers.

Route handlers never see raw upstream or lookup failures; the exception
handlers in tsea.main translate each kind into an HTTP response.
"""

from typing import Optional


class TseaError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(TseaError):
    """No model, assistant or API key is configured for the requested persona."""


class UpstreamError(TseaError):
    """The remote inference call failed (network, status or body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NoContentError(TseaError):
    """The upstream call succeeded but produced no usable text."""

    def __init__(self, message: str = "Upstream reply contained no text"):
        super().__init__(message)


class NotFoundError(TseaError):
    """A module, lesson, track or question id is absent from the curriculum."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier
