"""Exceptions raised while loading contracts, manifests and configuration.

Parameter drift is never raised: it is reported as findings. These errors
cover input that cannot be read at all.
"""


class ParamCheckError(Exception):
    """Base class for all param-check exceptions."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.context = context or {}


class DocumentError(ParamCheckError):
    """Raised when a contract or signature manifest cannot be read or parsed."""


class ConfigurationError(ParamCheckError):
    """Raised when the configuration file is invalid."""
