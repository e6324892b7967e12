"""Utility modules for modelgate.

- **errors** -- Exception hierarchy rooted at ModelGateError; each failure
  kind (unknown model, missing credential, failed inference call) has its
  own subclass so callers can handle them without ``except Exception``.
- **logging** -- structlog setup with a dual renderer: coloured console
  output in development, structured JSON in production.
"""

from src.utils.errors import (
    ConfigurationError,
    DynamicListingUnavailableError,
    InferenceRequestError,
    MissingCredentialError,
    ModelGateError,
    UnknownModelError,
    UnknownProviderError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "DynamicListingUnavailableError",
    "InferenceRequestError",
    "MissingCredentialError",
    "ModelGateError",
    "UnknownModelError",
    "UnknownProviderError",
    "configure_logging",
    "get_logger",
]
