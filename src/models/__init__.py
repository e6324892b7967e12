"""modelgate domain models — re-exports all public model classes.

Everything lives in ``provider.py``: catalog entries, per-provider
settings and config keys, resolved credentials, client handles, and
direct inference responses.
"""

from __future__ import annotations

from src.models.provider import (
    ModelHandle,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    ProviderResponse,
    ProviderSetting,
    ResolvedCredentials,
)

__all__ = [
    "ModelHandle",
    "ModelInfo",
    "ProviderConfig",
    "ProviderInfo",
    "ProviderResponse",
    "ProviderSetting",
    "ResolvedCredentials",
]
