"""Configuration module — settings, manifest loader, and credential resolution."""

from src.config.credentials import (
    CredentialSource,
    credential_sources,
    resolve_credentials,
    resolve_provider_credentials,
)
from src.config.loader import enabled_providers, load_config
from src.config.settings import Settings

__all__ = [
    "CredentialSource",
    "Settings",
    "credential_sources",
    "enabled_providers",
    "load_config",
    "resolve_credentials",
    "resolve_provider_credentials",
]
