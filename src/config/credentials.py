"""Credential resolution — pick a base URL and API key by source precedence.

Sources are an explicit ordered list rather than fallback chains spread
across call sites:

    1. explicit   — call-time ``api_keys[provider_name]`` (key only)
    2. stored     — the provider's ``ProviderSetting`` (base URL + key)
    3. environment — ``server_env[config.base_url_key / api_token_key]``
    4. default    — ``config.base_url`` (base URL only)

:func:`resolve_credentials` takes the first non-empty value for each field
independently, so a stored base URL can pair with an environment key.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from src.models.provider import ProviderConfig, ProviderSetting, ResolvedCredentials


@dataclass(frozen=True)
class CredentialSource:
    """One precedence tier. ``None`` or ``""`` means the tier has no value."""

    label: str
    base_url: str | None = None
    api_key: str | None = None


def _first(values: list[str | None]) -> str | None:
    for value in values:
        if value:
            return value
    return None


def resolve_credentials(sources: Sequence[CredentialSource]) -> ResolvedCredentials:
    """Return the first non-empty base URL and API key across *sources*, in order."""
    return ResolvedCredentials(
        base_url=_first([source.base_url for source in sources]),
        api_key=_first([source.api_key for source in sources]),
    )


def credential_sources(
    provider_name: str,
    config: ProviderConfig,
    *,
    api_keys: Mapping[str, str] | None = None,
    provider_setting: ProviderSetting | None = None,
    server_env: Mapping[str, str] | None = None,
) -> list[CredentialSource]:
    """Build the precedence-ordered source list for one provider."""
    env = server_env or {}
    sources = [
        CredentialSource(label="explicit", api_key=(api_keys or {}).get(provider_name)),
    ]
    if provider_setting is not None:
        sources.append(
            CredentialSource(
                label="stored",
                base_url=provider_setting.base_url,
                api_key=provider_setting.api_key,
            )
        )
    sources.append(
        CredentialSource(
            label="environment",
            # Blank key names mean the provider has no such variable.
            base_url=env.get(config.base_url_key) if config.base_url_key else None,
            api_key=env.get(config.api_token_key) if config.api_token_key else None,
        )
    )
    sources.append(CredentialSource(label="default", base_url=config.base_url))
    return sources


def resolve_provider_credentials(
    provider_name: str,
    config: ProviderConfig,
    *,
    api_keys: Mapping[str, str] | None = None,
    provider_setting: ProviderSetting | None = None,
    server_env: Mapping[str, str] | None = None,
) -> ResolvedCredentials:
    """Resolve credentials for *provider_name* from all configured tiers."""
    return resolve_credentials(
        credential_sources(
            provider_name,
            config,
            api_keys=api_keys,
            provider_setting=provider_setting,
            server_env=server_env,
        )
    )
