"""Provider registry — the single lookup point for provider adapters.

Maps provider names to adapters, aggregates their catalogs, and routes
model-instance requests.  Lookups never fall back: an unknown provider
name is an error, just like an unknown model.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping

import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import IDynamicModelProvider, ILLMProvider, IMultimodalProvider
from src.models.provider import ModelHandle, ModelInfo, ProviderSetting
from src.providers.llm.huggingface_provider import HuggingFaceProvider
from src.providers.llm.lmstudio_provider import LMStudioProvider
from src.utils.errors import ConfigurationError, UnknownProviderError

logger = structlog.get_logger(logger_name=__name__)

# Registration order is also catalog order in list_models().
PROVIDER_FACTORIES: dict[str, Callable[[Settings], ILLMProvider]] = {
    "HuggingFace": HuggingFaceProvider,
    "LMStudio": LMStudioProvider,
}


class ProviderRegistry:
    """Name → provider lookup with catalog aggregation."""

    def __init__(self, providers: Iterable[ILLMProvider]) -> None:
        self._providers: dict[str, ILLMProvider] = {}
        for provider in providers:
            if provider.name in self._providers:
                raise ConfigurationError(
                    message=f"Provider registered twice: {provider.name}",
                    provider_name=provider.name,
                )
            self._providers[provider.name] = provider

    @property
    def providers(self) -> list[ILLMProvider]:
        return list(self._providers.values())

    def names(self) -> list[str]:
        return list(self._providers)

    def get_provider(self, name: str) -> ILLMProvider:
        """Return the provider registered as *name*.

        Raises:
            UnknownProviderError: If nothing is registered under *name*.
        """
        try:
            return self._providers[name]
        except KeyError:
            raise UnknownProviderError(
                message=f"No provider registered as '{name}'",
                provider_name=name,
            ) from None

    def get_multimodal_provider(self, name: str) -> IMultimodalProvider:
        """Return *name* if it supports multimodal inference."""
        provider = self.get_provider(name)
        if not isinstance(provider, IMultimodalProvider):
            raise UnknownProviderError(
                message=f"Provider '{name}' does not support multimodal requests",
                provider_name=name,
            )
        return provider

    def list_static_models(self) -> list[ModelInfo]:
        """Return every provider's static catalog, in registration order."""
        return [model for provider in self._providers.values() for model in provider.list_static_models()]

    async def list_models(
        self,
        api_keys: Mapping[str, str] | None = None,
        provider_settings: Mapping[str, ProviderSetting] | None = None,
        server_env: Mapping[str, str] | None = None,
        provider: str | None = None,
    ) -> list[ModelInfo]:
        """Return static models followed by live listings.

        Dynamic catalogs are fetched concurrently from every enabled provider
        that supports them.  A failed listing contributes nothing; static
        entries are always present.  Duplicates (same provider and name) are
        dropped, keeping the first occurrence.
        """
        settings_map = provider_settings or {}
        selected = [self.get_provider(provider)] if provider else self.providers

        models = [model for p in selected for model in p.list_static_models()]

        dynamic = [
            p
            for p in selected
            if isinstance(p, IDynamicModelProvider)
            and (settings_map.get(p.name) is None or settings_map[p.name].enabled)
        ]
        listings = await asyncio.gather(
            *(
                p.list_dynamic_models(
                    api_keys=api_keys,
                    provider_setting=settings_map.get(p.name),
                    server_env=server_env,
                )
                for p in dynamic
            )
        )
        for listing in listings:
            models.extend(listing)

        seen: set[tuple[str, str]] = set()
        unique: list[ModelInfo] = []
        for model in models:
            key = (model.provider, model.name)
            if key not in seen:
                seen.add(key)
                unique.append(model)
        return unique

    def create_model_instance(
        self,
        provider: str,
        model: str,
        server_env: Mapping[str, str],
        api_keys: Mapping[str, str] | None = None,
        provider_settings: Mapping[str, ProviderSetting] | None = None,
    ) -> ModelHandle:
        """Build a handle for *model* on *provider*."""
        handle = self.get_provider(provider).create_model_instance(
            model,
            server_env,
            api_keys=api_keys,
            provider_settings=provider_settings,
        )
        logger.info("model_instance_ready", provider=provider, model=model)
        return handle


def build_default_registry(settings: Settings, enabled: list[str] | None = None) -> ProviderRegistry:
    """Instantiate the providers named in *enabled* (all known ones when ``None``).

    Raises:
        ConfigurationError: If *enabled* names a provider with no adapter.
    """
    names = list(PROVIDER_FACTORIES) if enabled is None else enabled
    unknown = [name for name in names if name not in PROVIDER_FACTORIES]
    if unknown:
        raise ConfigurationError(f"Unknown provider(s) in configuration: {', '.join(unknown)}")
    return ProviderRegistry(PROVIDER_FACTORIES[name](settings) for name in names)
