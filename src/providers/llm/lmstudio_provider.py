"""LM Studio provider adapter.

LM Studio runs models on the user's machine and serves them over an
OpenAI-compatible API at ``http://127.0.0.1:1234/v1`` by default, so
model handles wrap an ``openai.AsyncOpenAI`` client pointed at the
resolved base URL.

Which models are loaded depends on the local server, so the adapter
combines a one-entry static catalog with the live ``/v1/models`` listing.
The most recent successful listing is remembered and counts as part of
the catalog when validating :meth:`LMStudioProvider.create_model_instance`.
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx
import openai
import structlog

from src.config.credentials import resolve_provider_credentials
from src.config.settings import Settings
from src.interfaces.llm_provider import IDynamicModelProvider, ILLMProvider
from src.models.provider import (
    ModelHandle,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    ProviderSetting,
)
from src.providers.llm.catalog import find_model
from src.utils.errors import DynamicListingUnavailableError, MissingCredentialError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "LMStudio"
DEFAULT_BASE_URL = "http://127.0.0.1:1234"
_DYNAMIC_MAX_TOKENS = 8000

STATIC_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(
        name="Qwen/Qwen2.5-Coder-32B-Instruct",
        label="Qwen2.5-Coder-32B-Instruct (LMStudio)",
        provider=_PROVIDER_NAME,
        max_token_allowed=8000,
    ),
)


class LMStudioProvider(ILLMProvider, IDynamicModelProvider):
    """Provider for a local LM Studio server."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._timeout = settings.http_timeout if settings else 60.0
        # The chat UI's origin, echoed to LM Studio for its CORS check.
        self._origin = settings.app_origin if settings else "http://localhost:5173"
        self._config = ProviderConfig(
            base_url_key="LMSTUDIO_API_BASE_URL",
            api_token_key="LMSTUDIO_API_KEY",
            base_url=DEFAULT_BASE_URL,
        )
        # Replaced wholesale on each successful listing; never mutated.
        self._dynamic_models: tuple[ModelInfo, ...] = ()

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return _PROVIDER_NAME

    @property
    def config(self) -> ProviderConfig:
        return self._config

    def get_provider_info(self) -> ProviderInfo:
        return ProviderInfo(
            name=self.name,
            api_key_link=f"{DEFAULT_BASE_URL}/settings/tokens",
            label_for_get_api_key="Get LMStudio",
            icon="i-ph:cloud-arrow-down",
            supports_dynamic_models=True,
            supports_multimodal=False,
        )

    def list_static_models(self) -> list[ModelInfo]:
        return list(STATIC_MODELS)

    def create_model_instance(
        self,
        model: str,
        server_env: Mapping[str, str],
        api_keys: Mapping[str, str] | None = None,
        provider_settings: Mapping[str, ProviderSetting] | None = None,
    ) -> ModelHandle:
        """Return a handle on the LM Studio ``/v1/`` route.

        *model* must be in the static catalog or in the latest dynamic
        listing returned by :meth:`list_dynamic_models`.
        """
        find_model((*STATIC_MODELS, *self._dynamic_models), model, self.name)

        credentials = resolve_provider_credentials(
            self.name,
            self._config,
            api_keys=api_keys,
            provider_setting=(provider_settings or {}).get(self.name),
            server_env=server_env,
        )
        if not credentials.api_key:
            raise MissingCredentialError(
                message=f"Missing API key for {self.name} provider",
                provider_name=self.name,
            )

        base_url = f"{(credentials.base_url or DEFAULT_BASE_URL).rstrip('/')}/v1/"
        headers = {"Access-Control-Allow-Origin": self._origin}
        client = openai.AsyncOpenAI(
            base_url=base_url,
            api_key=credentials.api_key,
            default_headers=headers,
        )
        logger.debug("model_instance_created", provider=self.name, model=model, base_url=base_url)
        return ModelHandle(
            provider=self.name,
            model=model,
            base_url=base_url,
            api_key=credentials.api_key,
            headers=headers,
            client=client,
        )

    # ------------------------------------------------------------------
    # IDynamicModelProvider implementation
    # ------------------------------------------------------------------

    async def list_dynamic_models(
        self,
        api_keys: Mapping[str, str] | None = None,
        provider_setting: ProviderSetting | None = None,
        server_env: Mapping[str, str] | None = None,
    ) -> list[ModelInfo]:
        """List the models currently loaded in LM Studio.

        Returns ``[]`` when the server is unreachable or answers with
        something other than ``{"data": [{"id": ...}, ...]}``.
        """
        credentials = resolve_provider_credentials(
            self.name,
            self._config,
            api_keys=api_keys,
            provider_setting=provider_setting,
            server_env=server_env,
        )
        if not credentials.base_url:
            return []

        try:
            models = await self._fetch_models(credentials.base_url)
        except DynamicListingUnavailableError as exc:
            logger.warning(
                "dynamic_listing_unavailable",
                provider=self.name,
                error=exc.message,
            )
            return []

        self._dynamic_models = tuple(models)
        logger.info("dynamic_models_listed", provider=self.name, count=len(models))
        return models

    async def _fetch_models(self, base_url: str) -> list[ModelInfo]:
        url = f"{base_url.rstrip('/')}/v1/models"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise DynamicListingUnavailableError(
                message=f"Could not list models from {url}: {exc}",
                provider_name=self.name,
            ) from exc

        try:
            return [
                ModelInfo(
                    name=str(entry["id"]),
                    label=str(entry["id"]),
                    provider=self.name,
                    max_token_allowed=_DYNAMIC_MAX_TOKENS,
                )
                for entry in payload["data"]
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise DynamicListingUnavailableError(
                message=f"Unexpected model listing payload from {url}",
                provider_name=self.name,
            ) from exc
