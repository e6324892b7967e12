"""HuggingFace Inference API provider adapter.

Chat models are served through HuggingFace's OpenAI-compatible route
(``/v1/``), so model handles wrap an ``openai.AsyncOpenAI`` client pointed
at that URL.  Multimodal models (BLIP-2 and the like) are not served there;
:meth:`HuggingFaceProvider.generate_multimodal_response` posts a multipart
form straight to ``/models/{model}`` with httpx instead.

Only models in the static catalog can be instantiated; there is no
listing endpoint to discover more.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

import httpx
import openai
import structlog

from src.config.credentials import resolve_provider_credentials
from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider, IMultimodalProvider
from src.models.provider import (
    ModelHandle,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    ProviderResponse,
    ProviderSetting,
)
from src.providers.llm.catalog import find_model
from src.utils.errors import InferenceRequestError, MissingCredentialError, UnknownModelError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "HuggingFace"
_INFERENCE_HOST = "https://api-inference.huggingface.co"
CHAT_BASE_URL = f"{_INFERENCE_HOST}/v1/"
MODELS_URL = f"{_INFERENCE_HOST}/models"

STATIC_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(
        name="Qwen/Qwen2.5-Coder-32B-Instruct",
        label="Qwen2.5-Coder-32B-Instruct (HuggingFace)",
        provider=_PROVIDER_NAME,
        max_token_allowed=8000,
    ),
    ModelInfo(
        name="01-ai/Yi-1.5-34B-Chat",
        label="Yi-1.5-34B-Chat (HuggingFace)",
        provider=_PROVIDER_NAME,
        max_token_allowed=8000,
    ),
    ModelInfo(
        name="meta-llama/Llama-3.1-70B-Instruct",
        label="Llama-3.1-70B-Instruct (HuggingFace)",
        provider=_PROVIDER_NAME,
        max_token_allowed=8000,
    ),
    ModelInfo(
        name="bigcode/starcoder2-15b-instruct-v0.1",
        label="Starcoder2-15B-Instruct-v0.1 (HuggingFace)",
        provider=_PROVIDER_NAME,
        max_token_allowed=8000,
    ),
    ModelInfo(
        name="Salesforce/blip2-opt-2.7b",
        label="BLIP-2 (Text + Image) (HuggingFace)",
        provider=_PROVIDER_NAME,
        max_token_allowed=5000,
    ),
    ModelInfo(
        name="CompVis/stable-diffusion-v1-4",
        label="Stable Diffusion (Image Generation) (HuggingFace)",
        provider=_PROVIDER_NAME,
        # Image generation: a token cap does not apply.
        max_token_allowed=0,
    ),
)


def build_multimodal_form(prompt: str, image_bytes: bytes | None = None) -> dict[str, tuple]:
    """Build the multipart ``files`` mapping for a multimodal request.

    ``inputs`` is a plain form field (no filename) holding compact JSON,
    ``{"text":"<prompt>"}``.  ``image`` is added whenever bytes are given,
    even an empty buffer.
    """
    form: dict[str, tuple] = {
        "inputs": (None, json.dumps({"text": prompt}, separators=(",", ":"), ensure_ascii=False)),
    }
    if image_bytes is not None:
        form["image"] = ("input.png", image_bytes, "image/png")
    return form


class HuggingFaceProvider(ILLMProvider, IMultimodalProvider):
    """Provider for the hosted HuggingFace Inference API."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._timeout = settings.http_timeout if settings else 60.0
        self._config = ProviderConfig(
            api_token_key="HuggingFace_API_KEY",
            base_url=CHAT_BASE_URL,
        )

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
            api_key_link="https://huggingface.co/settings/tokens",
            supports_dynamic_models=False,
            supports_multimodal=True,
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
        """Return a handle on the OpenAI-compatible chat route for a catalog model."""
        find_model(STATIC_MODELS, model, self.name)

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

        # The chat endpoint is fixed; stored base URLs do not apply here.
        client = openai.AsyncOpenAI(base_url=CHAT_BASE_URL, api_key=credentials.api_key)
        logger.debug("model_instance_created", provider=self.name, model=model)
        return ModelHandle(
            provider=self.name,
            model=model,
            base_url=CHAT_BASE_URL,
            api_key=credentials.api_key,
            client=client,
        )

    # ------------------------------------------------------------------
    # IMultimodalProvider implementation
    # ------------------------------------------------------------------

    async def generate_multimodal_response(
        self,
        model: str,
        prompt: str,
        image_bytes: bytes | None,
        api_key: str,
    ) -> ProviderResponse:
        """POST a text prompt and optional PNG image to ``/models/{model}``.

        One request, no retry.  Any failure surfaces as a generic
        :class:`InferenceRequestError`; the provider's own response body is
        logged, never returned.
        """
        if not api_key:
            raise MissingCredentialError(
                message=f"Missing API key for {self.name} provider",
                provider_name=self.name,
            )
        if not model:
            raise UnknownModelError(
                message=f"No {self.name} model was specified",
                provider_name=self.name,
            )

        url = f"{MODELS_URL}/{model}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    files=build_multimodal_form(prompt, image_bytes),
                    headers={"Authorization": f"Bearer {api_key}"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error(
                "multimodal_request_failed",
                provider=self.name,
                model=model,
                error=str(exc),
            )
            raise InferenceRequestError(
                message=f"An error occurred while calling {self.name}",
                provider_name=self.name,
            ) from exc

        if response.status_code != 200:
            logger.error(
                "multimodal_request_rejected",
                provider=self.name,
                model=model,
                status=response.status_code,
                reason=response.reason_phrase,
            )
            raise InferenceRequestError(
                message=f"An error occurred while calling {self.name}",
                provider_name=self.name,
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                data = response.json()
            except ValueError as exc:
                logger.error("multimodal_response_unparseable", provider=self.name, model=model)
                raise InferenceRequestError(
                    message=f"An error occurred while calling {self.name}",
                    provider_name=self.name,
                    status_code=response.status_code,
                ) from exc
        else:
            data = response.content

        logger.info(
            "multimodal_response",
            provider=self.name,
            model=model,
            with_image=image_bytes is not None,
        )
        return ProviderResponse(
            provider=self.name,
            model=model,
            status_code=response.status_code,
            content_type=content_type,
            data=data,
        )
