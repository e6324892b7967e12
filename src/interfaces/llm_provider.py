"""Abstract contracts for LLM provider adapters.

A provider adapter exposes a remote LLM backend's model catalog and builds
client handles bound to that backend's endpoint.  The capability set is
split across three interfaces so that each adapter declares exactly what
it supports:

    ILLMProvider           — required: catalog + model handle creation
    IDynamicModelProvider  — optional: live catalog from the backend
    IMultimodalProvider    — optional: direct text + image inference

Concrete adapters live in ``src/providers/llm/``.  They implement these
interfaces side by side; shared behaviour (catalog lookup, credential
resolution) lives in module-level helpers, not in a base class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from src.models.provider import (
    ModelHandle,
    ModelInfo,
    ProviderConfig,
    ProviderInfo,
    ProviderResponse,
    ProviderSetting,
)


# Concrete implementations: HuggingFaceProvider, LMStudioProvider
class ILLMProvider(ABC):
    """Contract every provider adapter must satisfy."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name, also the key for ``api_keys`` and provider settings."""

    @property
    @abstractmethod
    def config(self) -> ProviderConfig:
        """Environment keys and default endpoint for this provider."""

    @abstractmethod
    def get_provider_info(self) -> ProviderInfo:
        """Return display metadata (API-key link, icon, capabilities)."""

    @abstractmethod
    def list_static_models(self) -> list[ModelInfo]:
        """Return the fixed catalog.

        Pure: performs no I/O and returns the same entries on every call.
        """

    @abstractmethod
    def create_model_instance(
        self,
        model: str,
        server_env: Mapping[str, str],
        api_keys: Mapping[str, str] | None = None,
        provider_settings: Mapping[str, ProviderSetting] | None = None,
    ) -> ModelHandle:
        """Build a client handle for *model*.

        Parameters
        ----------
        model:
            Remote model identifier; must be in the provider's catalog.
        server_env:
            Server-side environment mapping (see ``Settings.server_env``).
        api_keys:
            Call-time API keys keyed by provider name.  Highest precedence.
        provider_settings:
            Stored settings keyed by provider name.

        Returns
        -------
        ModelHandle
            A fresh handle; never cached.

        Raises
        ------
        src.utils.errors.UnknownModelError
            If *model* is not in the catalog.  No default is substituted.
        src.utils.errors.MissingCredentialError
            If no API key resolves.  Raised before any network activity.
        """


class IDynamicModelProvider(ABC):
    """Optional capability: fetch the catalog from the live backend."""

    @abstractmethod
    async def list_dynamic_models(
        self,
        api_keys: Mapping[str, str] | None = None,
        provider_setting: ProviderSetting | None = None,
        server_env: Mapping[str, str] | None = None,
    ) -> list[ModelInfo]:
        """Return models reported by the backend's listing endpoint.

        Best-effort: any network or parse failure is logged and yields an
        empty list.  Never raises for listing failures.
        """


class IMultimodalProvider(ABC):
    """Optional capability: direct text + image inference over HTTP."""

    @abstractmethod
    async def generate_multimodal_response(
        self,
        model: str,
        prompt: str,
        image_bytes: bytes | None,
        api_key: str,
    ) -> ProviderResponse:
        """Send one multipart inference request and return the decoded response.

        Raises
        ------
        src.utils.errors.MissingCredentialError
            If *api_key* is empty.
        src.utils.errors.UnknownModelError
            If *model* is empty.
        src.utils.errors.InferenceRequestError
            If the request fails or returns a non-success status.
        """
