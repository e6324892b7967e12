"""Provider catalog, settings, and handle models.

Defines Pydantic v2 models for the data that flows through a provider
adapter.  All models use frozen config so catalog entries and resolved
credentials cannot be mutated after creation.

    1. A provider declares its catalog         → ModelInfo (static table)
    2. A caller or storage supplies overrides  → ProviderSetting
    3. The resolver merges sources             → ResolvedCredentials
    4. The provider builds a client            → ModelHandle
    5. A direct inference call returns         → ProviderResponse
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    """One remote model identifier in a provider catalog."""

    model_config = ConfigDict(frozen=True)

    # Remote identifier, opaque to us (e.g. "Qwen/Qwen2.5-Coder-32B-Instruct").
    name: str = Field(min_length=1)
    label: str
    # Owning provider name, e.g. "HuggingFace".
    provider: str
    # 0 means "not applicable" (image generation models).
    max_token_allowed: int = Field(default=8000, ge=0)


class ProviderSetting(BaseModel):
    """Per-provider override record supplied by a caller or settings storage."""

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None
    api_key: str | None = Field(default=None, repr=False)
    enabled: bool = True


class ProviderConfig(BaseModel):
    """Static configuration keys a provider reads from the server environment.

    A blank key name means the provider has no such environment variable.
    """

    model_config = ConfigDict(frozen=True)

    base_url_key: str = ""
    api_token_key: str = ""
    # Endpoint used when no setting or environment variable supplies one.
    base_url: str | None = None


class ProviderInfo(BaseModel):
    """Display metadata for a provider, as shown in the settings UI."""

    model_config = ConfigDict(frozen=True)

    name: str
    api_key_link: str | None = None
    label_for_get_api_key: str | None = None
    icon: str | None = None
    supports_dynamic_models: bool = False
    supports_multimodal: bool = False


class ResolvedCredentials(BaseModel):
    """Base URL and API key selected for a single call. Never retained."""

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None
    api_key: str | None = Field(default=None, repr=False)


class ModelHandle(BaseModel):
    """Endpoint-and-credential-bound client for one model.

    ``client`` is an ``openai.AsyncOpenAI`` instance that callers use for
    chat completions.  The key is excluded from repr and serialization so a
    handle can be logged or returned by the API without leaking it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    provider: str
    model: str
    base_url: str
    api_key: str = Field(repr=False, exclude=True)
    headers: dict[str, str] = Field(default_factory=dict)
    client: Any = Field(default=None, repr=False, exclude=True)


class ProviderResponse(BaseModel):
    """Result of a direct (non-SDK) inference request."""

    model_config = ConfigDict(frozen=True)

    provider: str
    model: str
    status_code: int
    content_type: str = ""
    # Decoded JSON for JSON bodies; raw bytes otherwise (e.g. generated images).
    data: Any = None
