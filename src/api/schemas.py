"""Pydantic request/response schemas for the modelgate API.

Request schemas end with "Request", response schemas with "Response".
Catalog entries and provider metadata reuse the domain models from
``src.models.provider`` directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.provider import ModelInfo, ProviderInfo, ProviderSetting


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: list[str]


class ProvidersResponse(BaseModel):
    """Metadata for every registered provider."""

    providers: list[ProviderInfo]


class ModelsResponse(BaseModel):
    """Static and dynamic catalog entries."""

    models: list[ModelInfo]


class ValidateModelRequest(BaseModel):
    """Optional call-time credentials for a model selection check.

    ``api_keys`` is keyed by provider name; ``provider_settings`` holds the
    caller's stored per-provider overrides.
    """

    api_keys: dict[str, str] = Field(default_factory=dict)
    provider_settings: dict[str, ProviderSetting] = Field(default_factory=dict)


class ValidateModelResponse(BaseModel):
    """Where a model handle would point. Never includes the API key."""

    provider: str
    model: str
    base_url: str


class MultimodalResponse(BaseModel):
    """Decoded provider output for a multimodal request."""

    provider: str
    model: str
    content_type: str
    data: Any = None


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
