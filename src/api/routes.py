"""FastAPI API routes for modelgate.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/health                                        GET     Health + provider names
# /api/v1/providers                                     GET     Provider metadata
# /api/v1/models                                        GET     Static + dynamic catalogs
# /api/v1/providers/{provider}/models/{model}/validate  POST    Check a model selection
# /api/v1/multimodal                                    POST    Text + image inference
#
# The registry and settings are read from app.state (populated by
# create_app in main.py) through small Depends() helpers.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import base64
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, UploadFile

from src.api.schemas import (
    HealthResponse,
    ModelsResponse,
    MultimodalResponse,
    ProvidersResponse,
    ValidateModelRequest,
    ValidateModelResponse,
)
from src.config.credentials import resolve_provider_credentials
from src.config.settings import Settings
from src.providers.llm.registry import ProviderRegistry
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_ALLOWED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})
_MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5 MB


def _get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


RegistryDep = Annotated[ProviderRegistry, Depends(_get_registry)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


@router.get("/health", response_model=HealthResponse)
async def health(request: Request, registry: RegistryDep) -> HealthResponse:
    return HealthResponse(status="ok", version=request.app.version, providers=registry.names())


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(registry: RegistryDep) -> ProvidersResponse:
    return ProvidersResponse(providers=[p.get_provider_info() for p in registry.providers])


@router.get("/models", response_model=ModelsResponse)
async def list_models(
    registry: RegistryDep,
    settings: SettingsDep,
    provider: Annotated[str | None, Query(description="Only list this provider's models")] = None,
) -> ModelsResponse:
    """Return static catalogs plus whatever live listings are reachable."""
    models = await registry.list_models(server_env=settings.server_env(), provider=provider)
    return ModelsResponse(models=models)


@router.post(
    "/providers/{provider}/models/{model:path}/validate",
    response_model=ValidateModelResponse,
)
async def validate_model(
    provider: str,
    model: str,
    registry: RegistryDep,
    settings: SettingsDep,
    body: ValidateModelRequest | None = None,
) -> ValidateModelResponse:
    """Resolve credentials and build a handle without running inference.

    Unknown models and missing keys surface through ErrorHandlingMiddleware
    as 404 and 401 respectively.
    """
    body = body or ValidateModelRequest()
    handle = registry.create_model_instance(
        provider,
        model,
        settings.server_env(),
        api_keys=body.api_keys,
        provider_settings=body.provider_settings,
    )
    return ValidateModelResponse(provider=handle.provider, model=handle.model, base_url=handle.base_url)


@router.post("/multimodal", response_model=MultimodalResponse)
async def multimodal(
    registry: RegistryDep,
    settings: SettingsDep,
    model: Annotated[str, Form()],
    prompt: Annotated[str, Form()],
    image: UploadFile | None = None,
    provider: Annotated[str, Form()] = "HuggingFace",
) -> MultimodalResponse:
    """Run one text + optional image request with the server's API key."""
    image_bytes: bytes | None = None
    if image is not None:
        if image.content_type not in _ALLOWED_IMAGE_TYPES:
            raise HTTPException(status_code=415, detail=f"Unsupported image type: {image.content_type}")
        image_bytes = await image.read()
        if len(image_bytes) > _MAX_IMAGE_SIZE:
            raise HTTPException(status_code=413, detail="Image exceeds 5 MB limit")

    multimodal_provider = registry.get_multimodal_provider(provider)
    adapter = registry.get_provider(provider)
    credentials = resolve_provider_credentials(
        adapter.name,
        adapter.config,
        server_env=settings.server_env(),
    )
    response = await multimodal_provider.generate_multimodal_response(
        model,
        prompt,
        image_bytes,
        credentials.api_key or "",
    )
    data = response.data
    if isinstance(data, bytes):
        # Generated images come back raw; JSON clients get base64.
        _logger.info("multimodal_binary_output", provider=provider, model=model, size=len(data))
        data = base64.b64encode(data).decode("ascii")
    return MultimodalResponse(
        provider=response.provider,
        model=response.model,
        content_type=response.content_type,
        data=data,
    )
