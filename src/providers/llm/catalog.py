"""Catalog helpers shared by the provider adapters."""

from __future__ import annotations

from collections.abc import Iterable

from src.models.provider import ModelInfo
from src.utils.errors import UnknownModelError


def find_model(models: Iterable[ModelInfo], name: str, provider_name: str) -> ModelInfo:
    """Return the catalog entry called *name*.

    Raises:
        UnknownModelError: If no entry matches. There is no default model.
    """
    for model in models:
        if model.name == name:
            return model
    raise UnknownModelError(
        message=f"Model not supported or not found: {name}",
        provider_name=provider_name,
    )
