"""Shared pytest fixtures for the modelgate test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config.settings import Settings
from src.models.provider import ModelInfo
from src.providers.llm.huggingface_provider import HuggingFaceProvider
from src.providers.llm.lmstudio_provider import LMStudioProvider


def make_settings(**overrides) -> Settings:
    """Build Settings with every provider unconfigured unless overridden."""
    defaults = {
        "huggingface_api_key": "",
        "lmstudio_api_key": "",
        "lmstudio_api_base_url": "",
        "http_timeout": 5.0,
        "app_env": "test",
        "app_origin": "http://localhost:5173",
        "log_level": "WARNING",
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def huggingface(settings: Settings) -> HuggingFaceProvider:
    return HuggingFaceProvider(settings)


@pytest.fixture
def lmstudio(settings: Settings) -> LMStudioProvider:
    return LMStudioProvider(settings)


@pytest.fixture
def sample_dynamic_models() -> list[ModelInfo]:
    return [
        ModelInfo(name="llama-3.2-3b-instruct", label="llama-3.2-3b-instruct", provider="LMStudio"),
        ModelInfo(name="qwen2.5-7b-instruct", label="qwen2.5-7b-instruct", provider="LMStudio"),
    ]
