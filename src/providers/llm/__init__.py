"""LLM provider adapters.

Two concrete adapters implement ILLMProvider (src/interfaces/llm_provider.py):
    - HuggingFaceProvider — hosted Inference API; static catalog plus a
      direct multimodal (text + image) endpoint
    - LMStudioProvider    — local LM Studio server; static catalog plus the
      live /v1/models listing

ProviderRegistry looks adapters up by name.  At startup, main.py builds
the registry from the provider list in config/config.yaml and stores it
on FastAPI's app.state.
"""

from src.providers.llm.huggingface_provider import HuggingFaceProvider
from src.providers.llm.lmstudio_provider import LMStudioProvider
from src.providers.llm.registry import ProviderRegistry, build_default_registry

__all__ = ["HuggingFaceProvider", "LMStudioProvider", "ProviderRegistry", "build_default_registry"]
