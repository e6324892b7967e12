"""Public interface definitions for LLM provider adapters.

Every backend is accessed exclusively through the abstract base classes
defined here.  Concrete adapters implement them and are registered at
startup in ``src/providers/llm/registry.py``.

CONCRETE PROVIDER MAP:
    Interface               →  Concrete implementations (in src/providers/llm/)
    ─────────────────────────────────────────────────────────────────────
    ILLMProvider            →  HuggingFaceProvider, LMStudioProvider
    IDynamicModelProvider   →  LMStudioProvider
    IMultimodalProvider     →  HuggingFaceProvider
"""

from src.interfaces.llm_provider import IDynamicModelProvider, ILLMProvider, IMultimodalProvider

__all__ = [
    "IDynamicModelProvider",
    "ILLMProvider",
    "IMultimodalProvider",
]
