"""
LLM Providers - Abstracción para el proveedor de generación de texto
"""

from .base import LLMProvider, LLMResponse
from .gemini import GeminiProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "GeminiProvider",
]
