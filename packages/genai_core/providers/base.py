"""
Base LLM Provider - Interfaz abstracta para proveedores de LLM
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class LLMResponse:
    """Respuesta estandarizada de cualquier LLM"""

    text: str
    model: str
    provider: str
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class LLMProvider(ABC):
    """Interfaz abstracta para proveedores de LLM"""

    provider_name: str = "base"

    @abstractmethod
    async def generate(self, prompt: str) -> LLMResponse:
        """
        Genera una respuesta del LLM.

        Los parámetros de muestreo se fijan al construir el provider,
        no por request.

        Args:
            prompt: El prompt completo a enviar

        Returns:
            LLMResponse con el texto y metadata
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Verifica si el provider está configurado y disponible"""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Retorna el modelo por defecto del provider"""
        pass
