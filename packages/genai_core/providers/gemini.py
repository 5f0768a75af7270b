"""
Gemini Provider - Google Gemini API
"""

from typing import Optional

from ..config import Settings, get_settings
from .base import LLMProvider, LLMResponse


class GeminiProvider(LLMProvider):
    """Provider para Google Gemini"""

    provider_name = "gemini"

    def __init__(
        self, api_key: Optional[str] = None, settings: Optional[Settings] = None
    ):
        self._settings = settings or get_settings()
        self._api_key = api_key or self._settings.gemini_api_key
        self._genai = None
        self._model = None

    def _ensure_initialized(self):
        """Inicializa el cliente de Gemini si no está inicializado"""
        if self._genai is None:
            import google.generativeai as genai

            if not self._api_key:
                raise ValueError("GEMINI_API_KEY no configurada")

            genai.configure(api_key=self._api_key)
            self._genai = genai

    def _get_model(self):
        """Obtiene o crea la instancia del modelo con su configuración fija"""
        self._ensure_initialized()

        if self._model is None:
            self._model = self._genai.GenerativeModel(
                self.default_model,
                generation_config=self._genai.types.GenerationConfig(
                    temperature=self._settings.temperature,
                    top_p=self._settings.top_p,
                    top_k=self._settings.top_k,
                    max_output_tokens=self._settings.max_output_tokens,
                ),
            )

        return self._model

    async def generate(self, prompt: str) -> LLMResponse:
        """Genera respuesta con Gemini"""
        gemini_model = self._get_model()

        try:
            response = await gemini_model.generate_content_async(prompt)

            return LLMResponse(
                text=response.text,
                model=self.default_model,
                provider=self.provider_name,
                prompt_tokens=getattr(
                    response.usage_metadata, "prompt_token_count", None
                ),
                completion_tokens=getattr(
                    response.usage_metadata, "candidates_token_count", None
                ),
                total_tokens=getattr(
                    response.usage_metadata, "total_token_count", None
                ),
            )
        except Exception as e:
            raise RuntimeError(f"Error en Gemini: {str(e)}") from e

    def is_available(self) -> bool:
        """Verifica si Gemini está disponible"""
        return bool(self._api_key)

    @property
    def default_model(self) -> str:
        return self._settings.gemini_model
