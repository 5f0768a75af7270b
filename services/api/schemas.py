"""
Pydantic schemas para la API
"""

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request para generación de contenido"""

    input: str | None = Field(None, description="Prompt a enviar a Gemini")


class GenerateResponse(BaseModel):
    """Texto generado"""

    response: str


class ConnectionResponse(BaseModel):
    """Resultado de la verificación de Firestore"""

    status: str
    message: str


class CompanyRef(BaseModel):
    """Identificador de un registro de la compañía"""

    id: str


class ErrorResponse(BaseModel):
    """Cuerpo de todas las respuestas de error"""

    error: str
    kind: str


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    version: str
