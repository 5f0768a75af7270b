"""
Errores de la API - Taxonomía estable para clientes
"""
import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class ServiceError(Exception):
    """Error con status HTTP y un `kind` legible por máquinas"""

    kind: str = "internal_error"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class ValidationError(ServiceError):
    """Falta un campo requerido en el request"""

    kind = "validation_error"
    status_code = 400


class NotFoundError(ServiceError):
    """No hay registros donde la ausencia es significativa"""

    kind = "not_found"
    status_code = 404


class UpstreamError(ServiceError):
    """Falló Gemini o Firestore; la causa solo se registra en el log"""

    kind = "upstream_error"
    status_code = 500


async def run_with_timeout(awaitable: Awaitable[T], timeout: float) -> T:
    """
    Espera una llamada externa con un límite de tiempo.

    Raises:
        UpstreamError: si la llamada excede `timeout` segundos
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise UpstreamError(f"External call timed out after {timeout}s") from e
