"""
API Service - FastAPI endpoints
"""

from .main import app, create_app
from .schemas import GenerateRequest, GenerateResponse

__all__ = ["app", "create_app", "GenerateRequest", "GenerateResponse"]
