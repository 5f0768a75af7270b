"""
GenAI Core - Clientes de Gemini y Firestore para la API de Argano
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .errors import NotFoundError, ServiceError, UpstreamError, ValidationError
from .store import DocumentStore, FirestoreDocumentStore, StoredDocument

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
    "DocumentStore",
    "FirestoreDocumentStore",
    "StoredDocument",
]
