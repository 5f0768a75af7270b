"""
Document Store - Interfaz de consultas sobre Firestore
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from .config import Settings, get_settings


@dataclass
class StoredDocument:
    """Un documento tal como lo devuelve el store, sin esquema"""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """
        Combina el identificador con los campos guardados, ya convertidos
        a valores serializables en JSON.

        El identificador siempre gana: un campo guardado llamado "id"
        se descarta.
        """
        record = {"id": self.id}
        record.update(
            {k: _to_plain(v) for k, v in self.data.items() if k != "id"}
        )
        return record


class DocumentStore(ABC):
    """Interfaz abstracta para el almacén de documentos"""

    @abstractmethod
    async def list_collections(self) -> list[str]:
        """Lista los nombres de las colecciones de primer nivel"""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        """
        Consulta una colección.

        Args:
            collection: Ruta de la colección ("prompts" o
                "StrategicAc/<id>/results" para subcolecciones)
            where: Filtros de igualdad campo -> valor
            order_by: Campo por el que ordenar (opcional)
            descending: Orden descendente

        Returns:
            Documentos en el orden del store
        """
        pass

    async def close(self) -> None:
        """Libera las conexiones del cliente"""
        return None


def _to_plain(value: Any) -> Any:
    """
    Convierte tipos propios de Firestore a valores serializables en JSON.

    Los bytes se devuelven en base64 y los vectores como listas de floats.
    """
    from google.cloud.firestore_v1 import GeoPoint
    from google.cloud.firestore_v1.base_document import BaseDocumentReference
    from google.cloud.firestore_v1.vector import Vector

    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, Vector):
        return list(value)
    if isinstance(value, BaseDocumentReference):
        return value.path
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


class FirestoreDocumentStore(DocumentStore):
    """Store respaldado por Google Cloud Firestore (cliente async)"""

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self.settings = settings or get_settings()
        self._client = client

    def _ensure_client(self):
        """Crea el AsyncClient de Firestore una sola vez"""
        if self._client is None:
            from google.cloud import firestore

            credentials = None
            if self.settings.firestore_credentials_path:
                from google.oauth2 import service_account

                credentials = service_account.Credentials.from_service_account_file(
                    self.settings.firestore_credentials_path
                )

            self._client = firestore.AsyncClient(
                project=self.settings.firestore_project_id,
                database=self.settings.firestore_database_id,
                credentials=credentials,
            )
        return self._client

    async def list_collections(self) -> list[str]:
        client = self._ensure_client()
        return [collection.id async for collection in client.collections()]

    async def query(
        self,
        collection: str,
        where: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        from google.cloud.firestore_v1 import Query
        from google.cloud.firestore_v1.base_query import FieldFilter

        client = self._ensure_client()
        query = client.collection(collection)

        for field_name, value in (where or {}).items():
            query = query.where(filter=FieldFilter(field_name, "==", value))

        if order_by:
            direction = Query.DESCENDING if descending else Query.ASCENDING
            query = query.order_by(order_by, direction=direction)

        snapshots = await query.get()
        return [
            StoredDocument(id=snap.id, data=snap.to_dict() or {})
            for snap in snapshots
        ]

    async def close(self) -> None:
        """Cierra el canal gRPC del cliente, si llegó a crearse"""
        if self._client is None:
            return
        client, self._client = self._client, None
        # AsyncClient no expone close(); el transporte gRPC sí
        await client._firestore_api.transport.close()
