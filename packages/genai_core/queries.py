"""
Consultas de la API - Listados y agregación en dos niveles sobre el store
"""
import asyncio
import logging
import re
from typing import Any, Optional

from .config import Settings
from .errors import NotFoundError, run_with_timeout
from .store import DocumentStore, StoredDocument

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

# Firestore solo codifica enteros de 64 bits
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def parse_prompt_id(raw: Optional[str], default: int = 1) -> Optional[int]:
    """
    Convierte el promptId del query string a entero.

    - Vacío o ausente -> default
    - Dígitos iniciales -> entero ("2abc" -> 2)
    - Sin dígitos iniciales -> None (no coincide con ningún resultado)
    - Fuera del rango de 64 bits -> None
    """
    if raw is None or raw == "":
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    value = int(match.group(1))
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


async def check_connection(store: DocumentStore, settings: Settings) -> list[str]:
    """Verifica alcance y credenciales listando las colecciones de primer nivel"""
    return await run_with_timeout(
        store.list_collections(), settings.request_timeout_seconds
    )


async def list_prompt_documents(
    store: DocumentStore, settings: Settings
) -> list[dict[str, Any]]:
    """
    Lee todos los documentos de la colección de prompts.

    Raises:
        NotFoundError: si la colección está vacía
    """
    collection = settings.prompts_collection
    docs = await run_with_timeout(
        store.query(collection), settings.request_timeout_seconds
    )
    if not docs:
        raise NotFoundError("No documents found")

    documents = [doc.to_record() for doc in docs]
    logger.info(
        f"Successfully retrieved {len(documents)} documents from '{collection}'."
    )
    return documents


async def find_company_ids(
    store: DocumentStore, settings: Settings
) -> list[dict[str, str]]:
    """
    Identificadores de los registros de la compañía por defecto,
    del más reciente al más antiguo.

    Raises:
        NotFoundError: si no hay registros para la compañía
    """
    docs = await run_with_timeout(
        store.query(
            settings.parent_collection,
            where={settings.company_field: settings.default_company_name},
            order_by=settings.company_order_field,
            descending=True,
        ),
        settings.request_timeout_seconds,
    )
    if not docs:
        raise NotFoundError("No company data found")

    results = [{"id": doc.id} for doc in docs]
    logger.info(f"Found {len(results)} results:")
    return results


async def collect_results(
    store: DocumentStore,
    settings: Settings,
    company_name: str,
    prompt_id: Optional[int],
) -> list[dict[str, Any]]:
    """
    Agregación en dos niveles (fan-out).

    1. Busca los registros padre de la compañía, del más reciente al más
       antiguo.
    2. Sin padres -> NotFoundError, sin consultas hijas.
    3. Consulta en paralelo la subcolección de resultados de cada padre
       filtrando por promptId.
    4. Aplana en orden de padre y, dentro de cada padre, en el orden del
       store (nunca en orden de llegada).

    Cualquier fallo aborta la agregación completa: no hay resultados
    parciales.

    Args:
        store: Almacén de documentos
        settings: Configuración con nombres de colecciones y campos
        company_name: Compañía a buscar
        prompt_id: promptId ya convertido; None no coincide con nada

    Returns:
        Lista plana de resultados, posiblemente vacía
    """
    timeout = settings.request_timeout_seconds
    parents = await run_with_timeout(
        store.query(
            settings.parent_collection,
            where={settings.results_company_field: company_name},
            order_by=settings.results_order_field,
            descending=True,
        ),
        timeout,
    )
    if not parents:
        raise NotFoundError("No results found")

    if prompt_id is None:
        logger.info(f"Found 0 results for company '{company_name}':")
        return []

    # gather conserva el orden de los argumentos
    outcomes = await asyncio.gather(
        *(
            run_with_timeout(
                _child_results(store, settings, parent, prompt_id), timeout
            )
            for parent in parents
        ),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome

    results = [doc.to_record() for children in outcomes for doc in children]
    logger.info(f"Found {len(results)} results for company '{company_name}':")
    return results


async def _child_results(
    store: DocumentStore,
    settings: Settings,
    parent: StoredDocument,
    prompt_id: int,
) -> list[StoredDocument]:
    path = f"{settings.parent_collection}/{parent.id}/{settings.results_subcollection}"
    return await store.query(path, where={settings.prompt_id_field: prompt_id})
