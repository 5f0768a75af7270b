"""
FastAPI Application - Argano GenAI API
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

# Agregar packages al path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi import APIRouter, Depends, FastAPI, Query, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from packages.genai_core import __version__  # noqa: E402
from packages.genai_core.config import Settings, get_settings  # noqa: E402
from packages.genai_core.errors import (  # noqa: E402
    NotFoundError,
    ServiceError,
    UpstreamError,
    ValidationError,
    run_with_timeout,
)
from packages.genai_core.logging_config import setup_logging  # noqa: E402
from packages.genai_core.providers import GeminiProvider, LLMProvider  # noqa: E402
from packages.genai_core.queries import (  # noqa: E402
    check_connection,
    collect_results,
    find_company_ids,
    list_prompt_documents,
    parse_prompt_id,
)
from packages.genai_core.store import DocumentStore, FirestoreDocumentStore  # noqa: E402

from .schemas import (  # noqa: E402
    CompanyRef,
    ConnectionResponse,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_llm(request: Request) -> LLMProvider:
    return request.app.state.provider


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Verifica el estado del servicio"""
    return HealthResponse(status="healthy", version=__version__)


@router.post(
    "/generate", response_model=GenerateResponse, responses=ERRORS, tags=["Gemini"]
)
async def generate(
    request: Optional[GenerateRequest] = None,
    provider: LLMProvider = Depends(get_llm),
    settings: Settings = Depends(get_app_settings),
):
    """
    Genera contenido con Gemini a partir de `input`.

    El prompt no se valida más allá de su presencia; el resto lo decide
    el servicio de generación.
    """
    if request is None or not request.input:
        raise ValidationError("Prompt is required")

    try:
        result = await run_with_timeout(
            provider.generate(request.input), settings.request_timeout_seconds
        )
    except Exception as e:
        logger.exception(f"Error generating content: {e}")
        raise UpstreamError("Failed to generate content") from e

    return GenerateResponse(response=result.text)


@router.get(
    "/check-connection",
    response_model=ConnectionResponse,
    responses=ERRORS,
    tags=["Firestore"],
)
async def check_firestore_connection(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Verifica que Firestore sea alcanzable con las credenciales actuales"""
    try:
        await check_connection(store, settings)
    except Exception as e:
        logger.exception(f"Error fetching Firestore data: {e}")
        raise UpstreamError("Failed to fetch data from Firestore") from e

    logger.info("Firestore connection established successfully")
    return ConnectionResponse(
        status="success", message="Successfully connected to Firestore."
    )


@router.get("/getdocuments", responses=ERRORS, tags=["Firestore"])
async def get_documents(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> list[dict[str, Any]]:
    """Lista todos los documentos de la colección de prompts"""
    try:
        return await list_prompt_documents(store, settings)
    except NotFoundError:
        raise
    except Exception as e:
        logger.exception(f"Error fetching documents: {e}")
        raise UpstreamError("Failed to fetch documents") from e


@router.get(
    "/company", response_model=list[CompanyRef], responses=ERRORS, tags=["Firestore"]
)
async def get_company(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Identificadores de los registros de la compañía por defecto"""
    try:
        return await find_company_ids(store, settings)
    except NotFoundError:
        raise
    except Exception as e:
        logger.exception(f"Error fetching company data: {e}")
        raise UpstreamError("Failed to fetch company data") from e


@router.get("/results", responses=ERRORS, tags=["Firestore"])
async def get_results(
    company_name: Optional[str] = Query(None, alias="companyName"),
    prompt_id: Optional[str] = Query(None, alias="promptId"),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> list[dict[str, Any]]:
    """
    Resultados de una compañía para un prompt.

    Busca los registros de la compañía y junta los resultados de cada uno
    cuyo promptId coincida. Sin registros de la compañía responde 404;
    con registros pero sin resultados responde una lista vacía.
    """
    company_name = company_name or settings.default_company_name
    try:
        return await collect_results(
            store,
            settings,
            company_name,
            parse_prompt_id(prompt_id, default=settings.default_prompt_id),
        )
    except NotFoundError:
        raise
    except Exception as e:
        logger.exception(f"Error fetching results: {e}")
        raise UpstreamError("Failed to fetch results") from e


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    """Errores fuera de las rutas (p. ej. al serializar) también responden JSON"""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500, content=ServiceError("Internal server error").to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Los errores de validación de FastAPI (422) se responden como 400"""
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors and errors[0].get("loc") else "request"
    error = ValidationError(f"Invalid value for '{field}'")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    provider: Optional[LLMProvider] = None,
) -> FastAPI:
    """
    Construye la aplicación.

    Los clientes se inyectan aquí; los que falten se crean al arrancar
    a partir de la configuración.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Inicialización de clientes externos"""
        if app.state.settings is None:
            app.state.settings = get_settings()
        setup_logging(app.state.settings.log_level)

        owns_store = app.state.store is None
        if owns_store:
            app.state.store = FirestoreDocumentStore(app.state.settings)
        if app.state.provider is None:
            app.state.provider = GeminiProvider(settings=app.state.settings)

        logger.info(
            f"API lista. Firestore: {app.state.settings.firestore_project_id}/"
            f"{app.state.settings.firestore_database_id}"
        )
        yield
        logger.info("Cerrando aplicación...")
        if owns_store:
            await app.state.store.close()

    app = FastAPI(
        title="Argano GenAI API",
        description="Proxy de Gemini y consultas de resultados en Firestore",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.provider = provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "services.api.main:app", host=settings.api_host, port=settings.api_port
    )
