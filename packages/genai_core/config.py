"""
Configuración central del proyecto
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-pro"
    temperature: float = 0.9
    top_p: float = 1.0
    top_k: int = 1
    max_output_tokens: int = 4096

    # Firestore
    firestore_project_id: str = "arganogenai"
    firestore_database_id: str = "arganogenaidb"
    firestore_credentials_path: Optional[str] = None

    # Colecciones
    prompts_collection: str = "prompts"
    parent_collection: str = "StrategicAc"
    results_subcollection: str = "results"

    # /company y /results no usan los mismos nombres de campo
    company_field: str = "companyName"
    company_order_field: str = "createdAt"
    results_company_field: str = "CompanyName"
    results_order_field: str = "Timestamp"
    prompt_id_field: str = "promptId"

    # Defaults de consulta
    default_company_name: str = "Argano"
    default_prompt_id: int = 1

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    request_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
