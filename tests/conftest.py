"""
Fixtures compartidas: dobles de Firestore y Gemini
"""
import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient  # noqa: E402

from packages.genai_core.config import Settings  # noqa: E402
from packages.genai_core.providers import LLMProvider, LLMResponse  # noqa: E402
from packages.genai_core.store import DocumentStore, StoredDocument  # noqa: E402
from services.api.main import create_app  # noqa: E402


class FakeDocumentStore(DocumentStore):
    """Store en memoria que registra cada llamada"""

    def __init__(self):
        self.collections: dict[str, list[StoredDocument]] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.completed: list[str] = []
        self.fail_on: set[str] = set()
        self.delays: dict[str, float] = {}

    def add(self, collection: str, doc_id: str, **fields) -> StoredDocument:
        doc = StoredDocument(id=doc_id, data=fields)
        self.collections.setdefault(collection, []).append(doc)
        return doc

    def child_queries(self) -> list[str]:
        return [path for kind, path in self.calls if kind == "query" and "/" in path]

    async def list_collections(self) -> list[str]:
        self.calls.append(("list_collections", None))
        if "list_collections" in self.fail_on:
            raise ConnectionError("Firestore unreachable")
        return sorted(path for path in self.collections if "/" not in path)

    async def query(self, collection, where=None, order_by=None, descending=False):
        self.calls.append(("query", collection))
        if collection in self.delays:
            await asyncio.sleep(self.delays[collection])
        if collection in self.fail_on:
            raise RuntimeError(f"query failed: {collection}")

        docs = [
            doc
            for doc in self.collections.get(collection, [])
            if all(doc.data.get(k) == v for k, v in (where or {}).items())
        ]
        if order_by:
            docs = sorted(docs, key=lambda d: d.data[order_by], reverse=descending)
        self.completed.append(collection)
        return docs


class FakeLLMProvider(LLMProvider):
    """Provider que responde un texto fijo o falla"""

    provider_name = "fake"

    def __init__(self, text: str = "Texto generado", error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(text=self.text, model="fake-model", provider="fake")

    def is_available(self) -> bool:
        return True

    @property
    def default_model(self) -> str:
        return "fake-model"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None, gemini_api_key="test-key", request_timeout_seconds=2.0
    )


@pytest.fixture
def store():
    return FakeDocumentStore()


@pytest.fixture
def provider():
    return FakeLLMProvider()


@pytest.fixture
def client(settings, store, provider):
    """Cliente de test para FastAPI con lifespan y dobles inyectados"""
    app = create_app(settings=settings, store=store, provider=provider)
    with TestClient(app) as client:
        yield client
