"""
Verifica la conexión con Firestore usando la configuración actual
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio

from packages.genai_core import FirestoreDocumentStore, get_settings
from packages.genai_core.queries import check_connection


def main():
    settings = get_settings()
    store = FirestoreDocumentStore(settings)

    print(
        f"Conectando a {settings.firestore_project_id}/{settings.firestore_database_id}..."
    )
    collections = asyncio.run(check_connection(store, settings))

    print(f"✓ Conexión establecida. {len(collections)} colecciones:")
    for name in collections:
        print(f"  - {name}")


if __name__ == "__main__":
    main()
