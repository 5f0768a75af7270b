"""
Script CLI para consultar los resultados de una compañía en Firestore
"""

import sys
from pathlib import Path

# Agregar root al path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
import asyncio
import json

from packages.genai_core import FirestoreDocumentStore, NotFoundError, get_settings
from packages.genai_core.logging_config import setup_logging
from packages.genai_core.queries import collect_results, parse_prompt_id


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Junta los resultados de una compañía para un prompt"
    )
    parser.add_argument(
        "--company",
        "-c",
        type=str,
        default=settings.default_company_name,
        help=f"Nombre de la compañía (default: {settings.default_company_name})",
    )
    parser.add_argument(
        "--prompt-id",
        "-p",
        type=str,
        default=str(settings.default_prompt_id),
        help=f"promptId a filtrar (default: {settings.default_prompt_id})",
    )
    args = parser.parse_args()

    setup_logging(settings.log_level)
    store = FirestoreDocumentStore(settings)

    try:
        results = asyncio.run(
            collect_results(
                store,
                settings,
                args.company,
                parse_prompt_id(args.prompt_id, default=settings.default_prompt_id),
            )
        )
    except NotFoundError as e:
        print(f"⚠ {e.message}")
        sys.exit(1)

    print(json.dumps(results, indent=2, ensure_ascii=False, default=str))


if __name__ == "__main__":
    main()
