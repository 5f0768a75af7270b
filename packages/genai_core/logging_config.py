"""Logging setup shared by the API and the CLI scripts."""

import logging


def setup_logging(level: str | int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
