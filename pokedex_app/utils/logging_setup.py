"""Logging setup utility for the Pokédex lookup tool.

Usage:
    from pokedex_app.utils.logging_setup import setup_logging
    setup_logging()

The default level comes from POKEDEX_LOG_LEVEL (INFO if unset).
"""
from __future__ import annotations
import logging
import logging.handlers
import os
from pathlib import Path
import sys

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get("POKEDEX_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        # getLevelName devuelve "Level X" si el nombre no existe
        return value if isinstance(value, int) else logging.INFO
    return level

def setup_logging(level: int | str | None = None, log_to_file: bool = False, log_dir: str | None = None) -> None:
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured
        return
    logger.setLevel(_resolve_level(level))

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler(stream=sys.stdout)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_to_file:
        path = Path(log_dir or (Path.cwd() / 'logs'))
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(path / 'app.log', maxBytes=2_000_000, backupCount=3, encoding='utf-8')
        fh.setFormatter(fmt)
        logger.addHandler(fh)
