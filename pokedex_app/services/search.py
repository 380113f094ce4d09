from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Tuple, Union

from ..db.repository import QueryError
from ..models.pokemon import Pokemon
from .hydrator import Hydrator

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = int(os.environ.get("POKEDEX_SEARCH_WORKERS", "4"))

@dataclass(frozen=True)
class Found:
    entities: Tuple[Pokemon, ...]

@dataclass(frozen=True)
class NotFound:
    @property
    def entities(self) -> Tuple[Pokemon, ...]:
        return ()

NOT_FOUND = NotFound()

Outcome = Union[Found, NotFound]

class SearchOrchestrator:
    """
    Lanza cada búsqueda como una tarea independiente en un pool de hilos.
    No encola ni serializa: dos `submit` seguidos corren en paralelo y
    quien llama decide cuál resultado sigue vigente.
    El Future devuelto siempre resuelve a un Outcome, nunca a una excepción.
    """

    def __init__(self, hydrator: Hydrator, max_workers: int | None = None):
        self.hydrator = hydrator
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers or DEFAULT_WORKERS,
            thread_name_prefix="pokedex-search",
        )

    def submit(self, query: str) -> "Future[Outcome]":
        logger.debug("submit(%r)", query)
        return self._pool.submit(self._search, query)

    def _search(self, query: str) -> Outcome:
        try:
            entities = self.hydrator.hydrate(query)
        except QueryError as exc:
            logger.warning("Búsqueda %r sin resultados por error de base: %s", query, exc)
            return NOT_FOUND
        except Exception:
            logger.exception("Error inesperado buscando %r", query)
            return NOT_FOUND
        logger.debug("búsqueda %r completada: %d resultados", query, len(entities))
        if not entities:
            return NOT_FOUND
        return Found(tuple(entities))

    def shutdown(self, wait: bool = False) -> None:
        self._pool.shutdown(wait=wait, cancel_futures=True)
