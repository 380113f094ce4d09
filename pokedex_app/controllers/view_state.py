"""Estado de la vista (lista <-> detalle) y su función de transición.

`transition(state, event)` es pura: devuelve el nuevo estado y, si hace
falta, un `SearchRequest` que el bucle anfitrión debe ejecutar. El
resultado vuelve como `ResultsArrived` etiquetado con la consulta que lo
originó; solo se aplica si esa consulta sigue siendo la actual.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from ..models.pokemon import Pokemon
from ..services.search import Outcome

logger = logging.getLogger(__name__)

# ---------- Estados ----------
@dataclass(frozen=True)
class Browsing:
    query: str = ""
    results: Tuple[Pokemon, ...] = ()
    searching: bool = False

@dataclass(frozen=True)
class Detail:
    query: str
    results: Tuple[Pokemon, ...]
    selected: Pokemon

State = Union[Browsing, Detail]

INITIAL_STATE = Browsing()

# ---------- Eventos ----------
@dataclass(frozen=True)
class QueryChanged:
    text: str

@dataclass(frozen=True)
class ResultsArrived:
    for_query: str
    outcome: Outcome

@dataclass(frozen=True)
class EntitySelected:
    key: str

@dataclass(frozen=True)
class DetailClosed:
    pass

Event = Union[QueryChanged, ResultsArrived, EntitySelected, DetailClosed]

# ---------- Trabajo pendiente ----------
@dataclass(frozen=True)
class SearchRequest:
    query: str

def transition(state: State, event: Event) -> Tuple[State, Optional[SearchRequest]]:
    if isinstance(event, QueryChanged):
        # editar la consulta siempre vuelve a la lista
        if not event.text:
            return Browsing(), None
        return Browsing(query=event.text, searching=True), SearchRequest(event.text)

    if isinstance(event, ResultsArrived):
        if event.for_query != state.query:
            logger.debug("Descartado resultado obsoleto de %r (actual %r)", event.for_query, state.query)
            return state, None
        results = tuple(event.outcome.entities)
        if isinstance(state, Detail):
            return replace(state, results=results), None
        return Browsing(query=state.query, results=results, searching=False), None

    if isinstance(event, EntitySelected):
        if not isinstance(state, Browsing):
            return state, None
        for pokemon in state.results:
            if pokemon.key == event.key:
                return Detail(query=state.query, results=state.results, selected=pokemon), None
        logger.debug("Selección de %r ignorada: no está en los resultados actuales", event.key)
        return state, None

    if isinstance(event, DetailClosed):
        if isinstance(state, Detail):
            return Browsing(query=state.query, results=state.results), None
        return state, None

    raise TypeError(f"Evento desconocido: {event!r}")

def select_index(state: State, index: int) -> Tuple[State, Optional[SearchRequest]]:
    """Selección por posición; fuera de rango no hace nada."""
    if not isinstance(state, Browsing) or not 0 <= index < len(state.results):
        return state, None
    return transition(state, EntitySelected(state.results[index].key))
