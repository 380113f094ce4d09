from __future__ import annotations

import logging
import queue
from concurrent.futures import Future
from typing import Callable, Optional

from ..services.search import SearchOrchestrator
from .view_state import (
    INITIAL_STATE,
    Event,
    ResultsArrived,
    SearchRequest,
    State,
    select_index,
    transition,
)

logger = logging.getLogger(__name__)

class SearchLoop:
    """
    Anfitrión de la máquina de estados.

    `dispatch` y `pump` se llaman siempre desde el mismo hilo (el de la UI).
    Las búsquedas terminan en hilos del pool; su resultado se encola como
    `ResultsArrived` y se aplica en el siguiente `pump`.
    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        state: State = INITIAL_STATE,
        on_change: Optional[Callable[[State], None]] = None,
    ):
        self.orchestrator = orchestrator
        self.on_change = on_change
        self._state = state
        self._inbox: "queue.Queue[ResultsArrived]" = queue.Queue()
        self._closed = False

    @property
    def state(self) -> State:
        return self._state

    def _apply(self, new_state: State, work: Optional[SearchRequest]) -> State:
        changed = new_state != self._state
        self._state = new_state
        try:
            if work is not None:
                self._start(work)
        finally:
            if changed and self.on_change:
                self.on_change(new_state)
        return new_state

    def dispatch(self, event: Event) -> State:
        return self._apply(*transition(self._state, event))

    def select_index(self, index: int) -> State:
        return self._apply(*select_index(self._state, index))

    def _start(self, work: SearchRequest) -> None:
        if self._closed:
            logger.debug("Bucle cerrado: búsqueda %r no lanzada", work.query)
            return
        fut = self.orchestrator.submit(work.query)
        fut.add_done_callback(lambda f, q=work.query: self._deliver(q, f))

    def _deliver(self, query: str, fut: Future) -> None:
        # corre en el hilo del worker: solo encola
        if fut.cancelled():
            logger.debug("Búsqueda %r cancelada", query)
            return
        self._inbox.put(ResultsArrived(for_query=query, outcome=fut.result()))

    def pump(self, max_events: Optional[int] = None) -> int:
        """Aplica los resultados ya recibidos. Devuelve cuántos procesó."""
        count = 0
        while max_events is None or count < max_events:
            try:
                event = self._inbox.get_nowait()
            except queue.Empty:
                break
            self.dispatch(event)
            count += 1
        return count

    def wait_and_pump(self, timeout: float = 5.0) -> int:
        """Bloquea hasta recibir un resultado y lo aplica (útil fuera de la UI)."""
        try:
            event = self._inbox.get(timeout=timeout)
        except queue.Empty:
            return 0
        self.dispatch(event)
        return 1 + self.pump()

    def close(self) -> None:
        self._closed = True
        self.orchestrator.shutdown()
