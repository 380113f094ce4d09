import threading
from concurrent.futures import Future

import pytest

from pokedex_app.controllers.search_loop import SearchLoop
from pokedex_app.controllers.view_state import (
    Browsing,
    Detail,
    DetailClosed,
    EntitySelected,
    QueryChanged,
)
from pokedex_app.models.pokemon import Pokemon
from pokedex_app.services.hydrator import Hydrator
from pokedex_app.services.search import NOT_FOUND, Found, SearchOrchestrator

PIKACHU = Pokemon(name="pikachu", stats=(35, 55, 40, 50, 50, 90))
PIDGEY = Pokemon(name="pidgey", stats=(40, 45, 40, 35, 35, 56))


class ManualOrchestrator:
    """Devuelve Futures que el test resuelve en el orden que quiera."""

    def __init__(self):
        self.pending = {}
        self.closed = False

    def submit(self, query):
        fut = Future()
        self.pending[query] = fut
        return fut

    def shutdown(self, wait=False):
        self.closed = True


def test_out_of_order_completion_keeps_last_submitted():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged("pi"))
    loop.dispatch(QueryChanged("pik"))

    orch.pending["pik"].set_result(Found((PIKACHU,)))
    orch.pending["pi"].set_result(Found((PIKACHU, PIDGEY)))
    assert loop.pump() == 2
    assert loop.state == Browsing("pik", (PIKACHU,))


def test_results_are_applied_only_on_pump():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged("pi"))
    orch.pending["pi"].set_result(Found((PIKACHU, PIDGEY)))
    assert loop.state.searching
    loop.pump()
    assert loop.state == Browsing("pi", (PIKACHU, PIDGEY))


def test_empty_query_submits_nothing():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged(""))
    assert orch.pending == {}


def test_cancelled_search_is_not_delivered():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged("pi"))
    orch.pending["pi"].cancel()
    assert loop.pump() == 0
    assert loop.state == Browsing("pi", (), searching=True)


def test_on_change_only_when_state_changes():
    seen = []
    orch = ManualOrchestrator()
    loop = SearchLoop(orch, on_change=seen.append)
    loop.dispatch(QueryChanged("pi"))
    orch.pending["pi"].set_result(Found((PIKACHU,)))
    loop.pump()
    loop.dispatch(EntitySelected("nope"))
    assert seen == [Browsing("pi", (), searching=True), Browsing("pi", (PIKACHU,))]


def test_select_index_and_back():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged("pi"))
    orch.pending["pi"].set_result(Found((PIKACHU, PIDGEY)))
    loop.pump()
    assert loop.select_index(5) == Browsing("pi", (PIKACHU, PIDGEY))
    assert loop.select_index(1) == Detail("pi", (PIKACHU, PIDGEY), PIDGEY)
    assert loop.dispatch(DetailClosed()) == Browsing("pi", (PIKACHU, PIDGEY))


def test_not_found_clears_results():
    orch = ManualOrchestrator()
    loop = SearchLoop(orch)
    loop.dispatch(QueryChanged("zz"))
    orch.pending["zz"].set_result(NOT_FOUND)
    loop.pump()
    assert loop.state == Browsing("zz", ())


def test_close_shuts_down_orchestrator():
    orch = ManualOrchestrator()
    SearchLoop(orch).close()
    assert orch.closed


@pytest.mark.parametrize("workers", [2, 4])
def test_slow_earlier_search_does_not_overwrite_later_one(fake_store, workers):
    gate = threading.Event()
    fake_store.gates["pi"] = gate
    loop = SearchLoop(SearchOrchestrator(Hydrator(fake_store), max_workers=workers))
    try:
        loop.dispatch(QueryChanged("pi"))
        loop.dispatch(QueryChanged("pik"))
        assert loop.wait_and_pump(timeout=5) >= 1
        assert [p.name for p in loop.state.results] == ["pikachu"]

        gate.set()
        assert loop.wait_and_pump(timeout=5) == 1
        assert loop.state.query == "pik"
        assert [p.name for p in loop.state.results] == ["pikachu"]
    finally:
        gate.set()
        loop.close()


def test_dispatch_after_close_does_not_submit():
    seen = []
    orch = ManualOrchestrator()
    loop = SearchLoop(orch, on_change=seen.append)
    loop.close()
    state = loop.dispatch(QueryChanged("pi"))
    assert orch.pending == {}
    assert seen == [state]


def test_on_change_fires_even_if_submit_fails():
    class ClosedPool(ManualOrchestrator):
        def submit(self, query):
            raise RuntimeError("cannot schedule new futures after shutdown")

    seen = []
    loop = SearchLoop(ClosedPool(), on_change=seen.append)
    with pytest.raises(RuntimeError):
        loop.dispatch(QueryChanged("pi"))
    assert seen == [Browsing("pi", (), searching=True)]
