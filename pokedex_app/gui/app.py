import logging
import tkinter as tk
from tkinter import ttk

from pokedex_app.controllers.render import ListView, render
from pokedex_app.controllers.search_loop import SearchLoop
from pokedex_app.controllers.view_state import DetailClosed, EntitySelected, QueryChanged, State
from pokedex_app.db.base import make_engine
from pokedex_app.db.repository import PokedexRepository
from pokedex_app.gui.ui.treeview_kit import apply_style
from pokedex_app.gui.views.detail_view import PokemonDetailView
from pokedex_app.gui.views.results_view import ResultsView
from pokedex_app.services.hydrator import Hydrator
from pokedex_app.services.search import SearchOrchestrator
from pokedex_app.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

POLL_MS = 50


class PokedexApp(ttk.Frame):
    """
    Ventana principal. No guarda estado propio: todo pasa por el SearchLoop
    y se redibuja a partir de render(state).
    """

    def __init__(self, master, loop: SearchLoop):
        super().__init__(master)
        self.master.title("Pokédex")
        self.master.geometry("900x650")
        self.pack(fill="both", expand=True, padx=8, pady=8)

        self.loop = loop
        self.loop.on_change = self._redraw

        self._build_ui()
        self._redraw(self.loop.state)
        self.after(POLL_MS, self._poll)

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        self.query_var = tk.StringVar()
        entry = ttk.Entry(self, textvariable=self.query_var)
        entry.grid(row=0, column=0, sticky="ew")
        entry.focus_set()
        self.query_var.trace_add("write", self._on_query_changed)

        self.status_var = tk.StringVar()
        ttk.Label(self, textvariable=self.status_var, foreground="#666666")\
            .grid(row=1, column=0, sticky="w", pady=(4, 4))

        self.results_view = ResultsView(self, on_select=self._on_select)
        self.detail_view = PokemonDetailView(self, on_back=self._on_back)
        self.results_view.grid(row=2, column=0, sticky="nsew")

    # ---------- Eventos de UI -> eventos de estado ----------
    def _on_query_changed(self, *_):
        self.loop.dispatch(QueryChanged(self.query_var.get()))

    def _on_select(self, key: str):
        self.loop.dispatch(EntitySelected(key))

    def _on_back(self):
        self.loop.dispatch(DetailClosed())

    def _poll(self):
        self.loop.pump()
        self.after(POLL_MS, self._poll)

    # ---------- Dibujo ----------
    def _redraw(self, state: State):
        view = render(state)
        if isinstance(view, ListView):
            self.detail_view.grid_remove()
            self.results_view.grid(row=2, column=0, sticky="nsew")
            self.results_view.show(view)
            self.status_var.set(view.status)
        else:
            self.results_view.grid_remove()
            self.detail_view.grid(row=2, column=0, sticky="nsew")
            self.detail_view.show(view)
            self.status_var.set(f"Búsqueda: '{view.query}'")

# Fin de clase PokedexApp

def run():
    setup_logging()
    engine = make_engine(read_only=True)
    orchestrator = SearchOrchestrator(Hydrator(PokedexRepository(engine)))
    loop = SearchLoop(orchestrator)
    logger.info("Pokédex iniciada sobre %s", engine.url)
    try:
        root = tk.Tk()
        apply_style(root)
        app = PokedexApp(master=root, loop=loop)
        app.mainloop()
    finally:
        loop.close()
        engine.dispose()
