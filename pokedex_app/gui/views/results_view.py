from __future__ import annotations
from tkinter import ttk
from typing import Callable

from pokedex_app.controllers.render import ListView
from pokedex_app.gui.ui.treeview_kit import set_style, apply_zebra, insert_with_zebra, clear, autosize_columns


class ResultsView(ttk.Frame):
    """
    Lista de coincidencias: nombre + habilidades en mayúsculas.
    Cada fila usa como iid la clave estable del Pokémon, así la selección
    no depende de la posición.
    """

    def __init__(self, master, on_select: Callable[[str], None]):
        super().__init__(master)
        self.on_select = on_select
        self._build_ui()

    def _build_ui(self):
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        cols = ("name", "abilities", "more_abilities")
        self.tree = ttk.Treeview(self, columns=cols, show="headings", selectmode="browse")
        scroll = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=scroll.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        scroll.grid(row=0, column=1, sticky="ns")

        self.tree.column("name",           width=150, anchor="w")
        self.tree.column("abilities",      width=260, anchor="w")
        self.tree.column("more_abilities", width=260, anchor="w")
        self.tree.heading("name",           text="Pokémon")
        self.tree.heading("abilities",      text="Habilidades")
        self.tree.heading("more_abilities", text="")

        set_style(self.tree)
        apply_zebra(self.tree)

        self.tree.bind("<Double-1>", self._on_activate)
        self.tree.bind("<Return>", self._on_activate)

    def show(self, view: ListView):
        clear(self.tree)
        for row in view.rows:
            cols = ["  ".join(c) for c in row.ability_columns] + ["", ""]
            insert_with_zebra(self.tree, (row.name, cols[0], cols[1]), iid=row.key)
        if view.rows:
            autosize_columns(self.tree)

    def _on_activate(self, _event=None):
        sel = self.tree.selection()
        if sel:
            self.on_select(sel[0])
