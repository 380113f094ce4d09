from __future__ import annotations
import tkinter as tk
from tkinter import ttk, font as tkfont
from typing import Callable

from pokedex_app.controllers.render import DetailView
from pokedex_app.models.pokemon import STAT_KEYS
from pokedex_app.gui.ui.treeview_kit import set_style, apply_zebra, insert_with_zebra, clear

MAX_BASE_STAT = 255


class PokemonDetailView(ttk.Frame):
    """Ficha de un Pokémon: stats base con total, habilidades y movimientos."""

    def __init__(self, master, on_back: Callable[[], None]):
        super().__init__(master)
        self.on_back = on_back
        self._build_ui()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        head = ttk.Frame(self)
        head.grid(row=0, column=0, sticky="ew", pady=(0, 6))
        ttk.Button(head, text="← Volver", command=self.on_back).pack(side="left")
        self.name_var = tk.StringVar()
        self._title_font = tkfont.nametofont("TkHeadingFont").copy()
        self._title_font.configure(size=14, weight="bold")
        ttk.Label(head, textvariable=self.name_var, font=self._title_font).pack(side="left", padx=12)

        top = ttk.Frame(self)
        top.grid(row=1, column=0, sticky="ew")
        top.columnconfigure(0, weight=1)
        top.columnconfigure(1, weight=1)

        grp = ttk.LabelFrame(top, text="Stats base")
        grp.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        grp.columnconfigure(2, weight=1)
        self.stat_vars = {k: tk.StringVar(value="-") for k in STAT_KEYS}
        self.stat_bars = {}
        for r, k in enumerate(STAT_KEYS):
            ttk.Label(grp, text=k).grid(row=r, column=0, sticky="e", padx=4, pady=2)
            ttk.Label(grp, textvariable=self.stat_vars[k], width=5, anchor="e").grid(row=r, column=1, padx=4, pady=2)
            bar = ttk.Progressbar(grp, maximum=MAX_BASE_STAT, length=180)
            bar.grid(row=r, column=2, sticky="ew", padx=4, pady=2)
            self.stat_bars[k] = bar
        self.total_var = tk.StringVar(value="-")
        ttk.Label(grp, text="Total").grid(row=len(STAT_KEYS), column=0, sticky="e", padx=4, pady=(6, 2))
        ttk.Label(grp, textvariable=self.total_var, width=5, anchor="e").grid(row=len(STAT_KEYS), column=1, padx=4, pady=(6, 2))

        grp2 = ttk.LabelFrame(top, text="Habilidades")
        grp2.grid(row=0, column=1, sticky="nsew")
        self.abilities_var = tk.StringVar()
        ttk.Label(grp2, textvariable=self.abilities_var, justify="left").pack(anchor="nw", padx=6, pady=4)

        mv = ttk.LabelFrame(self, text="Movimientos")
        mv.grid(row=2, column=0, sticky="nsew", pady=(8, 0))
        mv.rowconfigure(0, weight=1)
        mv.columnconfigure(0, weight=1)

        cols = ("name", "type", "power", "accuracy", "pp", "generation")
        self.moves_tree = ttk.Treeview(mv, columns=cols, show="headings")
        scroll = ttk.Scrollbar(mv, orient="vertical", command=self.moves_tree.yview)
        self.moves_tree.configure(yscrollcommand=scroll.set)
        self.moves_tree.grid(row=0, column=0, sticky="nsew")
        scroll.grid(row=0, column=1, sticky="ns")

        self.moves_tree.column("name",       width=180, anchor="w")
        self.moves_tree.column("type",       width=100, anchor="w")
        self.moves_tree.column("power",      width=70,  anchor="e")
        self.moves_tree.column("accuracy",   width=70,  anchor="e")
        self.moves_tree.column("pp",         width=50,  anchor="e")
        self.moves_tree.column("generation", width=50,  anchor="center")
        self.moves_tree.heading("name",       text="Movimiento")
        self.moves_tree.heading("type",       text="Tipo")
        self.moves_tree.heading("power",      text="Potencia")
        self.moves_tree.heading("accuracy",   text="Precisión")
        self.moves_tree.heading("pp",         text="PP")
        self.moves_tree.heading("generation", text="Gen")

        set_style(self.moves_tree)
        apply_zebra(self.moves_tree)

    def show(self, view: DetailView):
        self.name_var.set(view.name.capitalize())
        for key, value in view.stats:
            self.stat_vars[key].set(str(value))
            self.stat_bars[key]["value"] = min(value, MAX_BASE_STAT)
        self.total_var.set(str(view.total))
        self.abilities_var.set("\n".join(a.upper() for a in view.abilities) or "—")

        clear(self.moves_tree)
        for m in view.moves:
            insert_with_zebra(self.moves_tree, (m.name, m.move_type, m.power, m.accuracy, m.pp, m.generation))
