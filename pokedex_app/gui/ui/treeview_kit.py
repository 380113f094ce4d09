# pokedex_app/gui/ui/treeview_kit.py
import tkinter as tk
from tkinter import ttk, font as tkfont

TREE_STYLE = "Dex.Treeview"

PALETTE = {
    "bg": "#ffffff", "fg": "#222222", "field": "#ffffff",
    "sel_bg": "#e6f2ff", "sel_fg": "#0b3d91",
    "head_bg": "#f5f5f5", "head_fg": "#333333",
    "grid": "#dddddd", "hover": "#ececec",
}

# ---------- Estilo base ----------
def apply_style(root, theme: str = "clam"):
    """
    Aplica un estilo consistente para todos los Treeview.
    Llama esto una vez al iniciar la app.
    """
    style = ttk.Style(root)
    try:
        style.theme_use(theme)
    except tk.TclError:
        pass

    font_row = tkfont.nametofont("TkFixedFont").copy()
    font_row.configure(size=10)
    font_head = tkfont.nametofont("TkHeadingFont").copy()
    font_head.configure(size=10, weight="bold")

    style.configure(
        TREE_STYLE,
        font=font_row,
        rowheight=22,
        background=PALETTE["bg"],
        fieldbackground=PALETTE["field"],
        foreground=PALETTE["fg"],
        bordercolor=PALETTE["grid"],
    )
    style.map(
        TREE_STYLE,
        background=[("selected", PALETTE["sel_bg"])],
        foreground=[("selected", PALETTE["sel_fg"])],
    )
    style.configure(
        TREE_STYLE + ".Heading",
        font=font_head,
        background=PALETTE["head_bg"],
        foreground=PALETTE["head_fg"],
        bordercolor=PALETTE["grid"],
    )
    style.map(
        TREE_STYLE + ".Heading",
        background=[("active", PALETTE["hover"])],
    )

def set_style(tree: ttk.Treeview):
    tree.configure(style=TREE_STYLE)

# ---------- Cebra ----------
def apply_zebra(tree: ttk.Treeview, odd="#fafafa", even="#ffffff"):
    tree.tag_configure("odd",  background=odd)
    tree.tag_configure("even", background=even)

def insert_with_zebra(tree: ttk.Treeview, values, **kwargs):
    """Inserta una fila alternando 'even'/'odd' automáticamente."""
    idx = len(tree.get_children(""))
    base_tags = set(kwargs.pop("tags", ()))
    base_tags.add("even" if idx % 2 == 0 else "odd")
    return tree.insert("", "end", values=values, tags=tuple(base_tags), **kwargs)

def clear(tree: ttk.Treeview):
    tree.delete(*tree.get_children(""))

# ---------- Autosize ----------
def autosize_columns(tree: ttk.Treeview, pad=24, min_w=60, max_w=360):
    f = tkfont.nametofont("TkFixedFont")
    for col in tree["columns"]:
        header = tree.heading(col, "text") or ""
        width = f.measure(header) + pad
        for iid in tree.get_children(""):
            val = str(tree.set(iid, col))
            width = max(width, f.measure(val) + pad)
        tree.column(col, width=max(min_w, min(width, max_w)))
