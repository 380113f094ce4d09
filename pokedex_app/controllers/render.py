from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..models.pokemon import Ability, Move, Pokemon
from .view_state import Browsing, Detail, State

EMPTY_VALUE = "—"
PLACEHOLDER = "Escribe el nombre de un Pokémon"

@dataclass(frozen=True)
class ListRow:
    key: str
    name: str
    ability_columns: Tuple[Tuple[str, ...], ...]

@dataclass(frozen=True)
class ListView:
    query: str
    rows: Tuple[ListRow, ...]
    status: str

@dataclass(frozen=True)
class MoveRow:
    name: str
    move_type: str
    power: str
    accuracy: str
    pp: str
    generation: str

@dataclass(frozen=True)
class DetailView:
    query: str
    name: str
    stats: Tuple[Tuple[str, int], ...]
    total: int
    abilities: Tuple[str, ...]
    moves: Tuple[MoveRow, ...]

View = Union[ListView, DetailView]

def ability_columns(abilities: Tuple[Ability, ...]) -> Tuple[Tuple[str, ...], ...]:
    """
    Hasta dos habilidades: una columna por habilidad.
    Con más: dos columnas, las dos primeras y luego el resto.
    """
    names = [a.name.upper() for a in abilities]
    if len(names) <= 2:
        return tuple((n,) for n in names)
    return (tuple(names[:2]), tuple(names[2:]))

def _opt(v: Optional[int]) -> str:
    return EMPTY_VALUE if v is None else str(v)

def move_row(move: Move) -> MoveRow:
    return MoveRow(
        name=move.name,
        move_type=move.move_type,
        power=_opt(move.base_power),
        accuracy=_opt(move.accuracy),
        pp=_opt(move.pp),
        generation=str(move.generation),
    )

def _status(state: Browsing) -> str:
    if not state.query:
        return PLACEHOLDER
    if state.searching:
        return f"Buscando '{state.query}'..."
    if not state.results:
        return "Sin coincidencias"
    n = len(state.results)
    return f"{n} resultado" if n == 1 else f"{n} resultados"

def render_detail(query: str, pokemon: Pokemon) -> DetailView:
    return DetailView(
        query=query,
        name=pokemon.name,
        stats=tuple(pokemon.stats_by_key().items()),
        total=pokemon.base_stat_total,
        abilities=tuple(a.name for a in pokemon.abilities),
        moves=tuple(move_row(m) for m in pokemon.moves),
    )

def render(state: State) -> View:
    if isinstance(state, Detail):
        return render_detail(state.query, state.selected)
    rows = tuple(
        ListRow(key=p.key, name=p.name, ability_columns=ability_columns(p.abilities))
        for p in state.results
    )
    return ListView(query=state.query, rows=rows, status=_status(state))
