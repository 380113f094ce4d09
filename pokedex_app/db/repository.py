from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from sqlalchemy import String, func, select
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from .models import Pokemon, Ability, PokemonAbility, Move, MoveType, PokemonMove

logger = logging.getLogger(__name__)

class QueryError(Exception):
    """La base no responde o la consulta es inválida."""

class Relation(str, Enum):
    ABILITIES = "abilities"
    MOVES = "moves"
    STATS = "stats"

def _abilities_stmt(pokemon_id: int):
    return (
        select(PokemonAbility.pokemon_id, Ability.name, PokemonAbility.slot)
        .join(Ability, PokemonAbility.ability_id == Ability.id)
        .where(PokemonAbility.pokemon_id == pokemon_id)
        .order_by(PokemonAbility.slot.asc(), Ability.name.asc())
    )

def _moves_stmt(pokemon_id: int):
    return (
        select(
            PokemonMove.pokemon_id,
            Move.name,
            MoveType.name.label("move_type"),
            Move.power,
            Move.pp,
            Move.accuracy,
            Move.generation,
        )
        .join(Move, PokemonMove.move_id == Move.id)
        .join(MoveType, Move.type_id == MoveType.id)
        .where(PokemonMove.pokemon_id == pokemon_id)
        .order_by(Move.generation.asc(), Move.name.asc())
    )

def _stats_stmt(pokemon_id: int):
    return select(
        Pokemon.id.label("pokemon_id"),
        Pokemon.hp,
        Pokemon.attack,
        Pokemon.defense,
        Pokemon.sp_attack,
        Pokemon.sp_defense,
        Pokemon.speed,
    ).where(Pokemon.id == pokemon_id)

_RELATION_QUERIES = {
    Relation.ABILITIES: _abilities_stmt,
    Relation.MOVES: _moves_stmt,
    Relation.STATS: _stats_stmt,
}

class PokedexRepository:
    """
    Acceso de solo lectura a la base de Pokémon.
    Recibe el engine compartido; cada llamada abre su propia Session,
    así puede usarse desde varios hilos a la vez. En SQLite el engine debe
    venir de `make_engine`, que registra la función `casefold`.
    Todas las filas devueltas traen la columna `pokemon_id` (o `id`) para
    poder agruparlas por entidad sin depender del orden.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _run(self, stmt, what: str) -> list[Row]:
        try:
            with Session(self.engine) as s:
                rows = s.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("Fallo consultando %s: %s", what, exc)
            raise QueryError(f"Error consultando {what}") from exc
        logger.debug("%s -> %d filas", what, len(rows))
        return rows

    def find_entity_keys(self, substring: str) -> Sequence[Row]:
        """Filas (id, name) cuyo nombre contiene `substring` (sin distinguir mayúsculas)."""
        if not substring:
            return []
        if self.engine.dialect.name == "sqlite":
            # casefold registrado en make_engine; autoescape trata % y _ como texto
            match = func.casefold(Pokemon.name, type_=String).contains(substring.casefold(), autoescape=True)
        else:
            match = Pokemon.name.icontains(substring, autoescape=True)
        stmt = (
            select(Pokemon.id, Pokemon.name)
            .where(match)
            .order_by(Pokemon.name.asc())
        )
        return self._run(stmt, f"pokemon ~ {substring!r}")

    def fetch_related(self, pokemon_id: int, relation: Relation | str) -> Sequence[Row]:
        relation = Relation(relation)
        stmt = _RELATION_QUERIES[relation](pokemon_id)
        return self._run(stmt, f"{relation.value} de pokemon {pokemon_id}")
