from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Dict, List, Optional, Sequence, Tuple

from ..db.repository import PokedexRepository, Relation
from ..models.pokemon import Ability, Move, Pokemon

logger = logging.getLogger(__name__)

# columnas de la fila de stats, en el orden canónico de STAT_KEYS
STAT_COLUMNS = ("hp", "attack", "defense", "sp_attack", "sp_defense", "speed")

RELATIONS = (Relation.ABILITIES, Relation.MOVES, Relation.STATS)

class HydrationInconsistency(Exception):
    """Los datos traídos para una entidad no forman un agregado válido."""

    def __init__(self, pokemon_id: int, reason: str):
        super().__init__(f"pokemon {pokemon_id}: {reason}")
        self.pokemon_id = pokemon_id
        self.reason = reason

class Hydrator:
    """
    Arma agregados Pokemon completos a partir del repositorio.

    Política de fallos:
      - Un QueryError en cualquier sub-consulta hace fallar todo `hydrate`.
      - Una entidad cuyos datos no cuadran (stats incompletas, filas de otra
        entidad, nombres vacíos) se descarta y se registra en el log.
    Nunca se devuelve una entidad a medio hidratar.

    `executor` (opcional) paraleliza las sub-consultas por entidad. Debe ser
    un pool distinto al que ejecuta `hydrate`, si no puede bloquearse.
    """

    def __init__(self, repository: PokedexRepository, executor: Optional[Executor] = None):
        self.repository = repository
        self.executor = executor

    def hydrate(self, substring: str) -> List[Pokemon]:
        if not substring:
            return []
        keys = self.repository.find_entity_keys(substring)
        if not keys:
            return []

        # id -> nombre; todo lo demás se indexa por id, nunca por posición
        names: Dict[int, str] = {}
        for row in keys:
            names[row.id] = row.name

        fetched = self._fetch_all(list(names))

        result: List[Pokemon] = []
        for pokemon_id, name in names.items():
            try:
                result.append(self._assemble(pokemon_id, name, substring, fetched))
            except HydrationInconsistency as exc:
                logger.warning("Descartando '%s': %s", name, exc.reason)
        logger.debug("hydrate(%r): %d claves, %d entidades", substring, len(names), len(result))
        return result

    def _fetch_all(self, ids: Sequence[int]) -> Dict[Tuple[int, Relation], Sequence]:
        if self.executor is None:
            return {
                (pid, rel): self.repository.fetch_related(pid, rel)
                for pid in ids
                for rel in RELATIONS
            }

        futures: Dict[Tuple[int, Relation], Future] = {
            (pid, rel): self.executor.submit(self.repository.fetch_related, pid, rel)
            for pid in ids
            for rel in RELATIONS
        }
        try:
            return {key: fut.result() for key, fut in futures.items()}
        except Exception:
            for fut in futures.values():
                fut.cancel()
            raise

    def _rows_for(self, pokemon_id: int, relation: Relation, fetched) -> Sequence:
        rows = fetched.get((pokemon_id, relation))
        if rows is None:
            raise HydrationInconsistency(pokemon_id, f"sin resultado de {relation.value}")
        for row in rows:
            if row.pokemon_id != pokemon_id:
                raise HydrationInconsistency(
                    pokemon_id, f"{relation.value} contiene filas del pokemon {row.pokemon_id}"
                )
        return rows

    def _assemble(self, pokemon_id: int, name: str, substring: str, fetched) -> Pokemon:
        if not name:
            raise HydrationInconsistency(pokemon_id, "nombre vacío")
        if substring.casefold() not in name.casefold():
            raise HydrationInconsistency(pokemon_id, f"'{name}' no contiene '{substring}'")

        abilities = []
        for row in self._rows_for(pokemon_id, Relation.ABILITIES, fetched):
            if not row.name:
                raise HydrationInconsistency(pokemon_id, "habilidad sin nombre")
            abilities.append(Ability(name=row.name))

        moves = []
        for row in self._rows_for(pokemon_id, Relation.MOVES, fetched):
            if not row.name or not row.move_type:
                raise HydrationInconsistency(pokemon_id, "movimiento sin nombre o tipo")
            moves.append(Move(
                name=row.name,
                move_type=row.move_type,
                generation=int(row.generation),
                base_power=row.power,
                pp=row.pp,
                accuracy=row.accuracy,
            ))

        stat_rows = self._rows_for(pokemon_id, Relation.STATS, fetched)
        if len(stat_rows) != 1:
            raise HydrationInconsistency(pokemon_id, f"{len(stat_rows)} filas de stats")
        values = [getattr(stat_rows[0], col, None) for col in STAT_COLUMNS]
        if any(v is None for v in values):
            raise HydrationInconsistency(pokemon_id, "stats incompletas")

        return Pokemon(
            name=name,
            stats=tuple(int(v) for v in values),
            abilities=tuple(abilities),
            moves=tuple(moves),
        )
