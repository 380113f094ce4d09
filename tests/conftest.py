import os
import sys
import threading
from collections import namedtuple

import pytest
from sqlalchemy.orm import Session

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from pokedex_app.db.base import Base, make_engine  # noqa: E402
from pokedex_app.db.models import Ability, Move, MoveType, Pokemon, PokemonAbility, PokemonMove  # noqa: E402
from pokedex_app.db.repository import PokedexRepository, QueryError, Relation  # noqa: E402

KeyRow = namedtuple("KeyRow", "id name")
AbilityRow = namedtuple("AbilityRow", "pokemon_id name slot")
MoveRow = namedtuple("MoveRow", "pokemon_id name move_type power pp accuracy generation")
StatsRow = namedtuple("StatsRow", "pokemon_id hp attack defense sp_attack sp_defense speed")

# name -> (stats, [abilities], [(move, type, power, pp, accuracy, gen)])
DEX = {
    "pikachu": (
        (35, 55, 40, 50, 50, 90),
        ["static", "lightning-rod"],
        [("thunder-shock", "electric", 40, 30, 100, 1), ("growl", "normal", None, 40, 100, 1)],
    ),
    "pidgey": (
        (40, 45, 40, 35, 35, 56),
        ["keen-eye", "tangled-feet", "big-pecks"],
        [("gust", "flying", 40, 35, 100, 1), ("sand-attack", "ground", None, 15, 100, 1)],
    ),
    "bulbasaur": (
        (45, 49, 49, 65, 65, 45),
        ["overgrow", "chlorophyll"],
        [("vine-whip", "grass", 45, 25, 100, 1)],
    ),
    "unown": (
        (48, 72, 48, 72, 48, 48),
        [],
        [],
    ),
    "flabébé": (
        (44, 38, 39, 61, 79, 42),
        ["flower-veil"],
        [("fairy-wind", "fairy", 40, 30, 100, 6)],
    ),
    "porygon_z": (
        (85, 80, 70, 135, 75, 90),
        ["adaptability"],
        [("tri-attack", "normal", 80, 10, 100, 1), ("nasty-plot", "dark", None, 20, None, 4)],
    ),
}


def seed(engine):
    Base.metadata.create_all(bind=engine)
    with Session(engine) as s:
        abilities, types, moves = {}, {}, {}
        for name, (stats, ability_names, move_specs) in DEX.items():
            p = Pokemon(name=name, hp=stats[0], attack=stats[1], defense=stats[2],
                        sp_attack=stats[3], sp_defense=stats[4], speed=stats[5])
            s.add(p)
            s.flush()
            for slot, an in enumerate(ability_names, start=1):
                if an not in abilities:
                    abilities[an] = Ability(name=an)
                    s.add(abilities[an])
                    s.flush()
                s.add(PokemonAbility(pokemon_id=p.id, ability_id=abilities[an].id, slot=slot))
            for mname, tname, power, pp, acc, gen in move_specs:
                if tname not in types:
                    types[tname] = MoveType(name=tname)
                    s.add(types[tname])
                    s.flush()
                if mname not in moves:
                    moves[mname] = Move(name=mname, type_id=types[tname].id, power=power,
                                        pp=pp, accuracy=acc, generation=gen)
                    s.add(moves[mname])
                    s.flush()
                s.add(PokemonMove(pokemon_id=p.id, move_id=moves[mname].id))
        s.commit()


@pytest.fixture()
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'pokedex.db'}"
    engine = make_engine(url)
    seed(engine)
    engine.dispose()
    return url


@pytest.fixture()
def engine(db_url):
    eng = make_engine(db_url, read_only=True)
    yield eng
    eng.dispose()


@pytest.fixture()
def repository(engine):
    return PokedexRepository(engine)


class FakeStore:
    """Repositorio en memoria con fallos y esperas configurables."""

    def __init__(self, dex=None):
        self.dex = dict(dex or DEX)
        self.ids = {name: i for i, name in enumerate(sorted(self.dex), start=1)}
        self.calls = []
        self.fail_on = set()       # {(pid, Relation)} o {"keys"}
        self.overrides = {}        # {(pid, Relation): rows}
        self.gates = {}            # {query: threading.Event}
        self._lock = threading.Lock()

    def find_entity_keys(self, substring):
        with self._lock:
            self.calls.append(("keys", substring))
        gate = self.gates.get(substring)
        if gate is not None:
            gate.wait(timeout=5)
        if "keys" in self.fail_on:
            raise QueryError("store unreachable")
        if not substring:
            return []
        return [KeyRow(self.ids[n], n) for n in sorted(self.dex) if substring.casefold() in n.casefold()]

    def fetch_related(self, pokemon_id, relation):
        relation = Relation(relation)
        with self._lock:
            self.calls.append((pokemon_id, relation))
        if (pokemon_id, relation) in self.fail_on:
            raise QueryError(f"{relation.value} failed")
        if (pokemon_id, relation) in self.overrides:
            return self.overrides[(pokemon_id, relation)]
        name = next(n for n, i in self.ids.items() if i == pokemon_id)
        stats, ability_names, move_specs = self.dex[name]
        if relation is Relation.ABILITIES:
            return [AbilityRow(pokemon_id, a, slot) for slot, a in enumerate(ability_names, start=1)]
        if relation is Relation.MOVES:
            return [MoveRow(pokemon_id, *spec) for spec in move_specs]
        return [StatsRow(pokemon_id, *stats)]


@pytest.fixture()
def fake_store():
    return FakeStore()
