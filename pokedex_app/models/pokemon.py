from dataclasses import dataclass, field
from typing import Optional, Tuple

STAT_KEYS = ["HP", "Atk", "Def", "SpA", "SpD", "Spe"]

@dataclass(frozen=True)
class Ability:
    name: str

@dataclass(frozen=True)
class Move:
    name: str
    move_type: str
    generation: int
    base_power: Optional[int] = None  # None en movimientos de estado
    pp: Optional[int] = None
    accuracy: Optional[int] = None

@dataclass(frozen=True)
class Pokemon:
    name: str
    stats: Tuple[int, ...]
    abilities: Tuple[Ability, ...] = field(default_factory=tuple)
    moves: Tuple[Move, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Pokemon sin nombre.")
        if len(self.stats) != len(STAT_KEYS):
            raise ValueError(f"'{self.name}' tiene {len(self.stats)} stats, se esperaban {len(STAT_KEYS)}.")

    @property
    def key(self) -> str:
        return self.name

    @property
    def base_stat_total(self) -> int:
        return base_stat_total(self.stats)

    def stats_by_key(self) -> dict:
        return dict(zip(STAT_KEYS, self.stats))

def base_stat_total(stats) -> int:
    return sum(stats)
