from __future__ import annotations
from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class Pokemon(Base):
    __tablename__ = "pokemon"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    hp: Mapped[int] = mapped_column(Integer)
    attack: Mapped[int] = mapped_column(Integer)
    defense: Mapped[int] = mapped_column(Integer)
    sp_attack: Mapped[int] = mapped_column(Integer)
    sp_defense: Mapped[int] = mapped_column(Integer)
    speed: Mapped[int] = mapped_column(Integer)

    abilities: Mapped[list["PokemonAbility"]] = relationship(back_populates="pokemon")
    moves: Mapped[list["PokemonMove"]] = relationship(back_populates="pokemon")

class Ability(Base):
    __tablename__ = "ability"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)

class PokemonAbility(Base):
    __tablename__ = "pokemon_ability"
    pokemon_id: Mapped[int] = mapped_column(ForeignKey("pokemon.id"), primary_key=True)
    ability_id: Mapped[int] = mapped_column(ForeignKey("ability.id"), primary_key=True)
    slot: Mapped[int] = mapped_column(Integer, default=1)

    pokemon: Mapped[Pokemon] = relationship(back_populates="abilities")
    ability: Mapped[Ability] = relationship()

class MoveType(Base):
    __tablename__ = "move_type"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(32), unique=True)

class Move(Base):
    __tablename__ = "move"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    type_id: Mapped[int] = mapped_column(ForeignKey("move_type.id"), index=True)
    # null en movimientos de estado (sin potencia/precisión)
    power: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pp: Mapped[int | None] = mapped_column(Integer, nullable=True)
    accuracy: Mapped[int | None] = mapped_column(Integer, nullable=True)
    generation: Mapped[int] = mapped_column(Integer, default=1)

    move_type: Mapped[MoveType] = relationship()

class PokemonMove(Base):
    __tablename__ = "pokemon_move"
    pokemon_id: Mapped[int] = mapped_column(ForeignKey("pokemon.id"), primary_key=True)
    move_id: Mapped[int] = mapped_column(ForeignKey("move.id"), primary_key=True)

    pokemon: Mapped[Pokemon] = relationship(back_populates="moves")
    move: Mapped[Move] = relationship()
