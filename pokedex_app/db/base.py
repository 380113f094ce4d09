from __future__ import annotations
import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase

DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "pokedex.db")
DEFAULT_DB_URL = os.environ.get("POKEDEX_DB_URL", f"sqlite:///{os.path.abspath(DEFAULT_DB_PATH)}")

class Base(DeclarativeBase):
    pass

def _read_only_url(url: str) -> str:
    # sqlite:///ruta.db -> sqlite:///file:ruta.db?mode=ro&uri=true
    prefix = "sqlite:///"
    if not url.startswith(prefix) or "?" in url:
        return url
    path = url[len(prefix):]
    if not path or path == ":memory:" or path.startswith("file:"):
        return url
    return f"{prefix}file:{path}?mode=ro&uri=true"

def _casefold(value):
    return None if value is None else str(value).casefold()

def _register_casefold(engine: Engine) -> None:
    # lower() de SQLite solo pliega ASCII; casefold() cubre "É", "ß", etc.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.create_function("casefold", 1, _casefold, deterministic=True)

def make_engine(url: str | None = None, read_only: bool = False, echo: bool = False) -> Engine:
    """Crea el engine compartido por todas las consultas.

    No hay engine global: quien arranca la app crea uno y lo pasa al
    repositorio, que lo comparte (solo lectura) entre los hilos de búsqueda.
    En SQLite registra la función `casefold` que usa la búsqueda por nombre.
    """
    url = url or DEFAULT_DB_URL
    if read_only:
        url = _read_only_url(url)
    engine = create_engine(url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        _register_casefold(engine)
    return engine
