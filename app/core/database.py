"""
Conexión a la base de datos.

El engine se crea una sola vez por proceso, en el primer uso. Si varias
peticiones llegan a la vez antes de que exista, todas esperan la misma
inicialización en lugar de abrir engines duplicados.
"""
import logging
import threading
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core.config import settings

logger = logging.getLogger(__name__)

# Base para los modelos
Base = declarative_base()

_engine: Optional[Engine] = None
_engine_lock = threading.Lock()

SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def get_engine() -> Engine:
    """Obtener el engine del proceso, creándolo si todavía no existe."""
    global _engine
    if _engine is not None:
        return _engine

    with _engine_lock:
        # Otro hilo pudo haberlo creado mientras esperábamos el lock
        if _engine is None:
            _engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
            SessionLocal.configure(bind=_engine)
            logger.info("Engine de base de datos inicializado")
    return _engine


def reset_engine() -> None:
    """Cerrar el engine actual (shutdown de la app o tests)."""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
            logger.info("Engine de base de datos cerrado")


# Dependency para FastAPI
def get_db():
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
