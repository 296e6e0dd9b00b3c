"""
Configuration de la base de donnees SQLite pour TVTrack.

Ce module fournit :
- Engine SQLite partage entre threads (FastAPI execute les routes sync dans un pool)
- Session factory
- Fonction d'initialisation des tables

La base de donnees est configuree via TVTRACK_DATABASE_URL (defaut: sqlite:///data/tvtrack.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def _is_memory(db_url: str) -> bool:
    return db_url == "sqlite://" or ":memory:" in db_url


def _build_engine(db_url: str) -> Engine:
    """Cree l'engine, avec un pool unique pour les bases en memoire."""
    if db_url.startswith("sqlite:///") and not _is_memory(db_url):
        db_path = Path(db_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    kwargs = {"echo": False, "connect_args": {"check_same_thread": False}}
    if _is_memory(db_url):
        # Toutes les sessions doivent voir la meme base en memoire
        kwargs["poolclass"] = StaticPool
    return create_engine(db_url, **kwargs)


def configure_engine(db_url: str) -> Engine:
    """Remplace l'engine global (tests, CLI avec --database)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = _build_engine(db_url)
    return _engine


def get_engine() -> Engine:
    """
    Retourne l'engine SQLite, en le creant si necessaire.

    Utilise la configuration de l'application pour le chemin de la BDD.
    """
    global _engine
    if _engine is None:
        from src.config import Settings

        _engine = _build_engine(Settings().database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() ou comme dependance FastAPI :
        session = next(get_session())
        try:
            # operations
        finally:
            session.close()

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """
    Initialise la base de donnees en creant toutes les tables manquantes.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from src.infrastructure.persistence import models  # noqa: F401

    engine = get_engine()
    SQLModel.metadata.create_all(engine)
    logger.debug("Base de donnees initialisee", url=str(engine.url))
