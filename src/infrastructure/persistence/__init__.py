"""
Module de persistance SQLite pour TVTrack.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables
- repositories/ : Implementations des ports repository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from src.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables si necessaire
    session = next(get_session())
"""

from src.infrastructure.persistence.database import (
    configure_engine,
    get_engine,
    get_session,
    init_db,
)

__all__ = [
    "configure_engine",
    "get_engine",
    "get_session",
    "init_db",
]
