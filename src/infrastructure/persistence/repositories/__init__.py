"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans src/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from src.infrastructure.persistence.repositories.user_repository import (
    SQLModelUserRepository,
)
from src.infrastructure.persistence.repositories.user_show_repository import (
    SQLModelUserShowRepository,
)
from src.infrastructure.persistence.repositories.watched_episode_repository import (
    SQLModelWatchedEpisodeRepository,
)

__all__ = [
    "SQLModelUserRepository",
    "SQLModelUserShowRepository",
    "SQLModelWatchedEpisodeRepository",
]
