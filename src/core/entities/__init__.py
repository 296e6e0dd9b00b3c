"""
Entites metier representant les concepts du domaine.

Les entites sont des objets mutables avec une identite qui persistent dans le temps.

Exports:
- User: Compte utilisateur
- UserShow: Suivi personnel d'une serie (statut, note, notes)
- WatchedEpisode: Episode marque comme vu
- WatchStatus: Statut de visionnage d'une serie
- WatchLinkSettings: Reglages globaux des liens de visionnage
"""

from src.core.entities.tracking import (
    UserShow,
    WatchedEpisode,
    WatchLinkSettings,
    WatchStatus,
)
from src.core.entities.user import User

__all__ = [
    "User",
    "UserShow",
    "WatchedEpisode",
    "WatchStatus",
    "WatchLinkSettings",
]
