"""
Entites de suivi : series suivies, episodes vus, reglages de liens.

Ces entites sont la propriete de l'utilisateur. Les metadonnees des series
elles-memes (titre, saisons, genres) restent dans le catalogue TMDB.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class WatchStatus(Enum):
    """Statut de visionnage d'une serie."""

    WATCHING = "watching"
    COMPLETED = "completed"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


@dataclass
class UserShow:
    """
    Suivi personnel d'une serie par un utilisateur.

    Le couple (user_id, tmdb_show_id) est unique.

    Attributs :
        status : Statut de visionnage
        is_favorite : Serie marquee en favori
        user_rating : Note personnelle 1-10 (None si non notee)
        notes : Note libre en texte brut
        custom_slug : Slug impose pour les liens de visionnage
        custom_base_url : URL de base propre a la serie
        custom_url_pattern : Gabarit propre a la serie
        link_note : Aide-memoire sur le lien de la serie
    """

    user_id: int
    tmdb_show_id: int
    id: Optional[int] = None
    status: WatchStatus = WatchStatus.PLAN_TO_WATCH
    is_favorite: bool = False
    user_rating: Optional[int] = None
    notes: str = ""
    custom_slug: Optional[str] = None
    custom_base_url: Optional[str] = None
    custom_url_pattern: Optional[str] = None
    link_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_link_overrides(self) -> bool:
        """Vrai si au moins un reglage de lien est surcharge pour cette serie."""
        return any((self.custom_slug, self.custom_base_url, self.custom_url_pattern))


@dataclass
class WatchedEpisode:
    """
    Episode marque comme vu.

    Le quadruplet (user_id, tmdb_show_id, season_number, episode_number) est unique.
    """

    user_id: int
    tmdb_show_id: int
    season_number: int
    episode_number: int
    watched_at: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def key(self) -> tuple[int, int, int]:
        """Cle d'identification (serie, saison, episode)."""
        return (self.tmdb_show_id, self.season_number, self.episode_number)


@dataclass
class WatchLinkSettings:
    """
    Reglages globaux des liens de visionnage d'un utilisateur.

    Attributs :
        base_url : URL de base du site (ex: "https://example.com/dizi")
        pattern : Gabarit avec %dizi_adi%, %sezon% et %bolum%
    """

    user_id: int
    base_url: str = ""
    pattern: str = ""

    @property
    def is_configured(self) -> bool:
        """Vrai si l'URL de base et le gabarit sont renseignes."""
        return bool(self.base_url and self.pattern)
