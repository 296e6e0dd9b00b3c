"""
Statistiques de visionnage d'un utilisateur.

Le temps passe est estime par serie : nombre d'episodes vus multiplie par
la duree moyenne d'un episode (episode_run_time, a defaut la duree du dernier
episode diffuse, a defaut 45 minutes).
"""

import asyncio
import math
from dataclasses import dataclass, field
from typing import Optional

from src.core.entities.tracking import WatchStatus
from src.core.entities.user import User
from src.core.ports.api_clients import ICatalogClient, ShowDetails
from src.services.watchlist import WatchlistService
from src.utils.constants import (
    DEFAULT_EPISODE_RUNTIME,
    DEFAULT_GENRE_COLOR,
    GENRE_COLORS,
    MAX_RANK,
    RANK_TIERS,
    UNKNOWN_GENRE_LABEL,
)
from src.utils.helpers import format_duration


@dataclass
class UserRank:
    """Rang de l'utilisateur et progression vers le suivant."""

    title: str
    icon: str
    next_rank: str
    progress: float
    remaining: int


@dataclass
class StatusSummary:
    total: int = 0
    watching: int = 0
    completed: int = 0
    dropped: int = 0
    plan_to_watch: int = 0


@dataclass
class DetailedStats:
    """
    Statistiques detaillees.

    Attributs :
        total_minutes : Temps estime passe devant les series (arrondi)
        completion_rate : completed / (watching + completed + dropped) en %
        top_genre : Genre le plus frequent ("Belirsiz" si aucun)
        genre_counts : Nombre de series par ID de genre
        genre_names : Nom de chaque ID de genre rencontre
        genre_colors : Couleur de graphique de chaque ID de genre
    """

    total_shows: int = 0
    total_episodes: int = 0
    total_minutes: int = 0
    completion_rate: float = 0.0
    top_genre: str = UNKNOWN_GENRE_LABEL
    status_counts: dict[str, int] = field(default_factory=dict)
    genre_counts: dict[int, int] = field(default_factory=dict)
    genre_names: dict[int, str] = field(default_factory=dict)
    genre_colors: dict[int, str] = field(default_factory=dict)
    rank: Optional[UserRank] = None

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.total_minutes)


def user_rank(total_minutes: float) -> UserRank:
    """
    Calcule le rang a partir du temps total (en minutes).

    Paliers en heures : <10, <100, <500, puis rang maximal.
    """
    hours = math.floor(total_minutes / 60)
    lower = 0
    for upper, title, icon, next_rank in RANK_TIERS:
        if hours < upper:
            return UserRank(
                title=title,
                icon=icon,
                next_rank=next_rank,
                progress=(hours - lower) / (upper - lower) * 100,
                remaining=upper - hours,
            )
        lower = upper

    title, icon, next_rank = MAX_RANK
    return UserRank(title=title, icon=icon, next_rank=next_rank, progress=100, remaining=0)


def episode_runtime(details: ShowDetails) -> float:
    """Duree moyenne d'un episode d'une serie, en minutes."""
    average = details.average_runtime
    if average:
        return average
    return details.last_episode_runtime or DEFAULT_EPISODE_RUNTIME


class StatsService:
    """Calcul des statistiques a partir de la liste de suivi et du catalogue."""

    def __init__(self, watchlist: WatchlistService, catalog: ICatalogClient) -> None:
        self._watchlist = watchlist
        self._catalog = catalog

    def status_summary(self, user: User) -> StatusSummary:
        shows = self._watchlist.refresh(user).shows()
        counts = {status: 0 for status in WatchStatus}
        for show in shows:
            counts[show.status] += 1
        return StatusSummary(
            total=len(shows),
            watching=counts[WatchStatus.WATCHING],
            completed=counts[WatchStatus.COMPLETED],
            dropped=counts[WatchStatus.DROPPED],
            plan_to_watch=counts[WatchStatus.PLAN_TO_WATCH],
        )

    async def detailed_stats(self, user: User) -> DetailedStats:
        store = self._watchlist.refresh(user)
        shows = store.shows()
        episodes = store.episodes_for()

        details_list = await asyncio.gather(
            *(self._catalog.get_show_details(s.tmdb_show_id) for s in shows)
        )

        status_counts = {status.value: 0 for status in WatchStatus}
        genre_counts: dict[int, int] = {}
        genre_names: dict[int, str] = {}
        total_minutes = 0.0

        for show, details in zip(shows, details_list):
            status_counts[show.status.value] += 1
            for genre in details.genres:
                genre_counts[genre.id] = genre_counts.get(genre.id, 0) + 1
                genre_names.setdefault(genre.id, genre.name)

            watched = sum(1 for e in episodes if e.tmdb_show_id == show.tmdb_show_id)
            total_minutes += watched * episode_runtime(details)

        # Premier genre (par ID croissant) au compte strictement maximal
        top_genre = UNKNOWN_GENRE_LABEL
        best = 0
        for genre_id in sorted(genre_counts):
            if genre_counts[genre_id] > best:
                best = genre_counts[genre_id]
                top_genre = genre_names[genre_id]

        active = (
            status_counts["watching"]
            + status_counts["completed"]
            + status_counts["dropped"]
        )
        completion_rate = status_counts["completed"] / active * 100 if active else 0.0

        return DetailedStats(
            total_shows=len(shows),
            total_episodes=len(episodes),
            total_minutes=round(total_minutes),
            completion_rate=completion_rate,
            top_genre=top_genre,
            status_counts=status_counts,
            genre_counts=genre_counts,
            genre_names=genre_names,
            genre_colors={
                genre_id: GENRE_COLORS.get(genre_id, DEFAULT_GENRE_COLOR)
                for genre_id in genre_counts
            },
            rank=user_rank(total_minutes),
        )
