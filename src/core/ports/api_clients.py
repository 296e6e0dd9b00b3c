"""
Interfaces ports pour le client catalogue.

Interface abstraite (port) definissant le contrat du catalogue de series externe
et les objets qu'il renvoie. L'implementation concrete est le client TMDB
(src/adapters/api/tmdb_client.py).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass
class Genre:
    """Genre TMDB (id numerique + nom localise)."""

    id: int
    name: str


@dataclass
class ShowSummary:
    """
    Serie telle qu'elle apparait dans une liste (recherche, decouverte).

    Attributs :
        id : ID TMDB de la serie
        name : Titre localise
        original_name : Titre en langue originale
        first_air_date : Date de premiere diffusion
        poster_path : Chemin du poster sur le CDN TMDB
        genre_ids : IDs des genres
    """

    id: int
    name: str
    original_name: Optional[str] = None
    overview: Optional[str] = None
    first_air_date: Optional[date] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: Optional[float] = None
    genre_ids: tuple[int, ...] = ()

    @property
    def year(self) -> Optional[int]:
        """Annee de premiere diffusion."""
        return self.first_air_date.year if self.first_air_date else None


@dataclass
class CatalogPage:
    """Page de resultats paginee renvoyee par le catalogue."""

    page: int = 1
    total_pages: int = 1
    total_results: int = 0
    results: list[ShowSummary] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        """Vrai s'il reste des pages apres celle-ci."""
        return self.page < self.total_pages


@dataclass
class EpisodeInfo:
    """Episode d'une saison tel que decrit par le catalogue."""

    episode_number: int
    season_number: int
    name: str = ""
    air_date: Optional[date] = None
    runtime: Optional[int] = None
    overview: Optional[str] = None
    still_path: Optional[str] = None
    vote_average: Optional[float] = None


@dataclass
class SeasonSummary:
    """Saison listee dans les details d'une serie."""

    season_number: int
    name: str = ""
    episode_count: int = 0
    air_date: Optional[date] = None
    poster_path: Optional[str] = None


@dataclass
class SeasonDetails:
    """Saison complete avec ses episodes."""

    show_id: int
    season_number: int
    name: str = ""
    overview: Optional[str] = None
    air_date: Optional[date] = None
    poster_path: Optional[str] = None
    episodes: list[EpisodeInfo] = field(default_factory=list)


@dataclass
class ShowDetails:
    """
    Details complets d'une serie.

    Attributs :
        episode_run_time : Durees d'episode annoncees (minutes)
        last_episode_runtime : Duree du dernier episode diffuse (minutes)
        number_of_seasons : Nombre de saisons
        seasons : Saisons listees (y compris la saison 0 "specials")
    """

    id: int
    name: str
    original_name: Optional[str] = None
    overview: Optional[str] = None
    first_air_date: Optional[date] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    status: Optional[str] = None
    genres: tuple[Genre, ...] = ()
    episode_run_time: tuple[int, ...] = ()
    last_episode_runtime: Optional[int] = None
    number_of_seasons: int = 0
    number_of_episodes: int = 0
    seasons: tuple[SeasonSummary, ...] = ()

    @property
    def average_runtime(self) -> Optional[float]:
        """Duree moyenne d'un episode, ou celle du dernier episode diffuse."""
        if self.episode_run_time:
            return sum(self.episode_run_time) / len(self.episode_run_time)
        return self.last_episode_runtime


class ICatalogClient(ABC):
    """
    Interface du catalogue de series externe.

    fetch() est le passe-plat brut utilise par le proxy HTTP. Les autres
    methodes renvoient des objets types et passent par le cache.
    """

    @abstractmethod
    async def fetch(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Appelle un endpoint du catalogue et renvoie le JSON decode."""
        ...

    @abstractmethod
    async def search_shows(self, query: str, page: int = 1) -> CatalogPage:
        """Recherche des series par titre."""
        ...

    @abstractmethod
    async def get_show_details(self, show_id: int) -> ShowDetails:
        """Recupere les details d'une serie."""
        ...

    @abstractmethod
    async def get_season_details(self, show_id: int, season_number: int) -> SeasonDetails:
        """Recupere une saison et ses episodes."""
        ...

    @abstractmethod
    async def get_popular(self, page: int = 1) -> CatalogPage:
        """Series populaires."""
        ...

    @abstractmethod
    async def get_airing_today(self, page: int = 1) -> CatalogPage:
        """Series diffusees aujourd'hui."""
        ...

    @abstractmethod
    async def get_on_the_air(self, page: int = 1) -> CatalogPage:
        """Series en cours de diffusion."""
        ...

    @abstractmethod
    async def get_trending(self, time_window: str = "week", page: int = 1) -> CatalogPage:
        """Series tendances (time_window : "day" ou "week")."""
        ...

    @abstractmethod
    async def get_by_genre(self, genre_id: int, page: int = 1) -> CatalogPage:
        """Series d'un genre."""
        ...

    @abstractmethod
    async def get_genres(self) -> list[Genre]:
        """Liste des genres TV."""
        ...

    @abstractmethod
    async def get_similar(self, show_id: int) -> CatalogPage:
        """Series similaires."""
        ...

    @abstractmethod
    async def get_recommended(self, show_id: int) -> CatalogPage:
        """Series recommandees."""
        ...

    @abstractmethod
    async def get_images(self, show_id: int) -> dict[str, Any]:
        """Images (posters, backdrops, logos) d'une serie."""
        ...
