"""
Client TMDB pour le catalogue de series TV.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database).
Deux usages :
- fetch() : passe-plat brut utilise par le proxy /api/tmdb (aucun cache,
  le proxy pose son propre Cache-Control)
- methodes typees : cache-first via APICache et QueryKeys

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache, language="tr-TR")
    page = await client.search_shows("Kuruluş")
    details = await client.get_show_details(page.results[0].id)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.cache import APICache
from src.adapters.api.query_keys import QueryKey, QueryKeys, cache_key
from src.adapters.api.retry import RateLimitError, request_with_retry
from src.core.exceptions import CatalogConfigurationError, CatalogError
from src.core.ports.api_clients import (
    CatalogPage,
    EpisodeInfo,
    Genre,
    ICatalogClient,
    SeasonDetails,
    SeasonSummary,
    ShowDetails,
    ShowSummary,
)
from src.utils.constants import TMDB_TV_GENRE_MAPPING
from src.utils.helpers import parse_date

TRENDING_WINDOWS = ("day", "week")


def _parse_summary(item: dict[str, Any]) -> ShowSummary:
    """Convertit un element de liste TMDB en ShowSummary."""
    return ShowSummary(
        id=int(item["id"]),
        name=item.get("name") or item.get("original_name", ""),
        original_name=item.get("original_name"),
        overview=item.get("overview"),
        first_air_date=parse_date(item.get("first_air_date")),
        poster_path=item.get("poster_path"),
        backdrop_path=item.get("backdrop_path"),
        vote_average=item.get("vote_average"),
        genre_ids=tuple(item.get("genre_ids", ())),
    )


def _parse_page(data: dict[str, Any]) -> CatalogPage:
    """Convertit une reponse paginee TMDB en CatalogPage."""
    return CatalogPage(
        page=data.get("page", 1),
        total_pages=data.get("total_pages", 1),
        total_results=data.get("total_results", 0),
        results=[_parse_summary(item) for item in data.get("results", [])],
    )


def _parse_details(data: dict[str, Any]) -> ShowDetails:
    """Convertit la reponse /tv/{id} en ShowDetails."""
    genres = tuple(
        Genre(id=g["id"], name=g.get("name") or TMDB_TV_GENRE_MAPPING.get(g["id"], ""))
        for g in data.get("genres", [])
    )
    seasons = tuple(
        SeasonSummary(
            season_number=s.get("season_number", 0),
            name=s.get("name", ""),
            episode_count=s.get("episode_count") or 0,
            air_date=parse_date(s.get("air_date")),
            poster_path=s.get("poster_path"),
        )
        for s in data.get("seasons", [])
    )
    last_episode = data.get("last_episode_to_air") or {}

    return ShowDetails(
        id=int(data["id"]),
        name=data.get("name") or data.get("original_name", ""),
        original_name=data.get("original_name"),
        overview=data.get("overview"),
        first_air_date=parse_date(data.get("first_air_date")),
        poster_path=data.get("poster_path"),
        backdrop_path=data.get("backdrop_path"),
        vote_average=data.get("vote_average"),
        vote_count=data.get("vote_count"),
        status=data.get("status"),
        genres=genres,
        episode_run_time=tuple(data.get("episode_run_time") or ()),
        last_episode_runtime=last_episode.get("runtime"),
        number_of_seasons=data.get("number_of_seasons") or 0,
        number_of_episodes=data.get("number_of_episodes") or 0,
        seasons=seasons,
    )


def _parse_season(show_id: int, data: dict[str, Any]) -> SeasonDetails:
    """Convertit la reponse /tv/{id}/season/{n} en SeasonDetails."""
    season_number = data.get("season_number", 0)
    episodes = [
        EpisodeInfo(
            episode_number=ep.get("episode_number", 0),
            season_number=ep.get("season_number", season_number),
            name=ep.get("name", ""),
            air_date=parse_date(ep.get("air_date")),
            runtime=ep.get("runtime"),
            overview=ep.get("overview"),
            still_path=ep.get("still_path"),
            vote_average=ep.get("vote_average"),
        )
        for ep in data.get("episodes", [])
    ]
    return SeasonDetails(
        show_id=show_id,
        season_number=season_number,
        name=data.get("name", ""),
        overview=data.get("overview"),
        air_date=parse_date(data.get("air_date")),
        poster_path=data.get("poster_path"),
        episodes=episodes,
    )


class TMDBClient(ICatalogClient):
    """
    Client API TMDB pour les series TV.

    - Cle API gardee cote serveur (v3 en parametre, v4 en Bearer)
    - Locale fixe appliquee a toutes les requetes
    - Cache persistant par QueryKey pour les methodes typees
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        language: str = "tr-TR",
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4), None si non configuree
            cache: Instance APICache pour les methodes typees
            language: Locale envoyee a TMDB avec chaque requete
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def source(self) -> str:
        """Identifiant de la source catalogue."""
        return "tmdb"

    @property
    def configured(self) -> bool:
        """Vrai si une cle API est disponible."""
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Raises:
            CatalogConfigurationError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            logger.error("TMDB API key is not configured")
            raise CatalogConfigurationError("TMDB API key is not configured")

        if self._client is None or self._client.is_closed:
            # v3 : 32 caracteres hex ; v4 : long JWT
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}
            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def fetch(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Appelle un endpoint TMDB et renvoie le JSON decode.

        Les parametres vides (None ou "") sont ignores ; une liste transmet un
        parametre repete (?with_genres=18&with_genres=35). La locale et la cle
        sont toujours celles du serveur : un "language" ou "api_key" fourni
        par l'appelant est remplace.

        Raises:
            CatalogConfigurationError: Cle API absente
            CatalogError: Reponse d'erreur de TMDB ou erreur reseau
        """
        client = self._get_client()
        query: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if key in ("api_key", "language"):
                continue
            if isinstance(value, (list, tuple)):
                value = [v for v in value if v is not None and v != ""]
            if value is None or value == "" or value == []:
                continue
            query[key] = value
        query["language"] = self._language
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"

        logger.debug("TMDB request", endpoint=path, params=query)
        try:
            response = await request_with_retry(client, "GET", path, params=query)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"TMDB API Error: {status} {e.response.text}")
            raise CatalogError("TMDB API request failed", status_code=status) from e
        except RateLimitError as e:
            logger.error("TMDB rate limit persists after retries")
            raise CatalogError("TMDB API request failed", status_code=429) from e
        except httpx.RequestError as e:
            logger.error(f"TMDB network error: {e}")
            raise CatalogError(str(e)) from e
        return response.json()

    async def _cached(self, key: QueryKey, endpoint: str, params: dict[str, Any], store, parse):
        """Pattern cache-first commun aux methodes typees."""
        text_key = cache_key(key, self.source)
        cached = await self._cache.get(text_key)
        if cached is not None:
            return cached

        result = parse(await self.fetch(endpoint, params))
        await store(text_key, result)
        return result

    async def search_shows(self, query: str, page: int = 1) -> CatalogPage:
        """Recherche des series par titre."""
        return await self._cached(
            QueryKeys.search(query, page),
            "/search/tv",
            {"query": query, "page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_show_details(self, show_id: int) -> ShowDetails:
        """Details d'une serie. 404 TMDB -> CatalogError(status_code=404)."""
        return await self._cached(
            QueryKeys.shows.details(show_id),
            f"/tv/{show_id}",
            {},
            self._cache.set_details,
            _parse_details,
        )

    async def get_season_details(self, show_id: int, season_number: int) -> SeasonDetails:
        """Saison complete avec ses episodes."""
        return await self._cached(
            QueryKeys.shows.season(show_id, season_number),
            f"/tv/{show_id}/season/{season_number}",
            {},
            self._cache.set_details,
            lambda data: _parse_season(show_id, data),
        )

    async def get_popular(self, page: int = 1) -> CatalogPage:
        return await self._cached(
            QueryKeys.discover.popular(page),
            "/tv/popular",
            {"page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_airing_today(self, page: int = 1) -> CatalogPage:
        return await self._cached(
            QueryKeys.discover.airing_today(page),
            "/tv/airing_today",
            {"page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_on_the_air(self, page: int = 1) -> CatalogPage:
        return await self._cached(
            QueryKeys.discover.on_the_air(page),
            "/tv/on_the_air",
            {"page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_trending(self, time_window: str = "week", page: int = 1) -> CatalogPage:
        """Series tendances. time_window doit valoir "day" ou "week"."""
        if time_window not in TRENDING_WINDOWS:
            raise ValueError(f"time_window must be one of {TRENDING_WINDOWS}")
        return await self._cached(
            QueryKeys.discover.trending(time_window, page),
            f"/trending/tv/{time_window}",
            {"page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_by_genre(self, genre_id: int, page: int = 1) -> CatalogPage:
        return await self._cached(
            QueryKeys.discover.by_genre(genre_id, page),
            "/discover/tv",
            {"with_genres": genre_id, "page": page},
            self._cache.set_list,
            _parse_page,
        )

    async def get_genres(self) -> list[Genre]:
        return await self._cached(
            QueryKeys.genres,
            "/genre/tv/list",
            {},
            self._cache.set_genres,
            lambda data: [Genre(id=g["id"], name=g.get("name", "")) for g in data.get("genres", [])],
        )

    async def get_similar(self, show_id: int) -> CatalogPage:
        return await self._cached(
            QueryKeys.shows.similar(show_id),
            f"/tv/{show_id}/similar",
            {},
            self._cache.set_list,
            _parse_page,
        )

    async def get_recommended(self, show_id: int) -> CatalogPage:
        return await self._cached(
            QueryKeys.shows.recommended(show_id),
            f"/tv/{show_id}/recommendations",
            {},
            self._cache.set_list,
            _parse_page,
        )

    async def get_images(self, show_id: int) -> dict[str, Any]:
        """Images brutes d'une serie (posters, backdrops, logos)."""
        return await self._cached(
            QueryKeys.shows.images(show_id),
            f"/tv/{show_id}/images",
            {},
            self._cache.set_details,
            dict,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
