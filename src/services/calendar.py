"""
Calendrier des episodes diffuses mais pas encore vus.

Pour chaque serie suivie, les saisons 1..number_of_seasons sont parcourues.
Sont ignores : les episodes deja vus, sans date de diffusion, diffuses
apres aujourd'hui, ou numerotes 0 (specials).
"""

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from loguru import logger

from src.core.entities.user import User
from src.core.exceptions import CatalogError
from src.core.ports.api_clients import ICatalogClient, ShowSummary
from src.services.watch_links import generate_watch_url_with_overrides
from src.services.watchlist import WatchlistService


@dataclass
class CalendarEpisode:
    show_id: int
    show_name: str
    season_number: int
    episode_number: int
    name: str = ""
    air_date: Optional[date] = None
    still_path: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    overview: Optional[str] = None
    watch_url: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.show_id}-{self.season_number}-{self.episode_number}"


@dataclass
class CalendarGroup:
    show_id: int
    show_name: str
    poster_path: Optional[str] = None
    episodes: list[CalendarEpisode] = field(default_factory=list)


@dataclass
class Calendar:
    """Episodes a rattraper groupes par nom de serie, plus les diffusions du moment."""

    groups: dict[str, CalendarGroup] = field(default_factory=dict)
    airing_today: list[ShowSummary] = field(default_factory=list)
    on_the_air: list[ShowSummary] = field(default_factory=list)

    @property
    def episode_count(self) -> int:
        return sum(len(g.episodes) for g in self.groups.values())


class CalendarService:
    def __init__(self, watchlist: WatchlistService, catalog: ICatalogClient) -> None:
        self._watchlist = watchlist
        self._catalog = catalog

    async def unwatched_aired_episodes(
        self, user: User, today: Optional[date] = None
    ) -> Calendar:
        today = today or date.today()

        airing_today, on_the_air = await asyncio.gather(
            self._catalog.get_airing_today(),
            self._catalog.get_on_the_air(),
        )
        calendar = Calendar(
            airing_today=airing_today.results,
            on_the_air=on_the_air.results,
        )

        store = self._watchlist.refresh(user)
        settings = self._watchlist.get_link_settings(user)
        watched = {e.key for e in store.episodes_for()}

        for user_show in store.shows():
            show_id = user_show.tmdb_show_id
            try:
                details = await self._catalog.get_show_details(show_id)
            except CatalogError as e:
                logger.error(f"Details indisponibles pour la serie {show_id}: {e}")
                continue

            episodes = []
            for season_number in range(1, (details.number_of_seasons or 1) + 1):
                try:
                    season = await self._catalog.get_season_details(show_id, season_number)
                except CatalogError as e:
                    logger.debug(f"Saison {season_number} de {show_id} ignoree: {e}")
                    continue

                for info in season.episodes:
                    if (show_id, season_number, info.episode_number) in watched:
                        continue
                    if info.air_date is None or info.air_date > today:
                        continue
                    if info.episode_number == 0:
                        continue
                    episodes.append(
                        CalendarEpisode(
                            show_id=show_id,
                            show_name=details.name,
                            season_number=season_number,
                            episode_number=info.episode_number,
                            name=info.name,
                            air_date=info.air_date,
                            still_path=info.still_path,
                            runtime=info.runtime,
                            vote_average=info.vote_average,
                            overview=info.overview,
                            watch_url=generate_watch_url_with_overrides(
                                settings,
                                details.name,
                                season_number,
                                info.episode_number,
                                user_show,
                            ),
                        )
                    )

            if episodes:
                episodes.sort(key=lambda e: (e.season_number, e.episode_number))
                calendar.groups[details.name] = CalendarGroup(
                    show_id=show_id,
                    show_name=details.name,
                    poster_path=details.poster_path,
                    episodes=episodes,
                )

        return calendar
