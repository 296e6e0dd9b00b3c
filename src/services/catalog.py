"""
Service de catalogue : recherche, listes de decouverte et pagination infinie.

Les appels independants sont lances en parallele (asyncio.gather) et
attendus ensemble, sans garantie d'ordre d'achevement.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from src.core.ports.api_clients import (
    CatalogPage,
    Genre,
    ICatalogClient,
    SeasonDetails,
    ShowDetails,
    ShowSummary,
)

PageFetcher = Callable[[int], Awaitable[CatalogPage]]

# Listes de decouverte exposees, par nom
DISCOVER_LISTS = ("popular", "trending", "airing_today", "on_the_air")

# Nombre maximal de pages concatenees par discover_pages()
DISCOVER_MAX_PAGES = 10


async def iter_pages(
    fetch_page: PageFetcher,
    start_page: int = 1,
    max_pages: Optional[int] = None,
) -> AsyncIterator[list[ShowSummary]]:
    """
    Parcourt une liste paginee page par page.

    S'arrete quand la derniere page est atteinte (page >= total_pages),
    quand une page est vide, ou apres max_pages pages.

    Example:
        async for results in iter_pages(client.get_popular, max_pages=3):
            ...
    """
    page = start_page
    consumed = 0
    while max_pages is None or consumed < max_pages:
        data = await fetch_page(page)
        consumed += 1
        if not data.results:
            return
        yield data.results
        if data.page >= data.total_pages:
            return
        page = data.page + 1


@dataclass
class ShowPage:
    """Donnees d'une fiche serie : details, series similaires et recommandees."""

    details: ShowDetails
    similar: CatalogPage
    recommended: CatalogPage


class CatalogService:
    """Facade au-dessus du client catalogue."""

    def __init__(self, catalog: ICatalogClient) -> None:
        self._catalog = catalog

    async def search(self, query: str, page: int = 1) -> CatalogPage:
        """Recherche de series. Une requete vide ne declenche aucun appel."""
        if not query or not query.strip():
            return CatalogPage(page=page, total_pages=0, total_results=0)
        return await self._catalog.search_shows(query.strip(), page)

    async def discover(
        self,
        list_name: str,
        page: int = 1,
        time_window: str = "week",
    ) -> CatalogPage:
        """
        Retourne une liste de decouverte.

        Raises:
            ValueError: Si list_name n'est pas une liste connue
        """
        if list_name == "popular":
            return await self._catalog.get_popular(page)
        if list_name == "trending":
            return await self._catalog.get_trending(time_window, page)
        if list_name == "airing_today":
            return await self._catalog.get_airing_today(page)
        if list_name == "on_the_air":
            return await self._catalog.get_on_the_air(page)
        raise ValueError(f"Unknown discover list: {list_name}")

    async def discover_pages(
        self,
        list_name: str,
        start_page: int = 1,
        max_pages: int = 1,
        time_window: str = "week",
    ) -> CatalogPage:
        """
        Concatene jusqu'a max_pages pages d'une liste de decouverte.

        La page retournee porte le numero de la derniere page lue : le
        client reprend le defilement a page + 1 tant que page < total_pages.
        """
        last = CatalogPage(page=start_page, total_pages=0, total_results=0)

        async def fetch_page(page: int) -> CatalogPage:
            nonlocal last
            last = await self.discover(list_name, page, time_window)
            return last

        results: list[ShowSummary] = []
        async for items in iter_pages(fetch_page, start_page, max_pages):
            results.extend(items)
        return CatalogPage(
            results=results,
            page=last.page,
            total_pages=last.total_pages,
            total_results=last.total_results,
        )

    async def by_genre(self, genre_id: int, page: int = 1) -> CatalogPage:
        return await self._catalog.get_by_genre(genre_id, page)

    async def genres(self) -> list[Genre]:
        return await self._catalog.get_genres()

    async def show(self, show_id: int) -> ShowDetails:
        return await self._catalog.get_show_details(show_id)

    async def images(self, show_id: int) -> dict[str, Any]:
        return await self._catalog.get_images(show_id)

    async def show_page(self, show_id: int) -> ShowPage:
        details, similar, recommended = await asyncio.gather(
            self._catalog.get_show_details(show_id),
            self._catalog.get_similar(show_id),
            self._catalog.get_recommended(show_id),
        )
        return ShowPage(details=details, similar=similar, recommended=recommended)

    async def season(
        self, show_id: int, season_number: int
    ) -> tuple[ShowDetails, SeasonDetails]:
        """Details de la serie et de la saison, recuperes en parallele."""
        details, season = await asyncio.gather(
            self._catalog.get_show_details(show_id),
            self._catalog.get_season_details(show_id, season_number),
        )
        return details, season
