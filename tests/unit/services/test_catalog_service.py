"""
Tests du service catalogue et de la pagination infinie.
"""

from unittest.mock import AsyncMock

import pytest

from src.core.ports.api_clients import CatalogPage, ShowSummary
from src.services.catalog import CatalogService, iter_pages
from tests.fixtures.factories import make_details, make_season


def _page(page: int, total_pages: int, ids: list[int]) -> CatalogPage:
    return CatalogPage(
        page=page,
        total_pages=total_pages,
        total_results=len(ids),
        results=[ShowSummary(id=i, name=f"Dizi {i}") for i in ids],
    )


class TestIterPages:
    @pytest.mark.asyncio
    async def test_stops_at_last_page(self) -> None:
        fetch = AsyncMock(side_effect=[_page(1, 2, [1, 2]), _page(2, 2, [3])])

        pages = [results async for results in iter_pages(fetch)]

        assert [[s.id for s in r] for r in pages] == [[1, 2], [3]]
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self) -> None:
        fetch = AsyncMock(side_effect=[_page(1, 5, [1]), _page(2, 5, [])])

        pages = [results async for results in iter_pages(fetch)]

        assert len(pages) == 1
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_max_pages(self) -> None:
        fetch = AsyncMock(side_effect=lambda page: _page(page, 100, [page]))

        pages = [results async for results in iter_pages(fetch, start_page=3, max_pages=2)]

        assert [r[0].id for r in pages] == [3, 4]


class TestCatalogService:
    @pytest.mark.asyncio
    async def test_blank_search_does_not_call_catalog(self, mock_catalog) -> None:
        page = await CatalogService(mock_catalog).search("   ")

        assert page.results == []
        assert page.total_pages == 0
        mock_catalog.search_shows.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_strips_query(self, mock_catalog) -> None:
        mock_catalog.search_shows.return_value = _page(1, 1, [94997])

        page = await CatalogService(mock_catalog).search("  osman ", page=2)

        assert page.results[0].id == 94997
        mock_catalog.search_shows.assert_awaited_once_with("osman", 2)

    @pytest.mark.asyncio
    async def test_discover_lists(self, mock_catalog) -> None:
        service = CatalogService(mock_catalog)

        await service.discover("popular", page=2)
        await service.discover("trending", time_window="day")

        mock_catalog.get_popular.assert_awaited_once_with(2)
        mock_catalog.get_trending.assert_awaited_once_with("day", 1)

    @pytest.mark.asyncio
    async def test_unknown_discover_list(self, mock_catalog) -> None:
        with pytest.raises(ValueError):
            await CatalogService(mock_catalog).discover("top_rated")

    @pytest.mark.asyncio
    async def test_discover_pages_concatenates_until_max_pages(self, mock_catalog) -> None:
        mock_catalog.get_trending.side_effect = lambda window, page: _page(page, 10, [page])

        page = await CatalogService(mock_catalog).discover_pages(
            "trending", start_page=2, max_pages=3, time_window="day"
        )

        assert [s.id for s in page.results] == [2, 3, 4]
        assert page.page == 4
        assert page.has_next
        assert mock_catalog.get_trending.await_count == 3

    @pytest.mark.asyncio
    async def test_discover_pages_stops_at_last_page(self, mock_catalog) -> None:
        mock_catalog.get_popular.side_effect = [_page(1, 1, [7])]

        page = await CatalogService(mock_catalog).discover_pages("popular", max_pages=5)

        assert [s.id for s in page.results] == [7]
        assert not page.has_next

    @pytest.mark.asyncio
    async def test_images(self, mock_catalog) -> None:
        mock_catalog.get_images.return_value = {"id": 1396, "posters": []}

        assert (await CatalogService(mock_catalog).images(1396))["id"] == 1396
        mock_catalog.get_images.assert_awaited_once_with(1396)

    @pytest.mark.asyncio
    async def test_show_page_gathers_related_lists(self, mock_catalog) -> None:
        mock_catalog.get_show_details.return_value = make_details(1396, "Breaking Bad")
        mock_catalog.get_similar.return_value = _page(1, 1, [1])
        mock_catalog.get_recommended.return_value = _page(1, 1, [2, 3])

        page = await CatalogService(mock_catalog).show_page(1396)

        assert page.details.name == "Breaking Bad"
        assert len(page.similar.results) == 1
        assert len(page.recommended.results) == 2

    @pytest.mark.asyncio
    async def test_season(self, mock_catalog) -> None:
        mock_catalog.get_show_details.return_value = make_details(1396, "Breaking Bad")
        mock_catalog.get_season_details.return_value = make_season(1396, 1, [(1, None)])

        details, season = await CatalogService(mock_catalog).season(1396, 1)

        assert details.id == 1396
        assert season.episodes[0].episode_number == 1
