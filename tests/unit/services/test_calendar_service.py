"""
Tests du calendrier des episodes a rattraper.
"""

from datetime import date

import pytest

from src.core.exceptions import CatalogError
from src.core.ports.api_clients import CatalogPage, ShowSummary
from src.services.calendar import CalendarService
from tests.fixtures.factories import make_details, make_season

TODAY = date(2024, 1, 10)


@pytest.fixture
def calendar_catalog(mock_catalog):
    details = {
        1: make_details(1, "Dark", number_of_seasons=2),
        3: make_details(3, "Kuruluş Osman", number_of_seasons=0),
    }

    def show_details(show_id):
        if show_id not in details:
            raise CatalogError("TMDB API request failed", 404)
        return details[show_id]

    def season_details(show_id, season_number):
        if show_id == 1 and season_number == 1:
            return make_season(1, 1, [
                (0, date(2023, 12, 1)),
                (2, date(2024, 1, 3)),
                (1, date(2024, 1, 1)),
                (3, date(2024, 1, 10)),
                (4, date(2024, 1, 17)),
                (5, None),
            ])
        if show_id == 3:
            return make_season(3, season_number, [(1, date(2023, 5, 1))])
        raise CatalogError("TMDB API request failed", 404)

    mock_catalog.get_show_details.side_effect = show_details
    mock_catalog.get_season_details.side_effect = season_details
    mock_catalog.get_airing_today.return_value = CatalogPage(
        results=[ShowSummary(id=1, name="Dark")]
    )
    return mock_catalog


class TestUnwatchedAiredEpisodes:
    @pytest.mark.asyncio
    async def test_filters_and_groups_episodes(self, watchlist, user, calendar_catalog) -> None:
        watchlist.add_show(user, 1, "watching")
        watchlist.mark_episode(user, 1, 1, 2)

        calendar = await CalendarService(watchlist, calendar_catalog).unwatched_aired_episodes(
            user, today=TODAY
        )

        group = calendar.groups["Dark"]
        assert [e.episode_number for e in group.episodes] == [1, 3]
        assert calendar.episode_count == 2
        assert [s.id for s in calendar.airing_today] == [1]
        assert calendar.on_the_air == []

    @pytest.mark.asyncio
    async def test_failed_show_and_season_are_skipped(
        self, watchlist, user, calendar_catalog
    ) -> None:
        watchlist.add_show(user, 1)
        watchlist.add_show(user, 2)

        calendar = await CalendarService(watchlist, calendar_catalog).unwatched_aired_episodes(
            user, today=TODAY
        )

        assert list(calendar.groups) == ["Dark"]
        season_calls = [c.args for c in calendar_catalog.get_season_details.await_args_list]
        assert (1, 2) in season_calls

    @pytest.mark.asyncio
    async def test_unknown_season_count_reads_first_season(
        self, watchlist, user, calendar_catalog
    ) -> None:
        watchlist.add_show(user, 3)

        calendar = await CalendarService(watchlist, calendar_catalog).unwatched_aired_episodes(
            user, today=TODAY
        )

        assert [e.key for e in calendar.groups["Kuruluş Osman"].episodes] == ["3-1-1"]

    @pytest.mark.asyncio
    async def test_watch_urls_use_overrides(self, watchlist, user, calendar_catalog) -> None:
        watchlist.save_link_settings(user, "https://dizi.tv")
        watchlist.add_show(user, 1)
        watchlist.add_show(user, 3)
        watchlist.update_watch_link_settings(user, 3, custom_slug="osman-tr")

        calendar = await CalendarService(watchlist, calendar_catalog).unwatched_aired_episodes(
            user, today=TODAY
        )

        assert calendar.groups["Dark"].episodes[0].watch_url == (
            "https://dizi.tv/dark/1-sezon/1-bolum"
        )
        assert calendar.groups["Kuruluş Osman"].episodes[0].watch_url == (
            "https://dizi.tv/osman-tr/1-sezon/1-bolum"
        )

    @pytest.mark.asyncio
    async def test_no_watch_url_without_settings(self, watchlist, user, calendar_catalog) -> None:
        watchlist.add_show(user, 1)

        calendar = await CalendarService(watchlist, calendar_catalog).unwatched_aired_episodes(
            user, today=TODAY
        )

        assert all(e.watch_url is None for e in calendar.groups["Dark"].episodes)
