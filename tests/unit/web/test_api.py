"""
Tests de l'API JSON (authentification, liste de suivi, reglages, stats,
calendrier, catalogue) via TestClient.
"""

from datetime import date

from src.core.exceptions import CatalogError
from src.core.ports.api_clients import CatalogPage, Genre, ShowSummary
from src.utils.constants import PLACEHOLDER_POSTER_URL
from tests.fixtures.factories import make_details, make_season


class TestAuthRoutes:
    def test_register_returns_user_and_token(self, client) -> None:
        response = client.post(
            "/api/auth/register",
            json={"email": "Mehmet@Example.com", "password": "gizli123", "username": "mehmet"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "mehmet@example.com"
        assert body["user"]["avatar_url"].endswith("seed=mehmet")

    def test_register_validation_error(self, client) -> None:
        response = client.post(
            "/api/auth/register",
            json={"email": "m@example.com", "password": "123", "username": "mehmet"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Şifre en az 6 karakter olmalıdır"}

    def test_register_conflict(self, client, auth_headers) -> None:
        response = client.post(
            "/api/auth/register",
            json={"email": "ayse@example.com", "password": "gizli123", "username": "baska"},
        )
        assert response.status_code == 409

    def test_login_and_me(self, client, auth_headers) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "ayse@example.com", "password": "gizli123"}
        )
        assert response.status_code == 200
        token = response.json()["token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert me.json()["username"] == "ayse"

    def test_bad_credentials(self, client, auth_headers) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "ayse@example.com", "password": "yanlis"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid login credentials"}

    def test_protected_route_requires_token(self, client) -> None:
        assert client.get("/api/shows").status_code == 401

    def test_logout_revokes_token(self, client, auth_headers) -> None:
        assert client.post("/api/auth/logout", headers=auth_headers).status_code == 204
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 401

    def test_logout_drops_mirror(self, client, container, auth_headers) -> None:
        user_id = client.get("/api/auth/me", headers=auth_headers).json()["id"]
        stores = container.show_stores()
        before = stores.get(user_id)

        client.post("/api/auth/logout", headers=auth_headers)

        assert stores.get(user_id) is not before

    def test_update_profile(self, client, auth_headers) -> None:
        response = client.patch(
            "/api/auth/profile", json={"avatar_style": "bottts"}, headers=auth_headers
        )
        assert response.json()["avatar_style"] == "bottts"


class TestShowRoutes:
    def test_add_list_update_remove(self, client, auth_headers, web_catalog) -> None:
        added = client.post("/api/shows", json={"tmdb_show_id": 1396}, headers=auth_headers)
        assert added.status_code == 201
        assert added.json()["status"] == "plan_to_watch"
        assert added.json()["status_label"] == "İzlenecek"

        updated = client.patch(
            "/api/shows/1396",
            json={"is_favorite": True, "user_rating": 9, "notes": "<b>Efsane</b>"},
            headers=auth_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["notes"] == "Efsane"

        favorites = client.get("/api/shows?favorites=true", headers=auth_headers).json()
        assert [s["tmdb_show_id"] for s in favorites] == [1396]

        assert client.delete("/api/shows/1396", headers=auth_headers).status_code == 204
        assert client.get("/api/shows/1396", headers=auth_headers).status_code == 404

    def test_invalid_rating(self, client, auth_headers, web_catalog) -> None:
        client.post("/api/shows", json={"tmdb_show_id": 1}, headers=auth_headers)
        response = client.patch(
            "/api/shows/1", json={"user_rating": 11}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_untracked_show(self, client, auth_headers, web_catalog) -> None:
        response = client.patch("/api/shows/5", json={"status": "dropped"}, headers=auth_headers)
        assert response.status_code == 404
        assert "error" in response.json()

    def test_episodes(self, client, auth_headers, web_catalog) -> None:
        client.post("/api/shows", json={"tmdb_show_id": 1}, headers=auth_headers)

        marked = client.put("/api/shows/1/seasons/1/episodes/2", headers=auth_headers)

        assert marked.status_code == 200
        assert client.get("/api/shows/1", headers=auth_headers).json()["status"] == "watching"
        episodes = client.get("/api/shows/1/episodes", headers=auth_headers).json()
        assert [(e["season_number"], e["episode_number"]) for e in episodes] == [(1, 2)]

        assert client.delete(
            "/api/shows/1/seasons/1/episodes/2", headers=auth_headers
        ).status_code == 204
        assert client.get("/api/shows/1/episodes", headers=auth_headers).json() == []

    def test_remove_untracked_show_keeps_episodes(self, client, auth_headers, web_catalog) -> None:
        client.put("/api/shows/7/seasons/1/episodes/1", headers=auth_headers)

        assert client.delete("/api/shows/7", headers=auth_headers).status_code == 404

        episodes = client.get("/api/shows/7/episodes", headers=auth_headers).json()
        assert [(e["season_number"], e["episode_number"]) for e in episodes] == [(1, 1)]

    def test_mark_season(self, client, auth_headers, web_catalog) -> None:
        web_catalog.get_season_details.return_value = make_season(
            1, 1, [(1, date(2020, 1, 1)), (2, date(2020, 1, 8))]
        )
        client.put("/api/shows/1/seasons/1/episodes/1", headers=auth_headers)

        response = client.post("/api/shows/1/seasons/1/mark-all", headers=auth_headers)

        assert response.json()["count"] == 1
        assert response.json()["marked"][0]["episode_number"] == 2

    def test_watch_link_overrides(self, client, auth_headers, web_catalog) -> None:
        client.post("/api/shows", json={"tmdb_show_id": 1}, headers=auth_headers)

        response = client.put(
            "/api/shows/1/watch-link",
            json={"custom_slug": "dark-tr", "custom_base_url": ""},
            headers=auth_headers,
        )
        assert response.json()["custom_slug"] == "dark-tr"
        assert response.json()["custom_base_url"] is None
        assert response.json()["has_link_overrides"] is True

        cleared = client.delete("/api/shows/1/watch-link", headers=auth_headers)
        assert cleared.json()["custom_slug"] is None
        assert cleared.json()["has_link_overrides"] is False


class TestSettingsRoutes:
    def test_default_settings(self, client, auth_headers) -> None:
        body = client.get("/api/settings/watch-link", headers=auth_headers).json()
        assert body == {
            "base_url": "",
            "pattern": "%dizi_adi%/%sezon%-sezon/%bolum%-bolum",
            "configured": False,
        }

    def test_save_settings(self, client, auth_headers) -> None:
        client.put(
            "/api/settings/watch-link",
            json={"base_url": "https://dizi.tv", "pattern": "%dizi_adi%-%sezon%x%bolum%"},
            headers=auth_headers,
        )
        body = client.get("/api/settings/watch-link", headers=auth_headers).json()
        assert body["pattern"] == "%dizi_adi%-%sezon%x%bolum%"
        assert body["configured"] is True


class TestStatsAndCalendarRoutes:
    def test_summary(self, client, auth_headers, web_catalog) -> None:
        client.post(
            "/api/shows", json={"tmdb_show_id": 1, "status": "completed"}, headers=auth_headers
        )
        body = client.get("/api/stats/summary", headers=auth_headers).json()
        assert body["total"] == 1
        assert body["completed"] == 1

    def test_detailed_stats(self, client, auth_headers, web_catalog) -> None:
        web_catalog.get_show_details.return_value = make_details(
            1, genres=(Genre(id=18, name="Dram"),), episode_run_time=(60,)
        )
        client.put("/api/shows/1/seasons/1/episodes/1", headers=auth_headers)
        client.post("/api/shows", json={"tmdb_show_id": 1}, headers=auth_headers)
        client.put("/api/shows/1/seasons/1/episodes/2", headers=auth_headers)

        body = client.get("/api/stats", headers=auth_headers).json()

        assert body["total_minutes"] == 120
        assert body["formatted_duration"] == "2 Sa 0 Dk"
        assert body["top_genre"] == "Dram"
        assert body["rank"]["title"] == "Acemi Gözlemci"

    def test_calendar(self, client, auth_headers, web_catalog) -> None:
        details = make_details(1, "Dark")
        details.poster_path = "/dark.jpg"
        season = make_season(1, 1, [(1, date(2024, 1, 1)), (2, date(2024, 2, 1))])
        season.episodes[0].still_path = "/s1e1.jpg"
        web_catalog.get_show_details.return_value = details
        web_catalog.get_season_details.return_value = season
        client.post("/api/shows", json={"tmdb_show_id": 1}, headers=auth_headers)

        body = client.get("/api/calendar?today=2024-01-15", headers=auth_headers).json()

        assert body["episode_count"] == 1
        assert body["groups"][0]["show_name"] == "Dark"
        assert body["groups"][0]["episodes"][0]["air_date"] == "2024-01-01"
        assert body["groups"][0]["poster_url"] == "https://image.tmdb.org/t/p/w185/dark.jpg"
        assert body["groups"][0]["episodes"][0]["still_url"] == (
            "https://image.tmdb.org/t/p/w300/s1e1.jpg"
        )


class TestCatalogRoutes:
    def test_search(self, client, web_catalog) -> None:
        web_catalog.search_shows.return_value = CatalogPage(
            results=[ShowSummary(id=94997, name="Kuruluş: Osman")], total_results=1
        )

        body = client.get("/api/catalog/search?q=osman").json()

        assert body["results"][0]["name"] == "Kuruluş: Osman"

    def test_unknown_discover_list(self, client, web_catalog) -> None:
        response = client.get("/api/catalog/discover/top_rated")
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown list: top_rated"}

    def test_discover_single_page(self, client, web_catalog) -> None:
        web_catalog.get_popular.return_value = CatalogPage(
            page=2, total_pages=5, results=[ShowSummary(id=1, name="Dark")]
        )

        body = client.get("/api/catalog/discover/popular?page=2").json()

        assert body["page"] == 2
        assert [s["id"] for s in body["results"]] == [1]
        web_catalog.get_popular.assert_awaited_once_with(2)

    def test_discover_concatenates_pages(self, client, web_catalog) -> None:
        web_catalog.get_popular.side_effect = [
            CatalogPage(page=1, total_pages=2, results=[ShowSummary(id=1, name="Dark")]),
            CatalogPage(page=2, total_pages=2, results=[ShowSummary(id=2, name="1899")]),
        ]

        body = client.get("/api/catalog/discover/popular?pages=5").json()

        assert [s["id"] for s in body["results"]] == [1, 2]
        assert body["page"] == 2
        assert body["total_pages"] == 2
        assert web_catalog.get_popular.await_count == 2

    def test_discover_rejects_too_many_pages(self, client, web_catalog) -> None:
        response = client.get("/api/catalog/discover/popular?pages=50")
        assert response.status_code == 422
        assert "pages" in response.json()["error"]

    def test_show_page_has_image_urls(self, client, web_catalog) -> None:
        details = make_details(1396, "Breaking Bad")
        details.backdrop_path = "/bb.jpg"
        web_catalog.get_show_details.return_value = details
        web_catalog.get_similar.return_value = CatalogPage()
        web_catalog.get_recommended.return_value = CatalogPage()

        body = client.get("/api/catalog/shows/1396").json()

        assert body["details"]["name"] == "Breaking Bad"
        assert body["poster_url"] == PLACEHOLDER_POSTER_URL
        assert body["backdrop_url"] == "https://image.tmdb.org/t/p/w1280/bb.jpg"

    def test_show_images(self, client, web_catalog) -> None:
        web_catalog.get_images.return_value = {"id": 1396, "posters": [], "backdrops": []}

        body = client.get("/api/catalog/shows/1396/images").json()

        assert body["id"] == 1396
        web_catalog.get_images.assert_awaited_once_with(1396)

    def test_catalog_error_envelope(self, client, web_catalog) -> None:
        web_catalog.get_show_details.side_effect = CatalogError("TMDB API request failed", 404)
        web_catalog.get_similar.return_value = CatalogPage()
        web_catalog.get_recommended.return_value = CatalogPage()

        response = client.get("/api/catalog/shows/999999")

        assert response.status_code == 404
        assert response.json() == {"error": "TMDB API request failed", "status": 404}

    def test_season(self, client, web_catalog) -> None:
        web_catalog.get_show_details.return_value = make_details(1396, "Breaking Bad")
        web_catalog.get_season_details.return_value = make_season(1396, 1, [(1, None)])

        body = client.get("/api/catalog/shows/1396/seasons/1").json()

        assert body["show"]["name"] == "Breaking Bad"
        assert body["season"]["episodes"][0]["episode_number"] == 1
