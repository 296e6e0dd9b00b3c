"""
Tests des commandes CLI d'administration.

Les commandes creent leur propre Container : la configuration passe par les
variables d'environnement TVTRACK_ et une base SQLite en memoire.
"""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from src import __version__
from src.core.entities.tracking import UserShow, WatchStatus
from src.core.entities.user import User
from src.core.exceptions import CatalogError
from src.infrastructure.persistence.database import configure_engine, get_session, init_db
from src.infrastructure.persistence.repositories import (
    SQLModelUserRepository,
    SQLModelUserShowRepository,
)
from src.main import app

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Base en memoire partagee et cache dans tmp_path."""
    monkeypatch.setenv("TVTRACK_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("TVTRACK_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.delenv("TVTRACK_DEFAULT_WATCH_PATTERN", raising=False)
    configure_engine("sqlite://")
    init_db()


@pytest.fixture
def cli_user(cli_env) -> User:
    session = next(get_session())
    user = SQLModelUserRepository(session).create(
        User(email="ayse@example.com", username="ayse"), "pbkdf2_sha256$1$salt$hash"
    )
    SQLModelUserShowRepository(session).upsert(
        UserShow(user_id=user.id, tmdb_show_id=1396, status=WatchStatus.COMPLETED, user_rating=9)
    )
    session.close()
    return user


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"TVTrack v{__version__}" in result.output


class TestWatchUrl:
    def test_default_pattern(self, cli_env) -> None:
        result = runner.invoke(
            app, ["watch-url", "Kuruluş Osman", "2", "5", "--base-url", "https://site.tv/dizi"]
        )
        assert result.exit_code == 0
        assert "https://site.tv/dizi/kurulus-osman/2-sezon/5-bolum" in result.output

    def test_custom_pattern(self, cli_env) -> None:
        result = runner.invoke(
            app,
            ["watch-url", "Dark", "1", "3", "-b", "https://x.tv", "-p", "izle/%dizi_adi%-%sezon%x%bolum%"],
        )
        assert "https://x.tv/izle/dark-1x3" in result.output

    def test_incomplete_configuration(self, cli_env) -> None:
        result = runner.invoke(app, ["watch-url", "Dark", "1", "3", "--base-url", ""])
        assert result.exit_code == 1
        assert "Configuration incomplete" in result.output


class TestAccounts:
    def test_users(self, cli_user) -> None:
        result = runner.invoke(app, ["users"])
        assert result.exit_code == 0
        assert "ayse" in result.output

    def test_shows(self, cli_user) -> None:
        result = runner.invoke(app, ["shows", "ayse@example.com"])
        assert result.exit_code == 0
        assert "1396" in result.output
        assert "Tamamlandı" in result.output

    def test_shows_status_filter(self, cli_user) -> None:
        result = runner.invoke(app, ["shows", "ayse@example.com", "--status", "watching"])
        assert result.exit_code == 0
        assert "1396" not in result.output

    def test_unknown_user(self, cli_env) -> None:
        result = runner.invoke(app, ["shows", "nobody@example.com"])
        assert result.exit_code == 1
        assert "Utilisateur introuvable" in result.output

    def test_stats_summary(self, cli_user) -> None:
        result = runner.invoke(app, ["stats", "ayse@example.com"])
        assert result.exit_code == 0
        assert "Tamamlandı" in result.output

    def test_detailed_stats_catalog_error(self, cli_user) -> None:
        with patch("src.adapters.cli.commands.Container") as MockContainer:
            container = MagicMock()
            MockContainer.return_value = container
            container.user_repository.return_value.get_by_email.return_value = cli_user
            stats_service = container.stats_service.return_value
            stats_service.status_summary.return_value = MagicMock(
                total=1, watching=0, completed=1, dropped=0, plan_to_watch=0
            )
            stats_service.detailed_stats.side_effect = CatalogError("TMDB API request failed", 503)
            container.tmdb_client.return_value.close = _async_noop

            result = runner.invoke(app, ["stats", "ayse@example.com", "--detailed"])

        assert result.exit_code == 1
        assert "Erreur TMDB" in result.output


async def _async_noop() -> None:
    return None
