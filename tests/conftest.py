"""
Fixtures pytest partagees pour les tests TVTrack.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire et repositories SQLModel
- Utilisateur de test
- Mock du client catalogue (ICatalogClient)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.config import Settings
from src.core.entities.user import User
from src.core.ports.api_clients import CatalogPage, ICatalogClient
from src.infrastructure.persistence import models  # noqa: F401
from src.infrastructure.persistence.repositories import (
    SQLModelUserRepository,
    SQLModelUserShowRepository,
    SQLModelWatchedEpisodeRepository,
)
from src.services.show_store import ShowStoreRegistry
from src.services.watchlist import WatchlistService


@pytest.fixture
def engine():
    """Engine SQLite en memoire, partage entre sessions."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def user_repo(session: Session) -> SQLModelUserRepository:
    return SQLModelUserRepository(session)


@pytest.fixture
def show_repo(session: Session) -> SQLModelUserShowRepository:
    return SQLModelUserShowRepository(session)


@pytest.fixture
def episode_repo(session: Session) -> SQLModelWatchedEpisodeRepository:
    return SQLModelWatchedEpisodeRepository(session)


@pytest.fixture
def user(user_repo: SQLModelUserRepository) -> User:
    """Utilisateur persiste en base."""
    return user_repo.create(
        User(email="ayse@example.com", username="ayse"), "pbkdf2_sha256$1$salt$hash"
    )


@pytest.fixture
def mock_catalog() -> AsyncMock:
    """
    Mock de ICatalogClient.

    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    catalog = AsyncMock(spec=ICatalogClient)
    catalog.get_airing_today.return_value = CatalogPage()
    catalog.get_on_the_air.return_value = CatalogPage()
    return catalog


@pytest.fixture
def watchlist(show_repo, episode_repo, mock_catalog) -> WatchlistService:
    return WatchlistService(
        show_repo=show_repo,
        episode_repo=episode_repo,
        stores=ShowStoreRegistry(),
        catalog=mock_catalog,
        default_pattern="%dizi_adi%/%sezon%-sezon/%bolum%-bolum",
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler base, cache et logs.
    """
    return Settings(
        database_url="sqlite://",
        tmdb_api_key="test_api_key",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
    )
