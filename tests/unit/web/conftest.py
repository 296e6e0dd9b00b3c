"""Fixtures partagees pour les tests de l'API web."""

from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.adapters.api.tmdb_client import TMDBClient
from src.container import Container
from src.core.ports.api_clients import CatalogPage
from src.infrastructure.persistence.database import configure_engine
from src.web.app import create_app


@pytest.fixture
def container(test_settings) -> Container:
    """Container branche sur une base SQLite en memoire et les settings de test."""
    configure_engine(test_settings.database_url)
    container = Container()
    container.config.override(providers.Object(test_settings))
    return container


@pytest.fixture
def web_catalog(container) -> AsyncMock:
    """Client catalogue mocke, injecte a la place du TMDBClient."""
    catalog = AsyncMock(spec=TMDBClient)
    catalog.configured = True
    catalog.get_airing_today.return_value = CatalogPage()
    catalog.get_on_the_air.return_value = CatalogPage()
    container.tmdb_client.override(providers.Object(catalog))
    return catalog


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as client:
        yield client


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    """Inscrit un utilisateur et retourne l'en-tete Bearer de sa session."""
    response = client.post(
        "/api/auth/register",
        json={"email": "ayse@example.com", "password": "gizli123", "username": "ayse"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
