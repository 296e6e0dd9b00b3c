"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
repositories SQLModel, client catalogue TMDB avec son cache, et services.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelUserRepository,
    SQLModelUserShowRepository,
    SQLModelWatchedEpisodeRepository,
)
from .services.auth import AuthService
from .services.calendar import CalendarService
from .services.catalog import CatalogService
from .services.show_store import ShowStoreRegistry
from .services.stats import StatsService
from .services.watchlist import WatchlistService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        auth = container.auth_service()
        watchlist = container.watchlist_service()

    Les services dependant de repositories sont des Factory : chaque appel
    recoit des repositories avec une session fraiche. La couche web passe
    explicitement ses propres repositories (une session par requete).
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repositories - Factory pour nouvelle instance avec session fraiche
    user_repository = providers.Factory(
        SQLModelUserRepository,
        session=session,
    )
    user_show_repository = providers.Factory(
        SQLModelUserShowRepository,
        session=session,
    )
    watched_episode_repository = providers.Factory(
        SQLModelWatchedEpisodeRepository,
        session=session,
    )

    # Miroirs optimistes partages entre requetes
    show_stores = providers.Singleton(ShowStoreRegistry)

    # Cache API - Singleton pour partage entre requetes
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client catalogue - Singleton. Sans cle API, il est cree quand meme et
    # leve CatalogConfigurationError au premier appel.
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
    )

    # Services
    auth_service = providers.Factory(
        AuthService,
        user_repo=user_repository,
        token_ttl_hours=config.provided.token_ttl_hours,
    )

    watchlist_service = providers.Factory(
        WatchlistService,
        show_repo=user_show_repository,
        episode_repo=watched_episode_repository,
        stores=show_stores,
        catalog=tmdb_client,
        default_pattern=config.provided.default_watch_pattern,
    )

    catalog_service = providers.Factory(
        CatalogService,
        catalog=tmdb_client,
    )

    stats_service = providers.Factory(
        StatsService,
        watchlist=watchlist_service,
        catalog=tmdb_client,
    )

    calendar_service = providers.Factory(
        CalendarService,
        watchlist=watchlist_service,
        catalog=tmdb_client,
    )
