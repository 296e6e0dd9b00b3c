"""
Dépendances partagées de l'application web.

Chaque requête reçoit sa propre session SQLModel ; les services sont créés
par le Container avec des repositories liés à cette session.
"""

from collections.abc import Generator
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from ..container import Container
from ..core.entities.user import User
from ..infrastructure.persistence.database import get_session
from ..services.auth import AuthService
from ..services.calendar import CalendarService
from ..services.catalog import CatalogService
from ..services.stats import StatsService
from ..services.watchlist import WatchlistService

_bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_db_session() -> Generator[Session, None, None]:
    yield from get_session()


ContainerDep = Annotated[Container, Depends(get_container)]
SessionDep = Annotated[Session, Depends(get_db_session)]


def get_auth_service(container: ContainerDep, session: SessionDep) -> AuthService:
    return container.auth_service(
        user_repo=container.user_repository(session=session),
    )


def get_watchlist_service(container: ContainerDep, session: SessionDep) -> WatchlistService:
    return container.watchlist_service(
        show_repo=container.user_show_repository(session=session),
        episode_repo=container.watched_episode_repository(session=session),
    )


AuthDep = Annotated[AuthService, Depends(get_auth_service)]
WatchlistDep = Annotated[WatchlistService, Depends(get_watchlist_service)]


def get_stats_service(container: ContainerDep, watchlist: WatchlistDep) -> StatsService:
    return container.stats_service(watchlist=watchlist)


def get_calendar_service(container: ContainerDep, watchlist: WatchlistDep) -> CalendarService:
    return container.calendar_service(watchlist=watchlist)


def get_catalog_service(container: ContainerDep) -> CatalogService:
    return container.catalog_service()


def get_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user(
    auth: AuthDep,
    token: Annotated[Optional[str], Depends(get_token)],
) -> User:
    """Utilisateur du jeton Bearer (AuthenticationError -> 401)."""
    return auth.current_user(token)


CurrentUser = Annotated[User, Depends(get_current_user)]
StatsDep = Annotated[StatsService, Depends(get_stats_service)]
CalendarDep = Annotated[CalendarService, Depends(get_calendar_service)]
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
