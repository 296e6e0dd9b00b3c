"""
Réglages globaux des liens de visionnage de l'utilisateur.
"""

from fastapi import APIRouter

from ..deps import CurrentUser, WatchlistDep
from ..schemas import LinkSettingsUpdate

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/watch-link")
def get_watch_link(user: CurrentUser, watchlist: WatchlistDep) -> dict:
    settings = watchlist.get_link_settings(user)
    return {
        "base_url": settings.base_url,
        "pattern": settings.pattern,
        "configured": settings.is_configured,
    }


@router.put("/watch-link")
def save_watch_link(body: LinkSettingsUpdate, user: CurrentUser, watchlist: WatchlistDep) -> dict:
    settings = watchlist.save_link_settings(user, body.base_url, body.pattern)
    return {
        "base_url": settings.base_url,
        "pattern": settings.pattern,
        "configured": settings.is_configured,
    }
