"""
Routes de la liste de suivi : séries, épisodes vus, liens par série.
"""

from typing import Optional

from fastapi import APIRouter

from ..deps import CurrentUser, WatchlistDep
from ..schemas import (
    AddShowRequest,
    ShowLinkUpdate,
    ShowUpdate,
    episode_payload,
    show_payload,
)

router = APIRouter(prefix="/api/shows", tags=["shows"])


@router.get("")
def list_shows(
    user: CurrentUser,
    watchlist: WatchlistDep,
    status: Optional[str] = None,
    favorites: bool = False,
) -> list[dict]:
    return [
        show_payload(s)
        for s in watchlist.list_shows(user, status=status, favorites=favorites)
    ]


@router.post("", status_code=201)
def add_show(body: AddShowRequest, user: CurrentUser, watchlist: WatchlistDep) -> dict:
    return show_payload(watchlist.add_show(user, body.tmdb_show_id, body.status))


@router.get("/{tmdb_show_id}")
def get_show(tmdb_show_id: int, user: CurrentUser, watchlist: WatchlistDep) -> dict:
    return show_payload(watchlist.get_show(user, tmdb_show_id))


@router.patch("/{tmdb_show_id}")
def update_show(
    tmdb_show_id: int, body: ShowUpdate, user: CurrentUser, watchlist: WatchlistDep
) -> dict:
    updates = body.model_dump(exclude_unset=True)
    return show_payload(watchlist.update_show(user, tmdb_show_id, **updates))


@router.delete("/{tmdb_show_id}", status_code=204)
def remove_show(tmdb_show_id: int, user: CurrentUser, watchlist: WatchlistDep) -> None:
    watchlist.remove_show(user, tmdb_show_id)


@router.put("/{tmdb_show_id}/watch-link")
def update_watch_link(
    tmdb_show_id: int, body: ShowLinkUpdate, user: CurrentUser, watchlist: WatchlistDep
) -> dict:
    show = watchlist.update_watch_link_settings(
        user,
        tmdb_show_id,
        custom_slug=body.custom_slug,
        custom_base_url=body.custom_base_url,
        custom_url_pattern=body.custom_url_pattern,
        link_note=body.link_note,
    )
    return show_payload(show)


@router.delete("/{tmdb_show_id}/watch-link")
def clear_watch_link(tmdb_show_id: int, user: CurrentUser, watchlist: WatchlistDep) -> dict:
    return show_payload(watchlist.clear_watch_link_settings(user, tmdb_show_id))


@router.get("/{tmdb_show_id}/episodes")
def watched_episodes(tmdb_show_id: int, user: CurrentUser, watchlist: WatchlistDep) -> list[dict]:
    return [episode_payload(e) for e in watchlist.watched_episodes(user, tmdb_show_id)]


@router.put("/{tmdb_show_id}/seasons/{season_number}/episodes/{episode_number}")
def mark_episode(
    tmdb_show_id: int,
    season_number: int,
    episode_number: int,
    user: CurrentUser,
    watchlist: WatchlistDep,
) -> dict:
    episode = watchlist.mark_episode(user, tmdb_show_id, season_number, episode_number)
    return episode_payload(episode)


@router.delete(
    "/{tmdb_show_id}/seasons/{season_number}/episodes/{episode_number}",
    status_code=204,
)
def unmark_episode(
    tmdb_show_id: int,
    season_number: int,
    episode_number: int,
    user: CurrentUser,
    watchlist: WatchlistDep,
) -> None:
    watchlist.unmark_episode(user, tmdb_show_id, season_number, episode_number)


@router.post("/{tmdb_show_id}/seasons/{season_number}/mark-all")
async def mark_season(
    tmdb_show_id: int, season_number: int, user: CurrentUser, watchlist: WatchlistDep
) -> dict:
    marked = await watchlist.mark_season(user, tmdb_show_id, season_number)
    return {
        "marked": [episode_payload(e) for e in marked],
        "count": len(marked),
    }
