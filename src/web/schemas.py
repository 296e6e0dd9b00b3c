"""
Corps de requête et sérialisation des réponses de l'API JSON.
"""

from dataclasses import asdict
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..core.entities.tracking import UserShow, WatchedEpisode
from ..core.entities.user import User
from ..services.calendar import Calendar, CalendarGroup
from ..services.catalog import ShowPage
from ..utils.constants import STATUS_LABELS
from ..utils.helpers import backdrop_url, image_url


class RegisterRequest(BaseModel):
    email: str
    password: str
    username: str


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    avatar_style: Optional[str] = None
    avatar_seed: Optional[str] = None


class AddShowRequest(BaseModel):
    tmdb_show_id: int
    status: str = "plan_to_watch"


class ShowUpdate(BaseModel):
    """Champs absents = inchangés. user_rating 0 ou null retire la note."""

    status: Optional[str] = None
    is_favorite: Optional[bool] = None
    user_rating: Optional[int] = None
    notes: Optional[str] = None


class ShowLinkUpdate(BaseModel):
    custom_slug: Optional[str] = None
    custom_base_url: Optional[str] = None
    custom_url_pattern: Optional[str] = None
    link_note: Optional[str] = None


class LinkSettingsUpdate(BaseModel):
    base_url: str = ""
    pattern: Optional[str] = Field(default=None)


def user_payload(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "avatar_style": user.avatar_style,
        "avatar_seed": user.avatar_seed or user.email,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
    }


def show_payload(show: UserShow) -> dict[str, Any]:
    return {
        "id": show.id,
        "tmdb_show_id": show.tmdb_show_id,
        "status": show.status.value,
        "status_label": STATUS_LABELS[show.status.value],
        "is_favorite": show.is_favorite,
        "user_rating": show.user_rating,
        "notes": show.notes,
        "custom_slug": show.custom_slug,
        "custom_base_url": show.custom_base_url,
        "custom_url_pattern": show.custom_url_pattern,
        "link_note": show.link_note,
        "has_link_overrides": show.has_link_overrides,
        "created_at": show.created_at,
        "updated_at": show.updated_at,
    }


def episode_payload(episode: WatchedEpisode) -> dict[str, Any]:
    return {
        "tmdb_show_id": episode.tmdb_show_id,
        "season_number": episode.season_number,
        "episode_number": episode.episode_number,
        "watched_at": episode.watched_at,
    }


def show_page_payload(page: ShowPage) -> dict[str, Any]:
    """Fiche serie avec les URLs completes du poster et de l'image de fond."""
    return {
        **asdict(page),
        "poster_url": image_url(page.details.poster_path),
        "backdrop_url": backdrop_url(page.details.backdrop_path),
    }


def calendar_group_payload(group: CalendarGroup) -> dict[str, Any]:
    payload = asdict(group)
    payload["poster_url"] = image_url(group.poster_path, "w185")
    for episode in payload["episodes"]:
        episode["still_url"] = backdrop_url(episode["still_path"], "w300")
    return payload


def calendar_payload(calendar: Calendar) -> dict[str, Any]:
    return {
        "groups": [calendar_group_payload(g) for g in calendar.groups.values()],
        "episode_count": calendar.episode_count,
        "airing_today": calendar.airing_today,
        "on_the_air": calendar.on_the_air,
    }
