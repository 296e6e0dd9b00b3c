"""
Modeles SQLModel pour la base de donnees TVTrack.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- users: Comptes utilisateurs
- auth_tokens: Jetons d'authentification (bearer)
- user_shows: Series suivies, unique par (user_id, tmdb_show_id)
- watched_episodes: Episodes vus, unique par (user_id, tmdb_show_id, saison, episode)
- watch_link_settings: Reglages globaux des liens de visionnage, un par utilisateur
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, UniqueConstraint
from sqlmodel import Field, SQLModel


# Horodatages stockes avec fuseau (UTC)
UTCDateTime = DateTime(timezone=True)


def utcnow() -> datetime:
    """Instant courant en UTC, avec fuseau."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite ne conserve pas le fuseau : les dates relues sont remises en UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class UserModel(SQLModel, table=True):
    """Compte utilisateur avec hash du mot de passe."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    avatar_style: str = Field(default="adventurer")
    avatar_seed: str | None = None
    created_at: datetime | None = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime | None = Field(default_factory=utcnow, sa_type=UTCDateTime)


class AuthTokenModel(SQLModel, table=True):
    """Jeton bearer opaque emis a la connexion."""

    __tablename__ = "auth_tokens"

    token: str = Field(primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    expires_at: datetime = Field(sa_type=UTCDateTime)


class UserShowModel(SQLModel, table=True):
    """
    Serie suivie par un utilisateur.

    Les champs custom_* surchargent les reglages globaux de liens pour cette serie.
    """

    __tablename__ = "user_shows"
    __table_args__ = (
        UniqueConstraint("user_id", "tmdb_show_id", name="uq_user_shows_user_show"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    tmdb_show_id: int = Field(index=True)
    status: str = Field(default="plan_to_watch", index=True)
    is_favorite: bool = Field(default=False)
    user_rating: int | None = None  # Note personnelle 1-10
    notes: str = Field(default="")
    custom_slug: str | None = None
    custom_base_url: str | None = None
    custom_url_pattern: str | None = None
    link_note: str | None = None
    created_at: datetime | None = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime | None = Field(default_factory=utcnow, sa_type=UTCDateTime)


class WatchedEpisodeModel(SQLModel, table=True):
    """Episode marque comme vu."""

    __tablename__ = "watched_episodes"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "tmdb_show_id",
            "season_number",
            "episode_number",
            name="uq_watched_episodes_key",
        ),
        Index("ix_watched_episodes_user_show", "user_id", "tmdb_show_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id")
    tmdb_show_id: int
    season_number: int
    episode_number: int
    watched_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class WatchLinkSettingsModel(SQLModel, table=True):
    """Reglages globaux de liens de visionnage (un enregistrement par utilisateur)."""

    __tablename__ = "watch_link_settings"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    base_url: str = Field(default="")
    pattern: str = Field(default="")
    updated_at: datetime | None = Field(default_factory=utcnow, sa_type=UTCDateTime)
