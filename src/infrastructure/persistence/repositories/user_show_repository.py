"""
Implementation SQLModel du repository UserShow.

Implemente IUserShowRepository : series suivies et reglages globaux
de liens de visionnage.
"""

from typing import Optional

from sqlmodel import Session, select

from src.core.entities.tracking import UserShow, WatchLinkSettings, WatchStatus
from src.core.ports.repositories import IUserShowRepository
from src.infrastructure.persistence.models import (
    UserShowModel,
    WatchLinkSettingsModel,
    as_utc,
    utcnow,
)

# Champs recopies tels quels entre entite et modele lors d'un upsert
_MUTABLE_FIELDS = (
    "is_favorite",
    "user_rating",
    "notes",
    "custom_slug",
    "custom_base_url",
    "custom_url_pattern",
    "link_note",
)


class SQLModelUserShowRepository(IUserShowRepository):
    """
    Repository SQLModel pour les series suivies.

    upsert() reproduit un "insert ... on conflict (user_id, tmdb_show_id) do update" :
    le second ajout d'une meme serie met a jour l'enregistrement existant.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: UserShowModel) -> UserShow:
        return UserShow(
            id=model.id,
            user_id=model.user_id,
            tmdb_show_id=model.tmdb_show_id,
            status=WatchStatus(model.status),
            is_favorite=model.is_favorite,
            user_rating=model.user_rating,
            notes=model.notes or "",
            custom_slug=model.custom_slug,
            custom_base_url=model.custom_base_url,
            custom_url_pattern=model.custom_url_pattern,
            link_note=model.link_note,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _get_model(self, user_id: int, tmdb_show_id: int) -> Optional[UserShowModel]:
        statement = select(UserShowModel).where(
            UserShowModel.user_id == user_id,
            UserShowModel.tmdb_show_id == tmdb_show_id,
        )
        return self._session.exec(statement).first()

    def get(self, user_id: int, tmdb_show_id: int) -> Optional[UserShow]:
        model = self._get_model(user_id, tmdb_show_id)
        return self._to_entity(model) if model else None

    def list_by_user(self, user_id: int) -> list[UserShow]:
        statement = (
            select(UserShowModel)
            .where(UserShowModel.user_id == user_id)
            .order_by(UserShowModel.updated_at.desc())
        )
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def upsert(self, user_show: UserShow) -> UserShow:
        model = self._get_model(user_show.user_id, user_show.tmdb_show_id)
        if model is None:
            model = UserShowModel(
                user_id=user_show.user_id,
                tmdb_show_id=user_show.tmdb_show_id,
            )
        model.status = user_show.status.value
        for name in _MUTABLE_FIELDS:
            setattr(model, name, getattr(user_show, name))
        model.updated_at = utcnow()

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int, tmdb_show_id: int) -> bool:
        model = self._get_model(user_id, tmdb_show_id)
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True

    def get_link_settings(self, user_id: int) -> Optional[WatchLinkSettings]:
        model = self._session.get(WatchLinkSettingsModel, user_id)
        if model is None:
            return None
        return WatchLinkSettings(
            user_id=model.user_id, base_url=model.base_url, pattern=model.pattern
        )

    def save_link_settings(self, settings: WatchLinkSettings) -> WatchLinkSettings:
        model = self._session.get(WatchLinkSettingsModel, settings.user_id)
        if model is None:
            model = WatchLinkSettingsModel(user_id=settings.user_id)
        model.base_url = settings.base_url
        model.pattern = settings.pattern
        model.updated_at = utcnow()
        self._session.add(model)
        self._session.commit()
        return settings
