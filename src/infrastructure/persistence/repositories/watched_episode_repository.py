"""
Implementation SQLModel du repository WatchedEpisode.
"""

from typing import Optional

from sqlmodel import Session, select

from src.core.entities.tracking import WatchedEpisode
from src.core.ports.repositories import IWatchedEpisodeRepository
from src.infrastructure.persistence.models import WatchedEpisodeModel, as_utc, utcnow


class SQLModelWatchedEpisodeRepository(IWatchedEpisodeRepository):
    """
    Repository SQLModel pour les episodes vus.

    upsert() est idempotent : marquer deux fois un episode met a jour watched_at.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: WatchedEpisodeModel) -> WatchedEpisode:
        return WatchedEpisode(
            id=model.id,
            user_id=model.user_id,
            tmdb_show_id=model.tmdb_show_id,
            season_number=model.season_number,
            episode_number=model.episode_number,
            watched_at=as_utc(model.watched_at),
        )

    def _get_model(
        self,
        user_id: int,
        tmdb_show_id: int,
        season_number: int,
        episode_number: int,
    ) -> Optional[WatchedEpisodeModel]:
        statement = select(WatchedEpisodeModel).where(
            WatchedEpisodeModel.user_id == user_id,
            WatchedEpisodeModel.tmdb_show_id == tmdb_show_id,
            WatchedEpisodeModel.season_number == season_number,
            WatchedEpisodeModel.episode_number == episode_number,
        )
        return self._session.exec(statement).first()

    def list_by_user(
        self,
        user_id: int,
        tmdb_show_id: Optional[int] = None,
    ) -> list[WatchedEpisode]:
        statement = select(WatchedEpisodeModel).where(
            WatchedEpisodeModel.user_id == user_id
        )
        if tmdb_show_id is not None:
            statement = statement.where(WatchedEpisodeModel.tmdb_show_id == tmdb_show_id)
        statement = statement.order_by(
            WatchedEpisodeModel.tmdb_show_id,
            WatchedEpisodeModel.season_number,
            WatchedEpisodeModel.episode_number,
        )
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def upsert(self, episode: WatchedEpisode) -> WatchedEpisode:
        model = self._get_model(
            episode.user_id,
            episode.tmdb_show_id,
            episode.season_number,
            episode.episode_number,
        )
        if model is None:
            model = WatchedEpisodeModel(
                user_id=episode.user_id,
                tmdb_show_id=episode.tmdb_show_id,
                season_number=episode.season_number,
                episode_number=episode.episode_number,
            )
        model.watched_at = episode.watched_at or utcnow()

        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(
        self,
        user_id: int,
        tmdb_show_id: int,
        season_number: int,
        episode_number: int,
    ) -> bool:
        model = self._get_model(user_id, tmdb_show_id, season_number, episode_number)
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True
