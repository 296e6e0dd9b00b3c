"""
Miroir local optimiste de la liste de series et des episodes vus.

Le WatchlistService modifie d'abord le miroir puis ecrit en base. En cas
d'echec de l'ecriture, le miroir n'est PAS reconcilie : seul un refresh()
explicite le recharge depuis la base. Aucun versionnement, aucune
resolution de conflit.

Les routes synchrones s'executent dans des threads differents : chaque
ShowStore protege ses lectures et ecritures par un verrou reentrant.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from src.core.entities.tracking import UserShow, WatchedEpisode


class ShowStore:
    """
    Miroir en memoire pour un utilisateur.

    Attributs :
        user_shows : Liste des series suivies (ordre d'insertion)
        watched_episodes : Index tmdb_show_id -> liste des episodes vus
        loaded : Vrai une fois la liste de series chargee au moins une fois
    """

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        self.user_shows: list[UserShow] = []
        self.watched_episodes: dict[int, list[WatchedEpisode]] = {}
        self.loaded = False
        self._lock = threading.RLock()

    def set_user_shows(self, shows: Iterable[UserShow]) -> None:
        with self._lock:
            self.user_shows = list(shows)
            self.loaded = True

    def shows(self) -> list[UserShow]:
        """Copie de la liste des series suivies."""
        with self._lock:
            return list(self.user_shows)

    def add_show(self, show: UserShow) -> None:
        with self._lock:
            self.user_shows = [
                s for s in self.user_shows if s.tmdb_show_id != show.tmdb_show_id
            ]
            self.user_shows.append(show)

    def update_show(self, tmdb_show_id: int, **updates: Any) -> Optional[UserShow]:
        """
        Applique des modifications partielles a une serie du miroir.

        Returns:
            La serie modifiee, ou None si elle n'est pas dans le miroir
        """
        with self._lock:
            updated = None
            shows = []
            for show in self.user_shows:
                if show.tmdb_show_id == tmdb_show_id:
                    show = replace(show, **updates)
                    updated = show
                shows.append(show)
            self.user_shows = shows
            return updated

    def remove_show(self, tmdb_show_id: int) -> None:
        with self._lock:
            self.user_shows = [
                s for s in self.user_shows if s.tmdb_show_id != tmdb_show_id
            ]

    def get_show(self, tmdb_show_id: int) -> Optional[UserShow]:
        with self._lock:
            for show in self.user_shows:
                if show.tmdb_show_id == tmdb_show_id:
                    return show
            return None

    def set_watched_episodes(
        self, tmdb_show_id: int, episodes: Iterable[WatchedEpisode]
    ) -> None:
        with self._lock:
            self.watched_episodes[tmdb_show_id] = list(episodes)

    def set_all_watched_episodes(self, episodes: Iterable[WatchedEpisode]) -> None:
        """Remplace tout l'index en regroupant les episodes par serie."""
        index: dict[int, list[WatchedEpisode]] = {}
        for episode in episodes:
            index.setdefault(episode.tmdb_show_id, []).append(episode)
        with self._lock:
            self.watched_episodes = index

    def add_watched_episode(
        self, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> bool:
        """
        Ajoute un episode vu s'il n'est pas deja present.

        Returns:
            True si l'episode a ete ajoute, False s'il etait deja vu
        """
        with self._lock:
            if self.is_episode_watched(tmdb_show_id, season_number, episode_number):
                return False
            self.watched_episodes.setdefault(tmdb_show_id, []).append(
                WatchedEpisode(
                    user_id=self.user_id,
                    tmdb_show_id=tmdb_show_id,
                    season_number=season_number,
                    episode_number=episode_number,
                    watched_at=datetime.now(timezone.utc),
                )
            )
            return True

    def remove_watched_episode(
        self, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> None:
        with self._lock:
            episodes = self.watched_episodes.get(tmdb_show_id, [])
            self.watched_episodes[tmdb_show_id] = [
                e
                for e in episodes
                if not (
                    e.season_number == season_number
                    and e.episode_number == episode_number
                )
            ]

    def is_episode_watched(
        self, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> bool:
        with self._lock:
            return any(
                e.season_number == season_number and e.episode_number == episode_number
                for e in self.watched_episodes.get(tmdb_show_id, [])
            )

    def episodes_for(self, tmdb_show_id: Optional[int] = None) -> list[WatchedEpisode]:
        """Episodes vus d'une serie, ou de toutes les series si None."""
        with self._lock:
            if tmdb_show_id is not None:
                return list(self.watched_episodes.get(tmdb_show_id, []))
            return [e for episodes in self.watched_episodes.values() for e in episodes]

    def clear(self) -> None:
        with self._lock:
            self.user_shows = []
            self.watched_episodes = {}
            self.loaded = False


class ShowStoreRegistry:
    """Un ShowStore par utilisateur, partage entre les requetes."""

    def __init__(self) -> None:
        self._stores: dict[int, ShowStore] = {}
        self._lock = threading.Lock()

    def get(self, user_id: int) -> ShowStore:
        with self._lock:
            store = self._stores.get(user_id)
            if store is None:
                store = ShowStore(user_id)
                self._stores[user_id] = store
            return store

    def drop(self, user_id: int) -> None:
        """Oublie le miroir d'un utilisateur (deconnexion)."""
        with self._lock:
            self._stores.pop(user_id, None)
