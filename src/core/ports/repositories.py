"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.core.entities.tracking import UserShow, WatchedEpisode, WatchLinkSettings
from src.core.entities.user import User


class IUserRepository(ABC):
    """
    Interface de stockage des comptes utilisateurs et de leurs jetons.
    """

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Récupère un utilisateur par son ID."""
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Récupère un utilisateur par son email."""
        ...

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        """Récupère un utilisateur par son nom d'utilisateur."""
        ...

    @abstractmethod
    def get_password_hash(self, user_id: int) -> Optional[str]:
        """Retourne le hash du mot de passe stocké."""
        ...

    @abstractmethod
    def create(self, user: User, password_hash: str) -> User:
        """Crée un utilisateur."""
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Met à jour le profil d'un utilisateur existant."""
        ...

    @abstractmethod
    def list_all(self) -> list[User]:
        """Liste tous les utilisateurs."""
        ...

    @abstractmethod
    def add_token(self, user_id: int, token: str, expires_at: datetime) -> None:
        """Enregistre un jeton d'authentification."""
        ...

    @abstractmethod
    def get_user_by_token(self, token: str, now: datetime) -> Optional[User]:
        """Retourne l'utilisateur d'un jeton valide (non expiré)."""
        ...

    @abstractmethod
    def delete_token(self, token: str) -> bool:
        """Révoque un jeton. Retourne True si supprimé."""
        ...

    @abstractmethod
    def purge_expired_tokens(self, now: datetime) -> int:
        """Supprime les jetons expirés. Retourne le nombre supprimé."""
        ...


class IUserShowRepository(ABC):
    """
    Interface de stockage des séries suivies.
    """

    @abstractmethod
    def get(self, user_id: int, tmdb_show_id: int) -> Optional[UserShow]:
        """Récupère le suivi d'une série."""
        ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[UserShow]:
        """Liste les séries suivies par un utilisateur."""
        ...

    @abstractmethod
    def upsert(self, user_show: UserShow) -> UserShow:
        """Insère ou met à jour le suivi (conflit sur user_id + tmdb_show_id)."""
        ...

    @abstractmethod
    def delete(self, user_id: int, tmdb_show_id: int) -> bool:
        """Supprime le suivi d'une série. Retourne True si supprimé."""
        ...

    @abstractmethod
    def get_link_settings(self, user_id: int) -> Optional[WatchLinkSettings]:
        """Récupère les réglages globaux de liens de visionnage."""
        ...

    @abstractmethod
    def save_link_settings(self, settings: WatchLinkSettings) -> WatchLinkSettings:
        """Enregistre les réglages globaux de liens de visionnage."""
        ...


class IWatchedEpisodeRepository(ABC):
    """
    Interface de stockage des épisodes vus.
    """

    @abstractmethod
    def list_by_user(
        self,
        user_id: int,
        tmdb_show_id: Optional[int] = None,
    ) -> list[WatchedEpisode]:
        """
        Liste les épisodes vus par un utilisateur.

        Args :
            user_id : L'ID de l'utilisateur
            tmdb_show_id : Filtre optionnel par série
        """
        ...

    @abstractmethod
    def upsert(self, episode: WatchedEpisode) -> WatchedEpisode:
        """Insère ou met à jour (conflit sur user/série/saison/épisode)."""
        ...

    @abstractmethod
    def delete(
        self,
        user_id: int,
        tmdb_show_id: int,
        season_number: int,
        episode_number: int,
    ) -> bool:
        """Supprime un épisode vu. Retourne True si supprimé."""
        ...
