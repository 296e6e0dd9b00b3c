"""
Service de liste de suivi : series suivies, episodes vus, liens de visionnage.

Chaque mutation met a jour le miroir local (ShowStore) AVANT d'ecrire en
base. Si l'ecriture echoue, l'erreur est journalisee puis propagee et le
miroir reste dans son etat optimiste jusqu'au prochain refresh().

Regle de statut automatique : marquer un episode (ou une saison entiere)
d'une serie en "plan_to_watch" la fait passer en "watching".
"""

from typing import Any, Optional

from loguru import logger

from src.core.entities.tracking import (
    UserShow,
    WatchedEpisode,
    WatchLinkSettings,
    WatchStatus,
)
from src.core.entities.user import User
from src.core.exceptions import ShowNotTrackedError, ValidationError
from src.core.ports.api_clients import ICatalogClient
from src.core.ports.repositories import IUserShowRepository, IWatchedEpisodeRepository
from src.services.show_store import ShowStore, ShowStoreRegistry
from src.utils.constants import RATING_MAX, RATING_MIN
from src.utils.sanitize import sanitize_note, validate_note

# Champs modifiables via update_show()
UPDATABLE_FIELDS = ("status", "is_favorite", "user_rating", "notes")

LINK_FIELDS = ("custom_slug", "custom_base_url", "custom_url_pattern", "link_note")


def parse_status(value: Any) -> WatchStatus:
    """Convertit une valeur (str ou WatchStatus) en WatchStatus."""
    if isinstance(value, WatchStatus):
        return value
    try:
        return WatchStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}") from None


def _normalize_rating(value: Any) -> Optional[int]:
    # 0 ou None : note retiree
    if value in (None, 0, ""):
        return None
    try:
        rating = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid rating: {value!r}") from None
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError(
            f"Rating must be between {RATING_MIN} and {RATING_MAX}"
        )
    return rating


def _empty_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class WatchlistService:
    """
    Cas d'usage de la liste de suivi d'un utilisateur.

    Example:
        service = WatchlistService(show_repo, episode_repo, stores, tmdb_client)
        await service.mark_season(user, 1399, 1)
        shows = service.list_shows(user, status="watching")
    """

    def __init__(
        self,
        show_repo: IUserShowRepository,
        episode_repo: IWatchedEpisodeRepository,
        stores: ShowStoreRegistry,
        catalog: Optional[ICatalogClient] = None,
        default_pattern: str = "",
    ) -> None:
        self._show_repo = show_repo
        self._episode_repo = episode_repo
        self._stores = stores
        self._catalog = catalog
        self._default_pattern = default_pattern

    # ------------------------------------------------------------------
    # Miroir
    # ------------------------------------------------------------------

    def store(self, user: User) -> ShowStore:
        """Retourne le miroir de l'utilisateur, charge depuis la base si besoin."""
        store = self._stores.get(user.id)
        if not store.loaded:
            self.refresh(user)
        return store

    def refresh(self, user: User) -> ShowStore:
        """Recharge le miroir depuis la base (seule reconciliation possible)."""
        store = self._stores.get(user.id)
        store.set_user_shows(self._show_repo.list_by_user(user.id))
        store.set_all_watched_episodes(self._episode_repo.list_by_user(user.id))
        logger.debug(
            f"Miroir recharge pour l'utilisateur {user.id}: "
            f"{len(store.shows())} serie(s)"
        )
        return store

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def get_show(self, user: User, tmdb_show_id: int) -> UserShow:
        show = self._show_repo.get(user.id, tmdb_show_id)
        if show is None:
            raise ShowNotTrackedError(tmdb_show_id)
        return show

    def list_shows(
        self,
        user: User,
        status: Optional[Any] = None,
        favorites: bool = False,
    ) -> list[UserShow]:
        shows = self.store(user).shows()
        if status is not None:
            wanted = parse_status(status)
            shows = [s for s in shows if s.status == wanted]
        if favorites:
            shows = [s for s in shows if s.is_favorite]
        return shows

    def add_show(
        self,
        user: User,
        tmdb_show_id: int,
        status: Any = WatchStatus.PLAN_TO_WATCH,
    ) -> UserShow:
        """Ajoute une serie (ou met a jour son statut si deja suivie)."""
        store = self.store(user)
        existing = store.get_show(tmdb_show_id) or self._show_repo.get(
            user.id, tmdb_show_id
        )
        show = existing or UserShow(user_id=user.id, tmdb_show_id=tmdb_show_id)
        show.status = parse_status(status)
        store.add_show(show)

        try:
            saved = self._show_repo.upsert(show)
        except Exception as e:
            logger.error(f"Echec de l'ajout de la serie {tmdb_show_id}: {e}")
            raise
        store.update_show(tmdb_show_id, id=saved.id, created_at=saved.created_at,
                          updated_at=saved.updated_at)
        logger.info(f"Serie {tmdb_show_id} ajoutee ({saved.status.value})")
        return saved

    def update_show(self, user: User, tmdb_show_id: int, **updates: Any) -> UserShow:
        """
        Modifie statut, favori, note ou commentaire d'une serie suivie.

        Raises:
            ShowNotTrackedError: Si la serie n'est pas suivie
            ValidationError: Champ inconnu ou valeur invalide
        """
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        changes = self._validate_updates(updates)
        current = self.get_show(user, tmdb_show_id)
        return self._apply(user, current, changes)

    def remove_show(self, user: User, tmdb_show_id: int) -> None:
        """
        Retire une serie de la liste.

        Les episodes vus restent en base ; ils sont seulement retires du miroir.

        Raises:
            ShowNotTrackedError: Si la serie n'est pas suivie (miroir intact)
        """
        store = self.store(user)
        if store.get_show(tmdb_show_id) is None and self._show_repo.get(
            user.id, tmdb_show_id
        ) is None:
            raise ShowNotTrackedError(tmdb_show_id)
        store.remove_show(tmdb_show_id)
        store.set_watched_episodes(tmdb_show_id, [])

        try:
            deleted = self._show_repo.delete(user.id, tmdb_show_id)
        except Exception as e:
            logger.error(f"Echec de la suppression de la serie {tmdb_show_id}: {e}")
            raise
        if not deleted:
            raise ShowNotTrackedError(tmdb_show_id)
        logger.info(f"Serie {tmdb_show_id} retiree de la liste")

    def _validate_updates(self, updates: dict[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        if "status" in updates:
            changes["status"] = parse_status(updates["status"])
        if "is_favorite" in updates:
            changes["is_favorite"] = bool(updates["is_favorite"])
        if "user_rating" in updates:
            changes["user_rating"] = _normalize_rating(updates["user_rating"])
        if "notes" in updates:
            notes = sanitize_note(updates["notes"])
            validate_note(notes)
            changes["notes"] = notes
        return changes

    def _apply(self, user: User, current: UserShow, changes: dict[str, Any]) -> UserShow:
        """Applique des modifications au miroir puis a la base."""
        store = self.store(user)
        if store.update_show(current.tmdb_show_id, **changes) is None:
            store.add_show(current)
            store.update_show(current.tmdb_show_id, **changes)

        for name, value in changes.items():
            setattr(current, name, value)
        try:
            saved = self._show_repo.upsert(current)
        except Exception as e:
            logger.error(
                f"Echec de la mise a jour de la serie {current.tmdb_show_id}: {e}"
            )
            raise
        store.update_show(current.tmdb_show_id, updated_at=saved.updated_at)
        return saved

    # ------------------------------------------------------------------
    # Episodes
    # ------------------------------------------------------------------

    def watched_episodes(
        self, user: User, tmdb_show_id: Optional[int] = None
    ) -> list[WatchedEpisode]:
        return self.store(user).episodes_for(tmdb_show_id)

    def is_episode_watched(
        self, user: User, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> bool:
        return self.store(user).is_episode_watched(
            tmdb_show_id, season_number, episode_number
        )

    def mark_episode(
        self, user: User, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> WatchedEpisode:
        """Marque un episode comme vu (idempotent)."""
        store = self.store(user)
        store.add_watched_episode(tmdb_show_id, season_number, episode_number)

        try:
            saved = self._episode_repo.upsert(
                WatchedEpisode(
                    user_id=user.id,
                    tmdb_show_id=tmdb_show_id,
                    season_number=season_number,
                    episode_number=episode_number,
                )
            )
        except Exception as e:
            logger.error(
                f"Echec du marquage S{season_number:02d}E{episode_number:02d} "
                f"de la serie {tmdb_show_id}: {e}"
            )
            raise

        self._start_watching(user, tmdb_show_id)
        return saved

    def unmark_episode(
        self, user: User, tmdb_show_id: int, season_number: int, episode_number: int
    ) -> bool:
        store = self.store(user)
        store.remove_watched_episode(tmdb_show_id, season_number, episode_number)
        try:
            return self._episode_repo.delete(
                user.id, tmdb_show_id, season_number, episode_number
            )
        except Exception as e:
            logger.error(
                f"Echec du retrait S{season_number:02d}E{episode_number:02d} "
                f"de la serie {tmdb_show_id}: {e}"
            )
            raise

    async def mark_season(
        self, user: User, tmdb_show_id: int, season_number: int
    ) -> list[WatchedEpisode]:
        """
        Marque tous les episodes non vus d'une saison.

        Returns:
            Les episodes nouvellement marques
        """
        if self._catalog is None:
            raise ValidationError("Catalog client is not available")

        season = await self._catalog.get_season_details(tmdb_show_id, season_number)
        store = self.store(user)
        marked = []
        for info in season.episodes:
            if store.is_episode_watched(tmdb_show_id, season_number, info.episode_number):
                continue
            store.add_watched_episode(tmdb_show_id, season_number, info.episode_number)
            try:
                marked.append(
                    self._episode_repo.upsert(
                        WatchedEpisode(
                            user_id=user.id,
                            tmdb_show_id=tmdb_show_id,
                            season_number=season_number,
                            episode_number=info.episode_number,
                        )
                    )
                )
            except Exception as e:
                logger.error(
                    f"Echec du marquage de la saison {season_number} "
                    f"de la serie {tmdb_show_id}: {e}"
                )
                raise

        self._start_watching(user, tmdb_show_id)
        logger.info(
            f"Saison {season_number} de la serie {tmdb_show_id}: "
            f"{len(marked)} episode(s) marque(s)"
        )
        return marked

    def _start_watching(self, user: User, tmdb_show_id: int) -> None:
        # L'episode est deja enregistre : un echec ici ne fait pas echouer le marquage
        try:
            show = self._show_repo.get(user.id, tmdb_show_id)
            if show is None or show.status != WatchStatus.PLAN_TO_WATCH:
                return
            self._apply(user, show, {"status": WatchStatus.WATCHING})
        except Exception as e:
            logger.error(
                f"Echec du passage automatique en cours de la serie {tmdb_show_id}: {e}"
            )
            return
        logger.info(f"Serie {tmdb_show_id} passee en cours de visionnage")

    # ------------------------------------------------------------------
    # Liens de visionnage
    # ------------------------------------------------------------------

    def update_watch_link_settings(
        self,
        user: User,
        tmdb_show_id: int,
        custom_slug: Optional[str] = None,
        custom_base_url: Optional[str] = None,
        custom_url_pattern: Optional[str] = None,
        link_note: Optional[str] = None,
    ) -> UserShow:
        """Enregistre les surcharges de lien d'une serie (chaine vide -> None)."""
        current = self.get_show(user, tmdb_show_id)
        changes = {
            "custom_slug": _empty_to_none(custom_slug),
            "custom_base_url": _empty_to_none(custom_base_url),
            "custom_url_pattern": _empty_to_none(custom_url_pattern),
            "link_note": _empty_to_none(link_note),
        }
        return self._apply(user, current, changes)

    def clear_watch_link_settings(self, user: User, tmdb_show_id: int) -> UserShow:
        current = self.get_show(user, tmdb_show_id)
        return self._apply(user, current, {name: None for name in LINK_FIELDS})

    def get_link_settings(self, user: User) -> WatchLinkSettings:
        """Reglages globaux, avec le gabarit par defaut si rien n'est enregistre."""
        settings = self._show_repo.get_link_settings(user.id)
        if settings is None:
            return WatchLinkSettings(user_id=user.id, pattern=self._default_pattern)
        if not settings.pattern:
            settings.pattern = self._default_pattern
        return settings

    def save_link_settings(
        self, user: User, base_url: str, pattern: Optional[str] = None
    ) -> WatchLinkSettings:
        settings = WatchLinkSettings(
            user_id=user.id,
            base_url=(base_url or "").strip(),
            pattern=(pattern or "").strip() or self._default_pattern,
        )
        return self._show_repo.save_link_settings(settings)
