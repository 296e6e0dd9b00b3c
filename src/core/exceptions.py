"""
Exceptions du domaine TVTrack.

Toutes les erreurs metier heritent de TVTrackError. La couche web les
traduit en reponses HTTP (voir src/web/app.py), la CLI les affiche.
"""

from typing import Optional


class TVTrackError(Exception):
    """Erreur de base de l'application."""


class ValidationError(TVTrackError):
    """Donnee utilisateur invalide (nom d'utilisateur, note, statut...)."""


class NotFoundError(TVTrackError):
    """Ressource introuvable."""


class ShowNotTrackedError(NotFoundError):
    """La serie n'est pas dans la liste de l'utilisateur."""

    def __init__(self, tmdb_show_id: int) -> None:
        self.tmdb_show_id = tmdb_show_id
        super().__init__(f"Show {tmdb_show_id} is not in the watch list")


class ConflictError(TVTrackError):
    """Violation d'unicite (email ou nom d'utilisateur deja pris)."""


class AuthenticationError(TVTrackError):
    """Identifiants invalides, jeton absent ou expire."""


class CatalogConfigurationError(TVTrackError):
    """La cle API TMDB n'est pas configuree cote serveur."""


class CatalogError(TVTrackError):
    """
    Echec d'une requete vers le catalogue TMDB.

    Attributes:
        status_code: Code HTTP renvoye par TMDB (ou None si erreur reseau)
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
