"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des données
- IUserRepository : Comptes et jetons
- IUserShowRepository : Séries suivies et réglages de liens
- IWatchedEpisodeRepository : Épisodes vus

Ports client catalogue : Contrats pour le catalogue externe
- ICatalogClient : Interface du catalogue de séries
- CatalogPage, ShowSummary, ShowDetails, SeasonDetails, EpisodeInfo, Genre
"""

from src.core.ports.repositories import (
    IUserRepository,
    IUserShowRepository,
    IWatchedEpisodeRepository,
)
from src.core.ports.api_clients import (
    CatalogPage,
    EpisodeInfo,
    Genre,
    ICatalogClient,
    SeasonDetails,
    SeasonSummary,
    ShowDetails,
    ShowSummary,
)

__all__ = [
    # Repositories
    "IUserRepository",
    "IUserShowRepository",
    "IWatchedEpisodeRepository",
    # Catalogue
    "ICatalogClient",
    "CatalogPage",
    "EpisodeInfo",
    "Genre",
    "SeasonDetails",
    "SeasonSummary",
    "ShowDetails",
    "ShowSummary",
]
