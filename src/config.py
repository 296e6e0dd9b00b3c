"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe TVTRACK_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle - le catalogue et le proxy répondent en erreur si elle manque.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

DEFAULT_WATCH_PATTERN = "%dizi_adi%/%sezon%-sezon/%bolum%-bolum"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe TVTRACK_.
    Exemple : TVTRACK_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="TVTRACK_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///data/tvtrack.db")

    # Catalogue TMDB (clé OPTIONNELLE, gardée côté serveur)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="tr-TR")
    cache_dir: Path = Field(default=Path(".cache/api"))
    proxy_cache_control: str = Field(default="s-maxage=300, stale-while-revalidate")

    # Authentification
    token_ttl_hours: int = Field(default=24 * 30, ge=1)

    # Liens de visionnage
    default_watch_pattern: str = Field(default=DEFAULT_WATCH_PATTERN)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/tvtrack.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
