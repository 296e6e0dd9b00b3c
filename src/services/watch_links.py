"""
Generation des liens de visionnage externes.

Un lien est construit a partir d'une URL de base et d'un gabarit contenant
les placeholders %dizi_adi% (slug du nom), %sezon% et %bolum%. Les reglages
propres a une serie (custom_*) remplacent les reglages globaux.
"""

from typing import Optional

from src.core.entities.tracking import UserShow, WatchLinkSettings
from src.utils.constants import (
    EPISODE_PLACEHOLDER,
    SEASON_PLACEHOLDER,
    SHOW_NAME_PLACEHOLDER,
)
from src.utils.helpers import slugify


def _render(
    base_url: Optional[str],
    pattern: Optional[str],
    slug: str,
    season: Optional[int],
    episode: Optional[int],
) -> Optional[str]:
    if not base_url or not pattern:
        return None
    if not slug or season is None or episode is None:
        return None

    path = (
        pattern.replace(SHOW_NAME_PLACEHOLDER, slug)
        .replace(SEASON_PLACEHOLDER, str(season))
        .replace(EPISODE_PLACEHOLDER, str(episode))
    )
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def generate_watch_url(
    base_url: Optional[str],
    pattern: Optional[str],
    show_name: Optional[str],
    season: Optional[int],
    episode: Optional[int],
) -> Optional[str]:
    """
    Construit l'URL de visionnage d'un episode.

    Returns:
        L'URL, ou None si la configuration est incomplete
        (URL de base, gabarit, nom, saison ou episode manquant)

    Example:
        >>> generate_watch_url("https://site.tv/dizi/", "%dizi_adi%/%sezon%-sezon/%bolum%-bolum",
        ...                    "Kuruluş Osman", 2, 5)
        'https://site.tv/dizi/kurulus-osman/2-sezon/5-bolum'
    """
    if not show_name:
        return None
    return _render(base_url, pattern, slugify(show_name), season, episode)


def generate_watch_url_with_overrides(
    settings: Optional[WatchLinkSettings],
    show_name: Optional[str],
    season: Optional[int],
    episode: Optional[int],
    user_show: Optional[UserShow] = None,
) -> Optional[str]:
    """
    Construit l'URL en tenant compte des surcharges de la serie.

    custom_base_url et custom_url_pattern remplacent les valeurs globales,
    custom_slug est utilise tel quel a la place du nom slugifie.
    """
    base_url = settings.base_url if settings else None
    pattern = settings.pattern if settings else None
    slug = slugify(show_name)

    if user_show is not None:
        base_url = user_show.custom_base_url or base_url
        pattern = user_show.custom_url_pattern or pattern
        if user_show.custom_slug:
            slug = user_show.custom_slug

    if not show_name and not (user_show and user_show.custom_slug):
        return None
    return _render(base_url, pattern, slug, season, episode)
