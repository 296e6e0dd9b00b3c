"""
Fonctions utilitaires partagees dans le projet TVTrack.

Ce module centralise les fonctions reutilisees a travers le codebase :
- slugify : conversion d'un titre en slug d'URL (gere les caracteres turcs)
- image_url / backdrop_url : URLs completes des images TMDB
- format_duration : affichage lisible d'une duree en minutes
- parse_date : lecture tolerante des dates TMDB
"""

import re
from datetime import date
from typing import Optional

from src.utils.constants import (
    PLACEHOLDER_POSTER_URL,
    TMDB_IMAGE_BASE_URL,
    TURKISH_CHAR_MAP,
)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_MULTI_HYPHEN = re.compile(r"-+")


def slugify(text: Optional[str]) -> str:
    """
    Convertit un texte en slug utilisable dans une URL.

    Passe en minuscules, translittere les caracteres turcs, retire tout
    ce qui n'est ni alphanumerique ni espace ni tiret, puis remplace les
    espaces par des tirets.

    Example:
        >>> slugify("Kuruluş Osman")
        'kurulus-osman'
    """
    if not text:
        return ""

    slug = text.lower()
    for turkish_char, latin_char in TURKISH_CHAR_MAP.items():
        slug = slug.replace(turkish_char, latin_char)

    # "İ".lower() donne "i" + point combinant, retire par le filtre ci-dessous
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    return slug.strip("-")


def image_url(path: Optional[str], size: str = "w500") -> str:
    """URL complete d'un poster TMDB, ou image de remplacement si absent."""
    if not path:
        return PLACEHOLDER_POSTER_URL
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def backdrop_url(path: Optional[str], size: str = "w1280") -> Optional[str]:
    """URL complete d'une image de fond TMDB, ou None si absente."""
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def format_duration(total_minutes: int) -> str:
    """
    Formate une duree en minutes (jours + heures, ou heures + minutes).

    Example:
        >>> format_duration(1500)
        '1 Gün 1 Saat'
        >>> format_duration(125)
        '2 Sa 5 Dk'
    """
    total_minutes = int(total_minutes)
    days = total_minutes // (24 * 60)
    hours = (total_minutes % (24 * 60)) // 60
    minutes = total_minutes % 60

    if days > 0:
        return f"{days} Gün {hours} Saat"
    if hours > 0:
        return f"{hours} Sa {minutes} Dk"
    return f"{minutes} Dk"


def parse_date(value: Optional[str]) -> Optional[date]:
    """Lit une date TMDB (YYYY-MM-DD). Chaine vide ou invalide -> None."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
