"""
Fabrique de cles de requete pour le cache du catalogue.

Chaque requete typee du catalogue est identifiee par un tuple hierarchique
(ex: ("shows", "season", 1399, 2)). Le prefixe permet d'invalider une famille
entiere de requetes ; cache_key() rend la cle texte utilisee par APICache.
"""

from typing import Any

QueryKey = tuple[Any, ...]


class ShowKeys:
    """Cles des requetes portant sur une serie."""

    all: QueryKey = ("shows",)

    @staticmethod
    def details(show_id: int) -> QueryKey:
        return ("shows", "details", show_id)

    @staticmethod
    def season(show_id: int, season_number: int) -> QueryKey:
        return ("shows", "season", show_id, season_number)

    @staticmethod
    def similar(show_id: int) -> QueryKey:
        return ("shows", "similar", show_id)

    @staticmethod
    def recommended(show_id: int) -> QueryKey:
        return ("shows", "recommended", show_id)

    @staticmethod
    def images(show_id: int) -> QueryKey:
        return ("shows", "images", show_id)


class DiscoverKeys:
    """Cles des listes de decouverte (paginees)."""

    @staticmethod
    def popular(page: int) -> QueryKey:
        return ("discover", "popular", page)

    @staticmethod
    def trending(time_window: str, page: int) -> QueryKey:
        return ("discover", "trending", time_window, page)

    @staticmethod
    def airing_today(page: int) -> QueryKey:
        return ("discover", "airingToday", page)

    @staticmethod
    def on_the_air(page: int) -> QueryKey:
        return ("discover", "onTheAir", page)

    @staticmethod
    def by_genre(genre_id: int, page: int) -> QueryKey:
        return ("discover", "genre", genre_id, page)


class QueryKeys:
    """Point d'entree unique : QueryKeys.shows.details(1399), QueryKeys.search("x", 1)..."""

    shows = ShowKeys
    discover = DiscoverKeys
    genres: QueryKey = ("genres",)

    @staticmethod
    def search(query: str, page: int) -> QueryKey:
        return ("search", query, page)


def cache_key(key: QueryKey, source: str = "tmdb") -> str:
    """Rend une cle texte : ("shows", "details", 1399) -> "tmdb:shows:details:1399"."""
    return ":".join([source, *(str(part) for part in key)])


def starts_with(key: QueryKey, prefix: QueryKey) -> bool:
    """Vrai si la cle appartient a la famille designee par le prefixe."""
    return key[: len(prefix)] == prefix
