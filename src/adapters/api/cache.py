"""
Cache persistant des reponses du catalogue, avec TTL par type de requete.

Le cache utilise diskcache pour la persistence sur disque : les reponses
survivent aux redemarrages du serveur et sont partagees entre les workers.

TTL par defaut:
- Listes et recherches (LIST_TTL): 5 minutes, aligne sur le Cache-Control du proxy
- Details d'une serie/saison (DETAILS_TTL): 1 heure
- Genres (GENRES_TTL): 24 heures, ils ne changent quasiment jamais
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les appels au catalogue.

    Les operations diskcache (bloquantes) sont executees dans l'executor
    par defaut de la boucle asyncio.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_list("tmdb:discover:popular:1", page)
        page = await cache.get("tmdb:discover:popular:1")
    """

    LIST_TTL = 5 * 60  # 5 minutes
    DETAILS_TTL = 60 * 60  # 1 heure
    GENRES_TTL = 24 * 60 * 60  # 24 heures

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur, None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur pour ttl secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_list(self, key: str, value: Any) -> None:
        """Stocke une page de liste ou de recherche (TTL 5 min)."""
        await self.set(key, value, self.LIST_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke les details d'une serie ou d'une saison (TTL 1 h)."""
        await self.set(key, value, self.DETAILS_TTL)

    async def set_genres(self, key: str, value: Any) -> None:
        """Stocke la liste des genres (TTL 24 h)."""
        await self.set(key, value, self.GENRES_TTL)

    async def clear(self) -> int:
        """Supprime toutes les entrees. Retourne le nombre d'entrees supprimees."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme le cache (a appeler a l'arret)."""
        self._cache.close()
