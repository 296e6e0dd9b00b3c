"""
Relance des requetes catalogue sur limitation de debit (HTTP 429).

Seules les reponses 429 sont relancees, avec backoff exponentiel et jitter.
Toutes les autres erreurs HTTP remontent immediatement a l'appelant.

Usage:
    response = await request_with_retry(client, "GET", "/tv/popular", params={...})
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Le catalogue a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Secondes a attendre selon le header Retry-After (None si absent)
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _log_retry(retry_state: RetryCallState) -> None:
    """Trace chaque nouvelle tentative."""
    logger.warning(
        "Catalogue limite (429), nouvelle tentative",
        attempt=retry_state.attempt_number,
    )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur de relance sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives (secondes)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit le header Retry-After (secondes). Les dates HTTP sont ignorees."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP en relancant sur 429.

    Raises:
        RateLimitError: Si toujours 429 apres max_attempts tentatives
        httpx.HTTPStatusError: Pour toute autre reponse 4xx/5xx
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
