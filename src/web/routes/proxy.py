"""
Proxy du catalogue TMDB : /api/tmdb?endpoint=/tv/popular&page=1

La clé API reste côté serveur. Tous les paramètres de requête autres que
"endpoint" sont transmis tels quels, y compris les paramètres répétés
(les valeurs vides sont ignorées).
Les réponses d'erreur suivent toujours l'enveloppe {"error": ...}.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ...core.exceptions import CatalogConfigurationError, CatalogError

router = APIRouter()


@router.api_route("/api/tmdb", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def tmdb_proxy(request: Request) -> JSONResponse:
    """Relaie une requête GET vers TMDB avec la clé et la langue du serveur."""
    if request.method != "GET":
        return JSONResponse({"error": "Method not allowed"}, status_code=405)

    container = request.app.state.container
    client = container.tmdb_client()
    if not client.configured:
        logger.error("TMDB API key is not set")
        return JSONResponse({"error": "Server configuration error"}, status_code=500)

    endpoint = request.query_params.get("endpoint")
    params: dict[str, list[str]] = {}
    for key, value in request.query_params.multi_items():
        if key != "endpoint":
            params.setdefault(key, []).append(value)
    if not endpoint:
        return JSONResponse({"error": "Missing endpoint parameter"}, status_code=400)

    try:
        data = await client.fetch(endpoint, params)
    except CatalogConfigurationError:
        return JSONResponse({"error": "Server configuration error"}, status_code=500)
    except CatalogError as e:
        if e.status_code is None:
            return JSONResponse(
                {"error": "Internal server error", "message": str(e)}, status_code=500
            )
        return JSONResponse(
            {"error": "TMDB API request failed", "status": e.status_code},
            status_code=e.status_code,
        )
    except Exception as e:
        logger.exception(f"Proxy error: {e}")
        return JSONResponse(
            {"error": "Internal server error", "message": str(e)}, status_code=500
        )

    return JSONResponse(
        data,
        headers={"Cache-Control": container.config().proxy_cache_control},
    )
