"""
Application FastAPI de TVTrack.

Initialise l'application web avec le Container DI, traduit les exceptions
du domaine en réponses JSON et monte les routes.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from .. import __version__
from ..container import Container
from ..core.exceptions import (
    AuthenticationError,
    CatalogConfigurationError,
    CatalogError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .routes.auth import router as auth_router
from .routes.calendar import router as calendar_router
from .routes.catalog import router as catalog_router
from .routes.proxy import router as proxy_router
from .routes.settings import router as settings_router
from .routes.shows import router as shows_router
from .routes.stats import router as stats_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et libère le client HTTP à l'arrêt."""
    container = getattr(app.state, "container", None)
    if container is None:
        container = Container()
    container.database.init()
    app.state.container = container
    yield
    await container.tmdb_client().close()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Associe chaque exception du domaine à un code HTTP."""

    @app.exception_handler(HTTPException)
    async def _http(request: Request, exc: HTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if not errors:
            return _error(422, "Invalid request")
        field = ".".join(str(part) for part in errors[0]["loc"][1:])
        return _error(422, f"Invalid parameter {field}: {errors[0]['msg']}")

    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(AuthenticationError)
    async def _authentication(request: Request, exc: AuthenticationError) -> JSONResponse:
        return _error(401, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(ConflictError)
    async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return _error(409, str(exc))

    @app.exception_handler(CatalogConfigurationError)
    async def _catalog_config(request: Request, exc: CatalogConfigurationError) -> JSONResponse:
        return _error(500, "Server configuration error")

    @app.exception_handler(CatalogError)
    async def _catalog(request: Request, exc: CatalogError) -> JSONResponse:
        status = exc.status_code or 502
        logger.warning(f"{request.method} {request.url.path}: TMDB error {status}")
        return JSONResponse(
            {"error": "TMDB API request failed", "status": status},
            status_code=status,
        )


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container pré-configuré (tests), sinon créé au démarrage
    """
    app = FastAPI(title="TVTrack", version=__version__, lifespan=lifespan)
    if container is not None:
        app.state.container = container

    register_exception_handlers(app)

    app.include_router(proxy_router)
    app.include_router(auth_router)
    app.include_router(shows_router)
    app.include_router(settings_router)
    app.include_router(stats_router)
    app.include_router(calendar_router)
    app.include_router(catalog_router)
    return app


app = create_app()
