"""
Point d'entrée CLI de TVTrack.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    clear_cache,
    init_db,
    shows,
    stats,
    users,
    watch_url,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="tvtrack",
    help="Suivi personnel de series TV",
)
container = Container()


@app.callback()
def main_callback() -> None:
    """TVTrack - Suivi de series TV (API web + outils d'administration)."""


app.command(name="init-db")(init_db)
app.command()(users)
app.command()(shows)
app.command()(stats)
app.command(name="watch-url")(watch_url)
app.command(name="clear-cache")(clear_cache)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration TVTrack")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Langue TMDB : {config.tmdb_language}")
    typer.echo(f"Cache : {config.cache_dir}")
    typer.echo(f"Gabarit de lien par défaut : {config.default_watch_pattern}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"TVTrack v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web TVTrack."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("src.web.app:app", host=host, port=port, reload=reload, log_config=None)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de TVTrack", version=__version__)

    app()


if __name__ == "__main__":
    main()
