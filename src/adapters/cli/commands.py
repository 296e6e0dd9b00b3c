"""
Commandes CLI d'administration (users, shows, stats, watch-url, clear-cache, init-db).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, get_user_or_exit, suppress_loguru
from src.container import Container
from src.core.exceptions import CatalogConfigurationError, CatalogError
from src.services.watch_links import generate_watch_url
from src.utils.constants import STATUS_LABELS
from src.utils.helpers import format_duration


def init_db() -> None:
    """Cree les tables manquantes de la base de donnees."""
    container = Container()
    container.database.init()
    console.print(
        f"[green]Base de donnees initialisee:[/green] {container.config().database_url}"
    )


def users() -> None:
    """Liste les comptes utilisateurs."""
    container = Container()
    container.database.init()
    accounts = container.user_repository().list_all()

    table = Table(title=f"Utilisateurs ({len(accounts)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Email")
    table.add_column("Nom d'utilisateur", style="bold")
    table.add_column("Inscrit le")
    for user in accounts:
        created = user.created_at.strftime("%Y-%m-%d") if user.created_at else "-"
        table.add_row(str(user.id), user.email, user.username, created)
    console.print(table)


def shows(
    email: Annotated[str, typer.Argument(help="Email de l'utilisateur")],
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help="Filtre par statut (watching, completed, ...)"),
    ] = None,
) -> None:
    """Affiche la liste de suivi d'un utilisateur."""
    container = Container()
    container.database.init()
    user = get_user_or_exit(container, email)
    watchlist = container.watchlist_service()

    tracked = watchlist.list_shows(user, status=status)
    table = Table(title=f"Series de {user.username} ({len(tracked)})")
    table.add_column("TMDB ID", justify="right", style="cyan")
    table.add_column("Statut")
    table.add_column("Favori", justify="center")
    table.add_column("Note", justify="right")
    table.add_column("Episodes vus", justify="right")
    for show in tracked:
        watched = len(watchlist.watched_episodes(user, show.tmdb_show_id))
        table.add_row(
            str(show.tmdb_show_id),
            STATUS_LABELS[show.status.value],
            "★" if show.is_favorite else "",
            str(show.user_rating or "-"),
            str(watched),
        )
    console.print(table)


async def _stats_async(email: str, detailed: bool) -> None:
    container = Container()
    container.database.init()
    user = get_user_or_exit(container, email)
    stats_service = container.stats_service()

    summary = stats_service.status_summary(user)
    table = Table(title=f"Statistiques de {user.username}", show_header=False)
    table.add_column("Statut")
    table.add_column("Nombre", justify="right", style="bold")
    table.add_row("Total", str(summary.total))
    for key in ("watching", "completed", "dropped", "plan_to_watch"):
        table.add_row(STATUS_LABELS[key], str(getattr(summary, key)))
    console.print(table)

    if not detailed:
        return

    try:
        with suppress_loguru():
            with console.status("Calcul des statistiques detaillees..."):
                stats = await stats_service.detailed_stats(user)
    except CatalogConfigurationError:
        console.print("[red]Cle API TMDB non configuree (TVTRACK_TMDB_API_KEY)[/red]")
        raise typer.Exit(1)
    except CatalogError as e:
        console.print(f"[red]Erreur TMDB: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await container.tmdb_client().close()

    console.print(f"Episodes vus : [bold]{stats.total_episodes}[/bold]")
    console.print(f"Temps total : [bold]{format_duration(stats.total_minutes)}[/bold]")
    console.print(f"Taux de completion : [bold]{stats.completion_rate:.0f}%[/bold]")
    console.print(f"Genre favori : [bold]{stats.top_genre}[/bold]")
    if stats.rank:
        console.print(
            f"Rang : {stats.rank.icon} [bold]{stats.rank.title}[/bold] "
            f"({stats.rank.progress:.0f}% vers {stats.rank.next_rank})"
        )


def stats(
    email: Annotated[str, typer.Argument(help="Email de l'utilisateur")],
    detailed: Annotated[
        bool,
        typer.Option("--detailed", "-d", help="Interroge TMDB pour le temps passe et les genres"),
    ] = False,
) -> None:
    """Affiche les statistiques de visionnage d'un utilisateur."""
    import asyncio

    asyncio.run(_stats_async(email, detailed))


def watch_url(
    show_name: Annotated[str, typer.Argument(help="Nom de la serie")],
    season: Annotated[int, typer.Argument(help="Numero de saison")],
    episode: Annotated[int, typer.Argument(help="Numero d'episode")],
    base_url: Annotated[str, typer.Option("--base-url", "-b", help="URL de base du site")],
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Gabarit (%dizi_adi%, %sezon%, %bolum%)"),
    ] = None,
) -> None:
    """Genere un lien de visionnage a partir d'un gabarit."""
    pattern = pattern or Container().config().default_watch_pattern
    url = generate_watch_url(base_url, pattern, show_name, season, episode)
    if url is None:
        console.print("[red]Configuration incomplete[/red]")
        raise typer.Exit(1)
    typer.echo(url)


def clear_cache() -> None:
    """Vide le cache des reponses TMDB."""
    import asyncio

    cache = Container().api_cache()
    try:
        removed = asyncio.run(cache.clear())
    finally:
        cache.close()
    console.print(f"[green]{removed} entree(s) supprimee(s) du cache[/green]")
