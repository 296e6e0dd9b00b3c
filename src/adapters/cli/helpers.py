"""
Utilitaires partages pour les commandes CLI de TVTrack.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- get_user_or_exit : recherche d'un utilisateur par email
"""

from contextlib import contextmanager

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from src.container import Container
from src.core.entities.user import User

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def get_user_or_exit(container: Container, email: str) -> User:
    """Retourne l'utilisateur d'un email, ou quitte avec le code 1."""
    user = container.user_repository().get_by_email(email.strip().lower())
    if user is None:
        console.print(f"[red]Utilisateur introuvable: {email}[/red]")
        raise typer.Exit(1)
    return user
