"""
Validation et nettoyage des saisies utilisateur.

Les notes sont stockees en texte brut : toute balise HTML est retiree avant
enregistrement. Les noms d'utilisateur suivent des regles strictes.
"""

import html
import re
from typing import Optional

from src.core.exceptions import ValidationError
from src.utils.constants import (
    NOTE_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)

_USERNAME_CHARS = re.compile(r"^[a-zA-Z0-9_-]+$")
_STARTS_ALNUM = re.compile(r"^[a-zA-Z0-9]")
_TAG = re.compile(r"<[^>]*>")


def validate_username(username: Optional[str]) -> str:
    """
    Valide un nom d'utilisateur et retourne sa version nettoyee.

    Regles : 3 a 20 caracteres, lettres/chiffres/_/- uniquement,
    premier caractere alphanumerique.

    Raises:
        ValidationError: Si une regle n'est pas respectee
    """
    if not username:
        raise ValidationError("Kullanıcı adı gereklidir")

    trimmed = username.strip()
    if len(trimmed) < USERNAME_MIN_LENGTH:
        raise ValidationError(
            f"Kullanıcı adı en az {USERNAME_MIN_LENGTH} karakter olmalıdır"
        )
    if len(trimmed) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Kullanıcı adı en fazla {USERNAME_MAX_LENGTH} karakter olabilir"
        )
    if not _USERNAME_CHARS.match(trimmed):
        raise ValidationError(
            "Kullanıcı adı sadece harf, rakam, alt çizgi (_) ve tire (-) içerebilir"
        )
    if not _STARTS_ALNUM.match(trimmed):
        raise ValidationError("Kullanıcı adı harf veya rakam ile başlamalıdır")
    return trimmed


def sanitize_note(note: Optional[str]) -> str:
    """Retire toutes les balises HTML d'une note et decode les entites."""
    if not note:
        return ""
    return html.unescape(_TAG.sub("", note)).strip()


def validate_note(note: Optional[str], max_length: int = NOTE_MAX_LENGTH) -> None:
    """Verifie la longueur d'une note."""
    if note and len(note) > max_length:
        raise ValidationError(f"Not en fazla {max_length} karakter olabilir")
