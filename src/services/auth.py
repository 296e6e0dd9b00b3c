"""
Service d'authentification : inscription, connexion par jeton, profil.

Les mots de passe sont stockes sous forme PBKDF2-SHA256 salee
("pbkdf2_sha256$iterations$salt$hash"). Les sessions sont des jetons
opaques aleatoires avec date d'expiration.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from loguru import logger

from src.core.entities.user import User
from src.core.exceptions import AuthenticationError, ConflictError, ValidationError
from src.core.ports.repositories import IUserRepository
from src.utils.constants import DEFAULT_AVATAR_STYLE, PASSWORD_MIN_LENGTH
from src.utils.sanitize import validate_username

PBKDF2_ITERATIONS = 260_000
_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS
    )
    return f"{_ALGORITHM}${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    if algorithm != _ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), expected)


def _normalize_email(email: Optional[str]) -> str:
    email = (email or "").strip().lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("Geçerli bir e-posta adresi girin")
    return email


class AuthService:
    """
    Gestion des comptes et des sessions.

    Example:
        auth = AuthService(user_repo, token_ttl_hours=720)
        user = auth.register("a@b.c", "secret", "alice")
        token = auth.sign_in("a@b.c", "secret")
        assert auth.current_user(token).id == user.id
    """

    def __init__(self, user_repo: IUserRepository, token_ttl_hours: int = 720) -> None:
        self._user_repo = user_repo
        self._token_ttl = timedelta(hours=token_ttl_hours)

    def register(self, email: str, password: str, username: str) -> User:
        """
        Cree un compte.

        Raises:
            ValidationError: Email, mot de passe ou nom d'utilisateur invalide
            ConflictError: Email ou nom d'utilisateur deja utilise
        """
        email = _normalize_email(email)
        username = validate_username(username)
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Şifre en az {PASSWORD_MIN_LENGTH} karakter olmalıdır"
            )
        if self._user_repo.get_by_email(email) is not None:
            raise ConflictError("Bu e-posta adresi zaten kayıtlı")
        if self._user_repo.get_by_username(username) is not None:
            raise ConflictError("Bu kullanıcı adı zaten alınmış")

        user = self._user_repo.create(
            User(email=email, username=username, avatar_seed=username),
            hash_password(password),
        )
        logger.info(f"Nouvel utilisateur inscrit: {user.username} (id={user.id})")
        return user

    def sign_in(self, email: str, password: str) -> str:
        """
        Verifie les identifiants et emet un jeton.

        Raises:
            AuthenticationError: Identifiants invalides
        """
        user = self._user_repo.get_by_email((email or "").strip().lower())
        stored = self._user_repo.get_password_hash(user.id) if user else None
        if user is None or not stored or not verify_password(password or "", stored):
            logger.warning(f"Echec de connexion pour {email}")
            raise AuthenticationError("Invalid login credentials")

        token = secrets.token_urlsafe(32)
        self._user_repo.add_token(
            user.id, token, datetime.now(timezone.utc) + self._token_ttl
        )
        logger.info(f"Connexion de {user.username}")
        return token

    def sign_out(self, token: str) -> bool:
        return self._user_repo.delete_token(token)

    def current_user(self, token: Optional[str]) -> User:
        """
        Retourne l'utilisateur d'un jeton.

        Raises:
            AuthenticationError: Jeton absent, inconnu ou expire
        """
        if not token:
            raise AuthenticationError("Missing authentication token")
        user = self._user_repo.get_user_by_token(token, datetime.now(timezone.utc))
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user

    def update_profile(
        self,
        user: User,
        username: Optional[str] = None,
        avatar_style: Optional[str] = None,
        avatar_seed: Optional[str] = None,
    ) -> User:
        if username is not None:
            username = validate_username(username)
            other = self._user_repo.get_by_username(username)
            if other is not None and other.id != user.id:
                raise ConflictError("Bu kullanıcı adı zaten alınmış")
            user.username = username
        if avatar_style is not None:
            user.avatar_style = avatar_style.strip() or DEFAULT_AVATAR_STYLE
        if avatar_seed is not None:
            user.avatar_seed = avatar_seed.strip() or None
        return self._user_repo.save(user)
