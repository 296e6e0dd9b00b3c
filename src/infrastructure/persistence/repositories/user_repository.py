"""
Implementation SQLModel du repository User.

Gere aussi les jetons d'authentification, qui n'ont pas d'existence
propre dans le domaine.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.core.entities.user import User
from src.core.exceptions import ConflictError
from src.core.ports.repositories import IUserRepository
from src.infrastructure.persistence.models import AuthTokenModel, UserModel, as_utc, utcnow


class SQLModelUserRepository(IUserRepository):
    """
    Repository SQLModel pour les utilisateurs.

    Implemente IUserRepository avec conversion entre l'entite User (domaine)
    et UserModel (persistance). Le hash du mot de passe ne quitte jamais
    ce repository sauf via get_password_hash().
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            username=model.username,
            avatar_style=model.avatar_style,
            avatar_seed=model.avatar_seed,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        model = self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(UserModel).where(UserModel.email == email.lower())
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> Optional[User]:
        statement = select(UserModel).where(UserModel.username == username)
        model = self._session.exec(statement).first()
        return self._to_entity(model) if model else None

    def get_password_hash(self, user_id: int) -> Optional[str]:
        model = self._session.get(UserModel, user_id)
        return model.password_hash if model else None

    def create(self, user: User, password_hash: str) -> User:
        """
        Cree un utilisateur.

        Raises:
            ConflictError: Si l'email ou le nom d'utilisateur existe deja
        """
        model = UserModel(
            email=user.email.lower(),
            username=user.username,
            password_hash=password_hash,
            avatar_style=user.avatar_style,
            avatar_seed=user.avatar_seed,
        )
        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise ConflictError("Email or username already registered") from e
        self._session.refresh(model)
        return self._to_entity(model)

    def save(self, user: User) -> User:
        """Met a jour username et avatar d'un utilisateur existant."""
        model = self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} does not exist")
        model.username = user.username
        model.avatar_style = user.avatar_style
        model.avatar_seed = user.avatar_seed
        model.updated_at = utcnow()
        self._session.add(model)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise ConflictError("Username already taken") from e
        self._session.refresh(model)
        return self._to_entity(model)

    def list_all(self) -> list[User]:
        statement = select(UserModel).order_by(UserModel.id)
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def add_token(self, user_id: int, token: str, expires_at: datetime) -> None:
        """Enregistre un jeton et purge au passage les jetons expires."""
        self.purge_expired_tokens(utcnow())
        self._session.add(
            AuthTokenModel(token=token, user_id=user_id, expires_at=expires_at)
        )
        self._session.commit()

    def get_user_by_token(self, token: str, now: datetime) -> Optional[User]:
        token_model = self._session.get(AuthTokenModel, token)
        if token_model is None:
            return None
        if as_utc(token_model.expires_at) <= now:
            self._session.delete(token_model)
            self._session.commit()
            return None
        return self.get_by_id(token_model.user_id)

    def purge_expired_tokens(self, now: datetime) -> int:
        """Supprime les jetons expires. Retourne le nombre de lignes supprimees."""
        result = self._session.execute(
            delete(AuthTokenModel)
            .where(AuthTokenModel.expires_at <= now)
            .execution_options(synchronize_session="fetch")
        )
        self._session.commit()
        return result.rowcount or 0

    def delete_token(self, token: str) -> bool:
        token_model = self._session.get(AuthTokenModel, token)
        if token_model is None:
            return False
        self._session.delete(token_model)
        self._session.commit()
        return True
