"""
Tests du service d'authentification.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.exceptions import AuthenticationError, ConflictError, ValidationError
from src.services.auth import AuthService, hash_password, verify_password


@pytest.fixture
def auth(user_repo) -> AuthService:
    return AuthService(user_repo, token_ttl_hours=1)


class TestPasswordHashing:
    def test_hash_and_verify(self) -> None:
        stored = hash_password("gizli123")
        assert stored.startswith("pbkdf2_sha256$")
        assert verify_password("gizli123", stored)
        assert not verify_password("yanlis", stored)

    def test_salt_changes_hash(self) -> None:
        assert hash_password("gizli123") != hash_password("gizli123")

    def test_malformed_hash(self) -> None:
        assert not verify_password("x", "not-a-hash")
        assert not verify_password("x", "md5$1$salt$abc")


class TestRegister:
    def test_register(self, auth) -> None:
        user = auth.register(" Mehmet@Example.com ", "gizli123", " mehmet ")

        assert user.id is not None
        assert user.email == "mehmet@example.com"
        assert user.username == "mehmet"
        assert user.avatar_seed == "mehmet"

    @pytest.mark.parametrize(
        "email,password,username",
        [
            ("not-an-email", "gizli123", "mehmet"),
            ("m@example.com", "12345", "mehmet"),
            ("m@example.com", "gizli123", "ab"),
            ("m@example.com", "gizli123", "_mehmet"),
        ],
    )
    def test_register_validation(self, auth, email, password, username) -> None:
        with pytest.raises(ValidationError):
            auth.register(email, password, username)

    def test_duplicate_email(self, auth, user) -> None:
        with pytest.raises(ConflictError):
            auth.register("AYSE@example.com", "gizli123", "baska")

    def test_duplicate_username(self, auth, user) -> None:
        with pytest.raises(ConflictError):
            auth.register("baska@example.com", "gizli123", "ayse")


class TestSessions:
    def test_sign_in_and_current_user(self, auth) -> None:
        created = auth.register("m@example.com", "gizli123", "mehmet")

        token = auth.sign_in("M@example.com", "gizli123")

        assert auth.current_user(token).id == created.id

    def test_wrong_password(self, auth) -> None:
        auth.register("m@example.com", "gizli123", "mehmet")
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            auth.sign_in("m@example.com", "yanlis")

    def test_unknown_email(self, auth) -> None:
        with pytest.raises(AuthenticationError):
            auth.sign_in("nobody@example.com", "gizli123")

    def test_sign_out_revokes_token(self, auth) -> None:
        auth.register("m@example.com", "gizli123", "mehmet")
        token = auth.sign_in("m@example.com", "gizli123")

        assert auth.sign_out(token) is True
        with pytest.raises(AuthenticationError):
            auth.current_user(token)

    def test_missing_token(self, auth) -> None:
        with pytest.raises(AuthenticationError):
            auth.current_user(None)

    def test_expired_token(self, auth, user, user_repo) -> None:
        expired = datetime.now(timezone.utc) - timedelta(minutes=1)
        user_repo.add_token(user.id, "old-token", expired)
        with pytest.raises(AuthenticationError):
            auth.current_user("old-token")


class TestProfile:
    def test_update_profile(self, auth, user) -> None:
        updated = auth.update_profile(user, username="ayse_k", avatar_style="bottts")

        assert updated.username == "ayse_k"
        assert updated.avatar_style == "bottts"
        assert "bottts" in updated.avatar_url

    def test_username_taken(self, auth, user) -> None:
        auth.register("m@example.com", "gizli123", "mehmet")
        with pytest.raises(ConflictError):
            auth.update_profile(user, username="mehmet")

    def test_keeping_own_username(self, auth, user) -> None:
        assert auth.update_profile(user, username="ayse").username == "ayse"
