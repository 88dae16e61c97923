"""
Tests for token handling, password hashing and the login/register service
"""

import time
from datetime import timedelta

import pytest
from jose import jwt
from utils.mock_utils import create_test_user

from content_admin.auth import AuthManager
from content_admin.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    ValidationError,
)
from content_admin.services import auth_service


@pytest.fixture
def manager():
    return AuthManager(secret_key="unit-test-secret")


class TestAuthManager:
    def test_password_hash_roundtrip(self, manager):
        hashed = manager.hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert manager.verify_password("s3cret-pass", hashed)
        assert not manager.verify_password("wrong", hashed)

    def test_token_claims(self, manager):
        token = manager.create_access_token({"id": 1, "email": "a@b.c", "role": "admin"})

        payload = manager.decode_access_token(token)

        assert payload["id"] == 1
        assert payload["sub"] == "a@b.c"
        assert payload["role"] == "admin"
        assert "exp" in payload

    def test_default_expiry_is_twelve_hours(self, manager):
        token = manager.create_access_token({"id": 1, "email": "a@b.c", "role": "user"})
        claims = jwt.get_unverified_claims(token)

        remaining = claims["exp"] - time.time()
        assert 12 * 3600 - 60 < remaining <= 12 * 3600

    def test_expired_token(self, manager):
        token = manager.create_access_token(
            {"id": 1, "email": "a@b.c", "role": "user"}, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(TokenExpiredError):
            manager.decode_access_token(token)

    def test_wrong_secret(self, manager):
        token = AuthManager(secret_key="other").create_access_token({"id": 1, "email": "a@b.c", "role": "user"})

        with pytest.raises(InvalidTokenError):
            manager.decode_access_token(token)

    def test_garbage_token(self, manager):
        with pytest.raises(InvalidTokenError):
            manager.decode_access_token("not-a-jwt")

    def test_requires_email(self, manager):
        with pytest.raises(ValueError):
            manager.create_access_token({"id": 1, "role": "user"})


class TestLogin:
    async def test_login_success(self, store, manager):
        user = await create_test_user(store, manager, "editor@example.com", "password123", role="admin")

        response = await auth_service.authenticate_user(store, manager, "  Editor@Example.com ", "password123")

        assert response.user.id == user["id"]
        assert response.user.email == "editor@example.com"
        assert response.user.role == "admin"
        assert manager.decode_access_token(response.token)["sub"] == "editor@example.com"

    async def test_wrong_password(self, store, manager):
        await create_test_user(store, manager, "editor@example.com", "password123")

        with pytest.raises(InvalidCredentialsError):
            await auth_service.authenticate_user(store, manager, "editor@example.com", "nope")

    async def test_unknown_email(self, store, manager):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.authenticate_user(store, manager, "ghost@example.com", "password123")

    @pytest.mark.parametrize("email, password", [(None, "x"), ("a@b.c", None), ("", ""), ("   ", "x")])
    async def test_missing_fields(self, store, manager, email, password):
        with pytest.raises(ValidationError):
            await auth_service.authenticate_user(store, manager, email, password)


class TestRegister:
    async def test_disabled(self, store, manager):
        with pytest.raises(AuthorizationError, match="ALLOW_INITIAL_REGISTER"):
            await auth_service.register_user(store, manager, "new@example.com", "password123", allow_register=False)

    async def test_creates_admin(self, store, manager):
        response = await auth_service.register_user(
            store, manager, " New@Example.com ", "password123", allow_register=True
        )

        assert response.success is True
        login = await auth_service.authenticate_user(store, manager, "new@example.com", "password123")
        assert login.user.id == response.userId
        assert login.user.role == "admin"

    @pytest.mark.parametrize(
        "email, password",
        [(None, "password123"), ("new@example.com", None), ("not-an-email", "password123"), ("new@example.com", "short")],
    )
    async def test_invalid_input(self, store, manager, email, password):
        with pytest.raises(ValidationError):
            await auth_service.register_user(store, manager, email, password, allow_register=True)

    async def test_duplicate_email(self, store, manager):
        await create_test_user(store, manager, "taken@example.com", "password123")

        with pytest.raises(ConflictError):
            await auth_service.register_user(store, manager, "TAKEN@example.com", "password123", allow_register=True)
