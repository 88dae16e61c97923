import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from content_admin.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    TokenExpiredError,
)
from content_admin.schemas.user import TokenUser

# Initialize logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer scheme; missing headers are reported by get_current_user as 401
bearer_scheme = HTTPBearer(auto_error=False)


class AuthManager:
    """Signs and verifies access tokens with the application's secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 720):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings) -> "AuthManager":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed token for ``data``.

        ``data`` must carry ``email``; it is copied into the ``sub`` claim.
        """
        to_encode = data.copy()
        if "sub" not in to_encode:
            if not to_encode.get("email"):
                raise ValueError("Missing 'email' claim in token data.")
            to_encode["sub"] = to_encode["email"]

        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token expired")
            raise TokenExpiredError() from None
        except JWTError as e:
            logger.warning(f"JWT decoding failed: {str(e)}")
            raise InvalidTokenError() from None

        if payload.get("sub") is None:
            logger.warning("Token is missing 'sub' claim")
            raise InvalidTokenError("Token does not contain 'sub' field.")
        return payload


def get_auth_manager(request: Request) -> AuthManager:
    return request.app.state.auth_manager


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_manager: AuthManager = Depends(get_auth_manager),
) -> TokenUser:
    """Resolve the caller from ``Authorization: Bearer <token>``."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    payload = auth_manager.decode_access_token(credentials.credentials)
    try:
        user = TokenUser(id=payload["id"], email=payload["sub"], role=payload["role"])
    except (KeyError, ValueError):
        logger.warning("Token payload is missing identity claims")
        raise InvalidTokenError() from None

    request.state.user = user
    return user


def require_role(*roles: str) -> Callable[..., TokenUser]:
    async def role_validator(current_user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if current_user.role not in roles:
            logger.warning(f"Permission denied for role '{current_user.role}'. Required: {roles}.")
            raise AuthorizationError(required_role=roles[0] if len(roles) == 1 else ", ".join(roles))
        return current_user

    return role_validator
