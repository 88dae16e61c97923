import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from content_admin.auth import AuthManager
from content_admin.constants import MIN_PASSWORD_LENGTH, REGISTRATION_ROLE
from content_admin.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)
from content_admin.models.user import User
from content_admin.row_store import RowStore  # noqa: TC001
from content_admin.schemas.user import LoginResponse, RegisterResponse, TokenUser

logger = logging.getLogger(__name__)

user_table = User.__table__


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


async def authenticate_user(store: RowStore, auth_manager: AuthManager, email: str | None, password: str | None) -> LoginResponse:
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = await store.fetch_one(select(user_table).where(user_table.c.email == email))
    if user is None or not auth_manager.verify_password(password, user["password_hash"]):
        logger.warning(f"Login failed for email: {email}")
        raise InvalidCredentialsError()

    token_user = TokenUser(id=user["id"], email=user["email"], role=user["role"])
    token = auth_manager.create_access_token(token_user.model_dump())
    logger.info(f"Access token created for user: {email}")
    return LoginResponse(token=token, user=token_user)


async def register_user(
    store: RowStore,
    auth_manager: AuthManager,
    email: str | None,
    password: str | None,
    allow_register: bool,
) -> RegisterResponse:
    """
    Create an admin account.

    Only available while ``allow_initial_register`` is enabled; turn it off
    again once the first admin exists.

    Raises:
        AuthorizationError: If registration is disabled.
        ValidationError: Missing fields, malformed email or short password.
        ConflictError: If the email is already registered.
    """
    if not allow_register:
        raise AuthorizationError(
            "Registration is disabled. Set ALLOW_INITIAL_REGISTER=true to create the first admin account."
        )

    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required.")
    if "@" not in email:
        raise ValidationError("Invalid email address.", field="email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", field="password"
        )

    existing = await store.fetch_one(select(user_table.c.id).where(user_table.c.email == email))
    if existing is not None:
        raise ConflictError("Email already registered.", resource_type="User", field="email", value=email)

    try:
        result = await store.execute(
            insert(user_table).values(
                email=email,
                password_hash=auth_manager.hash_password(password),
                role=REGISTRATION_ROLE.value,
                created_at=datetime.now(timezone.utc),
            )
        )
    except IntegrityError as e:
        raise ConflictError("Email already registered.", resource_type="User", field="email", value=email) from e

    logger.info(f"User registered: {email} (role={REGISTRATION_ROLE.value})")
    return RegisterResponse(message="Admin account created.", userId=result.last_insert_id)
