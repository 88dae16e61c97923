import logging

from fastapi import APIRouter, Depends, Request, status

from content_admin.auth import AuthManager, get_auth_manager
from content_admin.database import get_row_store
from content_admin.row_store import RowStore
from content_admin.schemas.user import Credentials, LoginResponse, RegisterResponse
from content_admin.services import auth_service

# Initialize logger
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Credentials,
    store: RowStore = Depends(get_row_store),
    auth_manager: AuthManager = Depends(get_auth_manager),
):
    """
    Exchange email and password for a bearer token valid for 12 hours.
    """
    return await auth_service.authenticate_user(store, auth_manager, credentials.email, credentials.password)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    credentials: Credentials,
    request: Request,
    store: RowStore = Depends(get_row_store),
    auth_manager: AuthManager = Depends(get_auth_manager),
):
    """
    Create an admin account while ALLOW_INITIAL_REGISTER is enabled.
    """
    app_settings = request.app.state.settings
    return await auth_service.register_user(
        store,
        auth_manager,
        credentials.email,
        credentials.password,
        allow_register=app_settings.allow_initial_register,
    )
