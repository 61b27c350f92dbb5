"""
Authentication routes.
"""
from fastapi import APIRouter, Depends
from devconnector.api.dependencies import get_auth_service, get_current_user_id
from devconnector.api.schemas import ItemResponse, LoginRequest, TokenResponse
from devconnector.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("", response_model=ItemResponse)
async def get_authenticated_user(
    actor: str = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Return the caller's account without its password hash."""
    user = await auth_service.get_current_user(actor)
    return ItemResponse(success=True, data=user.public())


@router.post("", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange email and password for a token."""
    token = await auth_service.authenticate(body.email, body.password)
    return TokenResponse(success=True, token=token, message="Authenticated")
