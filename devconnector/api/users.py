"""
Account registration routes.
"""
from fastapi import APIRouter, Depends, status
from devconnector.api.dependencies import get_auth_service
from devconnector.api.schemas import RegisterRequest, TokenResponse
from devconnector.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a user.

    - **name**: required
    - **email**: valid, not yet registered
    - **password**: 6 or more characters

    Returns a token for the new account.
    """
    token = await auth_service.register(body.name, body.email, body.password)
    return TokenResponse(success=True, token=token, message="User registered")
