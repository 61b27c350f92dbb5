"""
FastAPI dependencies resolving services and the calling user.

Services are built once in ``create_app`` and kept on ``app.state``.
"""
from typing import Optional
from fastapi import Header, Request
from devconnector.services.auth_service import AuthService
from devconnector.services.github_service import GithubService
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.token_service import TokenVerifier


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_github_service(request: Request) -> GithubService:
    return request.app.state.github_service


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials


async def get_current_user_id(
    request: Request,
    x_auth_token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None)
) -> str:
    """
    Resolve the caller from ``x-auth-token`` (or ``Authorization: Bearer``).

    Raises Unauthenticated / InvalidCredential through the verifier.
    """
    token = x_auth_token or _bearer(authorization)
    return get_token_verifier(request).verify(token)
