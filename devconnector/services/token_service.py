"""
Signed bearer tokens carrying a user identifier.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional
from bson import ObjectId
from jose import jwt, JWTError, ExpiredSignatureError
from config import Settings
from devconnector.exceptions import InvalidCredential, Unauthenticated
from devconnector.models.common import parse_object_id

logger = logging.getLogger(__name__)


class TokenVerifier:
    """Issues and verifies HS256 tokens with the claims ``{"user": {"id": ...}}``."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 36000):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        """
        Build a verifier from configuration.

        Without ``jwt_secret`` a development instance signs with a random
        per-process secret; any other environment refuses to start.
        """
        secret = settings.jwt_secret
        if not secret:
            if settings.app_env != "development":
                raise RuntimeError(f"JWT_SECRET must be set when APP_ENV is '{settings.app_env}'")
            secret = secrets.token_urlsafe(32)
            logger.warning("JWT_SECRET not set; using a random secret, tokens will not survive a restart")
        return cls(
            secret=secret,
            algorithm=settings.jwt_algorithm,
            expires_in=settings.jwt_expires_in
        )

    def issue(self, user_id: str) -> str:
        """Sign a token for ``user_id`` valid for ``expires_in`` seconds."""
        now = datetime.utcnow()
        claims = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> str:
        """
        Resolve a token to the user identifier it was issued for.

        Raises:
            Unauthenticated: no token was supplied.
            InvalidCredential: the token is malformed, expired, or badly signed.
        """
        if not token or not token.strip():
            raise Unauthenticated("No token, authorization denied")

        try:
            claims = jwt.decode(token.strip(), self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidCredential("Token has expired")
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidCredential("Token is not valid")

        user = claims.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise InvalidCredential("Token is not valid")
        return user_id


def actor_object_id(actor: str) -> ObjectId:
    """ObjectId of a verified caller; tokens naming anything else are rejected."""
    user_id = parse_object_id(actor)
    if user_id is None:
        raise InvalidCredential("Token is not valid")
    return user_id
