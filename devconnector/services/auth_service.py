"""
Service for account registration and authentication.
"""
import hashlib
import logging
from typing import Any, Dict, List
from passlib.context import CryptContext
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from devconnector.exceptions import (
    AlreadyExists,
    InvalidCredential,
    NotFound,
    ValidationError,
)
from devconnector.models.user import User
from devconnector.repositories.user_repository import UserRepository
from devconnector.services.token_service import TokenVerifier, actor_object_id

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def gravatar_url(email: str) -> str:
    """Gravatar avatar URL for ``email`` (200px, PG rated, mystery-man default)."""
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"


def _is_valid_email(email: str) -> bool:
    try:
        _email_adapter.validate_python(email)
        return True
    except PydanticValidationError:
        return False


class AuthService:
    """Service for account business logic."""

    def __init__(
        self,
        users: UserRepository,
        token_verifier: TokenVerifier,
        bcrypt_rounds: int = 10
    ):
        self.users = users
        self.token_verifier = token_verifier
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=bcrypt_rounds
        )

    async def register(self, name: str, email: str, password: str) -> str:
        """
        Register a new account and return a token for it.

        Args:
            name: Display name
            email: Email address, unique across accounts
            password: Plain text password, at least 6 characters

        Returns:
            Signed token bound to the new user id

        Raises:
            ValidationError: a field fails its format rule
            AlreadyExists: the email is already registered
        """
        errors: List[Dict[str, Any]] = []
        if not name or not name.strip():
            errors.append({"field": "name", "message": "Name is required"})
        if not email or not _is_valid_email(email.strip()):
            errors.append({"field": "email", "message": "Please include a valid email"})
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors.append({
                "field": "password",
                "message": f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            })
        if errors:
            raise ValidationError.from_fields(errors)

        email = normalize_email(email)
        if await self.users.find_by_email(email):
            raise AlreadyExists("User already exists")

        user = User(
            name=name.strip(),
            email=email,
            avatar=gravatar_url(email),
            password=self.pwd_context.hash(password)
        )
        await self.users.create(user)
        logger.info(f"Registered user {user.id}")

        return self.token_verifier.issue(str(user.id))

    async def authenticate(self, email: str, password: str) -> str:
        """
        Check credentials and return a fresh token.

        Raises:
            ValidationError: email malformed or password missing
            InvalidCredential: unknown email or wrong password
        """
        errors: List[Dict[str, Any]] = []
        if not email or not _is_valid_email(email.strip()):
            errors.append({"field": "email", "message": "Please include a valid email"})
        if not password:
            errors.append({"field": "password", "message": "Password is required"})
        if errors:
            raise ValidationError.from_fields(errors)

        user = await self.users.find_by_email(normalize_email(email))
        if not user or not self.pwd_context.verify(password, user.password):
            raise InvalidCredential("Invalid credentials")

        return self.token_verifier.issue(str(user.id))

    async def get_current_user(self, actor: str) -> User:
        """Load the caller's account."""
        user = await self.users.find_by_id(actor_object_id(actor))
        if not user:
            raise NotFound("User not found")
        return user
