"""
Request and response envelopes shared by the routers.
"""
from typing import Any, List, Optional
from pydantic import BaseModel


class ItemResponse(BaseModel):
    """Response model for a single resource."""
    success: bool
    data: Any
    message: Optional[str] = None


class ListResponse(BaseModel):
    """Response model for resource lists."""
    success: bool
    data: List[Any]
    total: int
    message: Optional[str] = None


class TokenResponse(BaseModel):
    """Response model carrying an issued token."""
    success: bool
    token: str
    message: Optional[str] = None


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Ann", "email": "ann@example.com", "password": "secret1"}
        }
    }


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TextRequest(BaseModel):
    """Body of post and comment creation."""
    text: Optional[str] = None
