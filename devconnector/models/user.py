"""
User account model.
"""
from typing import Optional
from pydantic import Field
from datetime import datetime
from .common import MongoModel, PyObjectId


class User(MongoModel):
    """Registered account. ``password`` holds the bcrypt hash, never plain text."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique, lower-cased email address")
    password: str = Field(..., description="Salted password hash")
    avatar: Optional[str] = Field(None, description="Gravatar URL derived from the email")
    date: datetime = Field(default_factory=datetime.utcnow, description="Registration time")

    def public(self) -> dict:
        """JSON view of the account without the password hash."""
        return self.to_json(exclude={"password"})

    def summary(self) -> dict:
        """The fields copied into profiles when they are read."""
        return {"_id": str(self.id), "name": self.name, "avatar": self.avatar}
