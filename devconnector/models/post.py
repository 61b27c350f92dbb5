"""
Post, Comment and Like models.
"""
from typing import List, Optional
from pydantic import Field
from datetime import datetime
from .common import MongoModel, PyObjectId


class Like(MongoModel):
    """A user's like on a post. At most one per user per post."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    user: PyObjectId = Field(..., description="User who liked the post")


class Comment(MongoModel):
    """Comment embedded in a post, newest first."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    user: PyObjectId = Field(..., description="Comment author")
    text: str = Field(..., description="Comment content")
    name: Optional[str] = Field(None, description="Author name at comment time")
    avatar: Optional[str] = Field(None, description="Author avatar at comment time")
    date: datetime = Field(default_factory=datetime.utcnow, description="Comment creation time")


class Post(MongoModel):
    """Post with embedded likes and comments."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    user: PyObjectId = Field(..., description="Post author")
    text: str = Field(..., description="Post content")
    name: Optional[str] = Field(None, description="Author name at post time")
    avatar: Optional[str] = Field(None, description="Author avatar at post time")
    likes: List[Like] = Field(default_factory=list, description="Likes, newest first")
    comments: List[Comment] = Field(default_factory=list, description="Comments, newest first")
    date: datetime = Field(default_factory=datetime.utcnow, description="Post creation time")

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "json_schema_extra": {
            "example": {
                "user": "507f1f77bcf86cd799439011",
                "text": "Shipped the new release today!",
                "name": "Ann",
                "likes": [],
                "comments": []
            }
        }
    }
