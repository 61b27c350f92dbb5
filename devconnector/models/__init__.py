"""
Database models for DevConnector.
"""
from .common import PyObjectId, parse_object_id
from .user import User
from .post import Post, Comment, Like
from .profile import (
    Profile,
    ProfileFields,
    SocialLinks,
    ExperienceEntry,
    ExperienceFields,
    EducationEntry,
    EducationFields,
)

__all__ = [
    "PyObjectId",
    "parse_object_id",
    "User",
    "Post",
    "Comment",
    "Like",
    "Profile",
    "ProfileFields",
    "SocialLinks",
    "ExperienceEntry",
    "ExperienceFields",
    "EducationEntry",
    "EducationFields",
]
