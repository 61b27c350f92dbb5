"""
Profile model with its experience and education history.

The ``*Fields`` classes describe sparse input: every field is optional and
only the ones actually supplied are merged into the stored profile.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from .common import MongoModel, PyObjectId


SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram", "dribbble")


class SocialLinks(BaseModel):
    """Social network URLs keyed by platform."""

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    dribbble: Optional[str] = None


class ExperienceEntry(MongoModel):
    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    title: str
    company: str
    location: Optional[str] = None
    from_date: datetime = Field(..., alias="from")
    to_date: Optional[datetime] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None


class EducationEntry(MongoModel):
    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to_date: Optional[datetime] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None


class Profile(MongoModel):
    """Developer profile. One per user."""

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    user: PyObjectId = Field(..., description="Owning user")
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str = Field(..., description="Professional status, e.g. 'Developer'")
    skills: List[str] = Field(default_factory=list)
    githubusername: Optional[str] = None
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: List[ExperienceEntry] = Field(default_factory=list, description="Newest first")
    education: List[EducationEntry] = Field(default_factory=list, description="Newest first")
    date: datetime = Field(default_factory=datetime.utcnow)


class ProfileFields(BaseModel):
    """Profile create/update input. ``skills`` is a comma separated string."""

    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    skills: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    dribbble: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "Developer",
                "skills": "Python, FastAPI, MongoDB",
                "company": "Acme",
                "githubusername": "octocat",
                "twitter": "https://twitter.com/octocat"
            }
        }
    }


class ExperienceFields(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_date: Optional[str] = Field(None, alias="from")
    to_date: Optional[str] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class EducationFields(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_date: Optional[str] = Field(None, alias="from")
    to_date: Optional[str] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}
