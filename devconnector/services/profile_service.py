"""
Service for profiles and their experience/education history.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from devconnector.exceptions import NotFound, ValidationError
from devconnector.models.common import parse_object_id
from devconnector.models.profile import (
    SOCIAL_NETWORKS,
    EducationEntry,
    EducationFields,
    ExperienceEntry,
    ExperienceFields,
    Profile,
    ProfileFields,
)
from devconnector.repositories.post_repository import PostRepository
from devconnector.repositories.profile_repository import ProfileRepository
from devconnector.repositories.user_repository import UserRepository
from devconnector.services import collection_mutator
from devconnector.services.token_service import actor_object_id

logger = logging.getLogger(__name__)

PROFILE_TEXT_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def split_skills(skills: str) -> List[str]:
    """Split a comma separated skills string into trimmed, non-empty items."""
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


def _parse_date(value: Optional[str], field: str, errors: List[Dict[str, Any]]) -> Optional[datetime]:
    if not _present(value):
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        errors.append({"field": field, "message": f"'{value}' is not a valid date"})
        return None


class ProfileService:
    """Service for profile business logic."""

    def __init__(
        self,
        profiles: ProfileRepository,
        users: UserRepository,
        posts: PostRepository
    ):
        self.profiles = profiles
        self.users = users
        self.posts = posts

    async def upsert_profile(self, actor: str, fields: ProfileFields) -> Profile:
        """
        Create the caller's profile, or merge ``fields`` into the existing one.

        Only fields that are present in the input are written; anything else
        on a stored profile is left as it was.

        Raises:
            ValidationError: status or skills missing
        """
        errors = []
        if not _present(fields.status):
            errors.append({"field": "status", "message": "Status is required"})
        skills = split_skills(fields.skills) if fields.skills else []
        if not skills:
            errors.append({"field": "skills", "message": "Skills is required"})
        if errors:
            raise ValidationError.from_fields(errors)

        user_id = actor_object_id(actor)

        updates: Dict[str, Any] = {
            name: getattr(fields, name).strip()
            for name in PROFILE_TEXT_FIELDS
            if _present(getattr(fields, name))
        }
        updates["skills"] = skills
        social_updates = {
            network: getattr(fields, network).strip()
            for network in SOCIAL_NETWORKS
            if _present(getattr(fields, network))
        }

        profile = await self.profiles.find_by_user(user_id)
        if profile:
            updates["social"] = profile.social.model_copy(update=social_updates)
            profile = profile.model_copy(update=updates)
            await self.profiles.save(profile)
            logger.info(f"Updated profile for user {actor}")
            return profile

        profile = Profile.model_validate({"user": user_id, "social": social_updates, **updates})
        await self.profiles.create(profile)
        logger.info(f"Created profile for user {actor}")
        return profile

    async def _populate(self, profiles: List[Profile]) -> List[Dict[str, Any]]:
        """Render profiles with ``user`` replaced by the owner's name and avatar."""
        owners = await self.users.find_by_ids({profile.user for profile in profiles})
        summaries = {owner.id: owner.summary() for owner in owners}
        rendered = []
        for profile in profiles:
            data = profile.to_json()
            data["user"] = summaries.get(profile.user, {"_id": str(profile.user)})
            rendered.append(data)
        return rendered

    async def get_my_profile(self, actor: str) -> Dict[str, Any]:
        profile = await self.profiles.find_by_user(actor_object_id(actor))
        if not profile:
            raise NotFound("There is no profile for this user")
        return (await self._populate([profile]))[0]

    async def list_profiles(self) -> List[Dict[str, Any]]:
        profiles = await self.profiles.find_all()
        return await self._populate(profiles)

    async def get_profile_by_user(self, user_id: str) -> Dict[str, Any]:
        owner_id = parse_object_id(user_id)
        profile = await self.profiles.find_by_user(owner_id) if owner_id else None
        if not profile:
            raise NotFound("Profile not found")
        return (await self._populate([profile]))[0]

    async def delete_account(self, actor: str) -> None:
        """Delete the caller's posts, profile and account."""
        user_id = actor_object_id(actor)
        removed_posts = await self.posts.delete_by_user(user_id)
        await self.profiles.delete_by_user(user_id)
        await self.users.delete_by_id(user_id)
        logger.info(f"Removed user {actor} with {removed_posts} post(s)")

    async def _own_profile(self, actor: str) -> Profile:
        profile = await self.profiles.find_by_user(actor_object_id(actor))
        if not profile:
            raise NotFound("There is no profile for this user")
        return profile

    async def add_experience(self, actor: str, fields: ExperienceFields) -> Profile:
        """
        Add an experience entry at the top of the caller's history.

        Raises:
            ValidationError: title, company or from date missing or malformed
            NotFound: the caller has no profile yet
        """
        errors = []
        if not _present(fields.title):
            errors.append({"field": "title", "message": "Title is required"})
        if not _present(fields.company):
            errors.append({"field": "company", "message": "Company is required"})
        if not _present(fields.from_date):
            errors.append({"field": "from", "message": "From date is required"})
        from_date = _parse_date(fields.from_date, "from", errors)
        to_date = _parse_date(fields.to_date, "to", errors)
        if errors:
            raise ValidationError.from_fields(errors)

        profile = await self._own_profile(actor)
        entry = ExperienceEntry(
            title=fields.title.strip(),
            company=fields.company.strip(),
            location=fields.location,
            from_date=from_date,
            to_date=to_date,
            current=fields.current,
            description=fields.description
        )
        profile.experience = collection_mutator.append_front(profile.experience, entry)
        return await self.profiles.save(profile)

    async def remove_experience(self, actor: str, exp_id: str) -> Profile:
        profile = await self._own_profile(actor)
        try:
            profile.experience = collection_mutator.remove_by_id(
                profile.experience, parse_object_id(exp_id)
            )
        except NotFound:
            raise NotFound("Experience not found")
        return await self.profiles.save(profile)

    async def add_education(self, actor: str, fields: EducationFields) -> Profile:
        """
        Add an education entry at the top of the caller's history.

        Raises:
            ValidationError: school, degree, field of study or from date missing
            NotFound: the caller has no profile yet
        """
        errors = []
        if not _present(fields.school):
            errors.append({"field": "school", "message": "School is required"})
        if not _present(fields.degree):
            errors.append({"field": "degree", "message": "Degree is required"})
        if not _present(fields.fieldofstudy):
            errors.append({"field": "fieldofstudy", "message": "Field of study is required"})
        if not _present(fields.from_date):
            errors.append({"field": "from", "message": "From date is required"})
        from_date = _parse_date(fields.from_date, "from", errors)
        to_date = _parse_date(fields.to_date, "to", errors)
        if errors:
            raise ValidationError.from_fields(errors)

        profile = await self._own_profile(actor)
        entry = EducationEntry(
            school=fields.school.strip(),
            degree=fields.degree.strip(),
            fieldofstudy=fields.fieldofstudy.strip(),
            from_date=from_date,
            to_date=to_date,
            current=fields.current,
            description=fields.description
        )
        profile.education = collection_mutator.append_front(profile.education, entry)
        return await self.profiles.save(profile)

    async def remove_education(self, actor: str, edu_id: str) -> Profile:
        profile = await self._own_profile(actor)
        try:
            profile.education = collection_mutator.remove_by_id(
                profile.education, parse_object_id(edu_id)
            )
        except NotFound:
            raise NotFound("Education not found")
        return await self.profiles.save(profile)
