"""
Profile routes. Listing and reading by user are public; everything else
acts on the caller's own profile.
"""
from fastapi import APIRouter, Depends
from devconnector.api.dependencies import (
    get_current_user_id,
    get_github_service,
    get_profile_service,
)
from devconnector.api.schemas import ItemResponse, ListResponse
from devconnector.models.profile import EducationFields, ExperienceFields, ProfileFields
from devconnector.services.github_service import GithubService
from devconnector.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ListResponse)
async def list_profiles(profile_service: ProfileService = Depends(get_profile_service)):
    """All profiles with their owner's name and avatar."""
    profiles = await profile_service.list_profiles()
    return ListResponse(
        success=True,
        data=profiles,
        total=len(profiles),
        message=f"Found {len(profiles)} profile(s)"
    )


@router.post("", response_model=ItemResponse)
async def upsert_profile(
    body: ProfileFields,
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Create or update the caller's profile.

    - **status** and **skills** are required
    - **skills** is a comma separated list
    - fields left out keep their stored value
    """
    profile = await profile_service.upsert_profile(actor, body)
    return ItemResponse(success=True, data=profile.to_json())


@router.delete("", response_model=ItemResponse)
async def delete_account(
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Delete the caller's posts, profile and account."""
    await profile_service.delete_account(actor)
    return ItemResponse(success=True, data=None, message="User removed")


@router.get("/me", response_model=ItemResponse)
async def get_my_profile(
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.get_my_profile(actor)
    return ItemResponse(success=True, data=profile)


@router.get("/user/{user_id}", response_model=ItemResponse)
async def get_profile_by_user(
    user_id: str,
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.get_profile_by_user(user_id)
    return ItemResponse(success=True, data=profile)


@router.put("/experience", response_model=ItemResponse)
async def add_experience(
    body: ExperienceFields,
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Add an experience entry. **title**, **company** and **from** are required."""
    profile = await profile_service.add_experience(actor, body)
    return ItemResponse(success=True, data=profile.to_json())


@router.delete("/experience/{exp_id}", response_model=ItemResponse)
async def remove_experience(
    exp_id: str,
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.remove_experience(actor, exp_id)
    return ItemResponse(success=True, data=profile.to_json())


@router.put("/education", response_model=ItemResponse)
async def add_education(
    body: EducationFields,
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Add an education entry. **school**, **degree**, **fieldofstudy** and **from** are required."""
    profile = await profile_service.add_education(actor, body)
    return ItemResponse(success=True, data=profile.to_json())


@router.delete("/education/{edu_id}", response_model=ItemResponse)
async def remove_education(
    edu_id: str,
    actor: str = Depends(get_current_user_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.remove_education(actor, edu_id)
    return ItemResponse(success=True, data=profile.to_json())


@router.get("/github/{username}", response_model=ListResponse)
async def get_github_repositories(
    username: str,
    actor: str = Depends(get_current_user_id),
    github_service: GithubService = Depends(get_github_service)
):
    """Latest public GitHub repositories of ``username``."""
    repositories = await github_service.get_repositories(username)
    return ListResponse(success=True, data=repositories, total=len(repositories))
