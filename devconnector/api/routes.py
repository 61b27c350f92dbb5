"""
API routes for the DevConnector service.
"""
from fastapi import APIRouter
from devconnector.api import auth, health, posts, profile, users

router = APIRouter(prefix="/api")

router.include_router(users.router)
router.include_router(auth.router)
router.include_router(profile.router)
router.include_router(posts.router)
router.include_router(health.router)
