"""
Main FastAPI application.
"""
import logging
from typing import Any, Callable, Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from config import Settings, settings as default_settings
from devconnector.database import Database
from devconnector.api.routes import router
from devconnector.exceptions import ServiceError
from devconnector.middleware.error_handler import (
    service_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from devconnector.middleware.logging_middleware import LoggingMiddleware
from devconnector.middleware.rate_limiter import RateLimitMiddleware
from devconnector.repositories.post_repository import PostRepository
from devconnector.repositories.profile_repository import ProfileRepository
from devconnector.repositories.user_repository import UserRepository
from devconnector.services.auth_service import AuthService
from devconnector.services.cache_service import CacheService
from devconnector.services.github_service import GithubService
from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.token_service import TokenVerifier

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_app(
    settings: Optional[Settings] = None,
    database_provider: Optional[Callable[[], Any]] = None
) -> FastAPI:
    """
    Build the application and its services.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        database_provider: Returns the Motor database to use. When omitted the
            app connects to MongoDB on startup and uses that connection.
    """
    settings = settings or default_settings
    manage_database = database_provider is None
    mongo = Database()
    database_provider = database_provider or mongo.get_database

    cache_service = CacheService(settings.redis_url, ttl=settings.redis_ttl)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        logger.info("Starting DevConnector service...")
        logger.info(f"Environment: {settings.app_env}, Debug: {settings.debug}")

        if manage_database:
            await mongo.connect(settings)
        await cache_service.connect()

        yield

        logger.info("Shutting down services...")
        if manage_database:
            await mongo.close()
        await cache_service.close()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="DevConnector",
        description="Developer profiles, posts and discussion",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    users = UserRepository(database_provider)
    profiles = ProfileRepository(database_provider)
    posts = PostRepository(database_provider)
    token_verifier = TokenVerifier.from_settings(settings)

    app.state.settings = settings
    app.state.database_provider = database_provider
    app.state.cache_service = cache_service
    app.state.token_verifier = token_verifier
    app.state.auth_service = AuthService(users, token_verifier, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.profile_service = ProfileService(profiles, users, posts)
    app.state.post_service = PostService(posts, users)
    app.state.github_service = GithubService.from_settings(settings, cache=cache_service)

    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(LoggingMiddleware)

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            cache=cache_service,
            requests_per_minute=settings.rate_limit_per_minute,
            requests_per_hour=settings.rate_limit_per_hour
        )
        logger.info(f"Rate limiting enabled: {settings.rate_limit_per_minute}/min, {settings.rate_limit_per_hour}/hour")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "DevConnector API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


configure_logging(default_settings)

app = create_app()
