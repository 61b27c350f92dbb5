"""
Configuration settings for the DevConnector service.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "devconnector"

    # Redis Configuration
    redis_url: str = "redis://localhost:6379"
    redis_ttl: int = 300  # 5 minutes in seconds

    # Token Configuration
    jwt_secret: Optional[str] = None  # required outside development
    jwt_algorithm: str = "HS256"
    jwt_expires_in: int = 36000  # 10 hours in seconds

    # Password hashing cost
    bcrypt_rounds: int = 10

    # GitHub Configuration
    github_api_url: str = "https://api.github.com"
    github_token: Optional[str] = None
    github_client_id: Optional[str] = None
    github_client_secret: Optional[str] = None
    github_timeout: float = 10.0
    github_max_attempts: int = 3
    github_retry_delay: float = 0.5

    # Application Configuration
    app_env: str = "development"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    # Rate limiting
    rate_limit_enabled: bool = False
    rate_limit_per_minute: int = 60
    rate_limit_per_hour: int = 1000

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
