"""
GitHub repository lookup for profile pages.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx
from config import Settings
from devconnector.exceptions import LookupFailed
from devconnector.services.cache_service import CacheService
from devconnector.utils.retry import retry_async

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = (
    "id",
    "name",
    "full_name",
    "html_url",
    "description",
    "stargazers_count",
    "watchers_count",
    "forks_count",
)


class GithubService:
    """Fetches a user's latest public repositories from the GitHub REST API."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        max_attempts: int = 3,
        retry_delay: float = 0.5,
        token: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        cache: Optional[CacheService] = None,
        cache_ttl: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.token = token
        self.client_id = client_id
        self.client_secret = client_secret
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, cache: Optional[CacheService] = None) -> "GithubService":
        return cls(
            base_url=settings.github_api_url,
            timeout=settings.github_timeout,
            max_attempts=settings.github_max_attempts,
            retry_delay=settings.github_retry_delay,
            token=settings.github_token,
            client_id=settings.github_client_id,
            client_secret=settings.github_client_secret,
            cache=cache,
            cache_ttl=settings.redis_ttl
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devconnector-service",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"per_page": 5, "sort": "created:asc"}
        if self.client_id and self.client_secret:
            params["client_id"] = self.client_id
            params["client_secret"] = self.client_secret
        return params

    async def get_repositories(self, username: str) -> List[Dict[str, Any]]:
        """
        Get the five most recently created repositories of ``username``.

        Raises:
            LookupFailed: GitHub timed out, was unreachable, answered with a
                non-200 status, or returned something other than a list.
        """
        cache_key = f"github:repos:{username.lower()}"
        if self.cache:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return cached

        url = f"{self.base_url}/users/{username}/repos"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            async def fetch() -> httpx.Response:
                return await client.get(url, headers=self._headers(), params=self._params())

            try:
                response = await retry_async(
                    fetch,
                    max_attempts=self.max_attempts,
                    initial_delay=self.retry_delay,
                    exceptions=(httpx.TransportError,)
                )
            except httpx.TimeoutException as e:
                raise LookupFailed(f"GitHub lookup for '{username}' timed out") from e
            except httpx.TransportError as e:
                raise LookupFailed(f"GitHub is unreachable: {type(e).__name__}") from e

        if response.status_code == 404:
            raise LookupFailed("No Github profile found")
        if response.status_code != 200:
            logger.warning(f"GitHub returned status {response.status_code} for '{username}'")
            raise LookupFailed(f"GitHub returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise LookupFailed("GitHub returned a malformed response") from e
        if not isinstance(payload, list):
            raise LookupFailed("GitHub returned a malformed response")

        repositories = [
            {field: repo.get(field) for field in SUMMARY_FIELDS}
            for repo in payload
            if isinstance(repo, dict)
        ]

        if self.cache:
            await self.cache.set(cache_key, repositories, ttl=self.cache_ttl)

        return repositories
