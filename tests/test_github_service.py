"""
Tests for the GitHub repository lookup, using httpx.MockTransport.
"""
import httpx
import pytest
from devconnector.exceptions import LookupFailed
from devconnector.services.github_service import GithubService


REPOS = [
    {
        "id": 1,
        "name": "hello-world",
        "full_name": "octocat/hello-world",
        "html_url": "https://github.com/octocat/hello-world",
        "description": "My first repository",
        "stargazers_count": 80,
        "watchers_count": 80,
        "forks_count": 9,
        "owner": {"login": "octocat"},
    }
]


class MemoryCache:
    def __init__(self):
        self.values = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ttl=None):
        self.values[key] = value
        return True


def make_service(handler, **kwargs):
    return GithubService(
        base_url="https://github.test",
        retry_delay=0,
        transport=httpx.MockTransport(handler),
        **kwargs
    )


@pytest.mark.asyncio
async def test_repositories_are_summarized():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=REPOS)

    service = make_service(handler, client_id="cid", client_secret="csecret")
    repositories = await service.get_repositories("octocat")

    assert repositories == [{key: value for key, value in REPOS[0].items() if key != "owner"}]
    request = requests[0]
    assert request.url.path == "/users/octocat/repos"
    assert request.url.params["per_page"] == "5"
    assert request.url.params["sort"] == "created:asc"
    assert request.url.params["client_id"] == "cid"
    assert request.headers["User-Agent"] == "devconnector-service"


@pytest.mark.asyncio
async def test_token_is_sent_as_bearer():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    await make_service(handler, token="ghp_test").get_repositories("octocat")

    assert seen["authorization"] == "Bearer ghp_test"


@pytest.mark.asyncio
async def test_unknown_user_is_lookup_failed():
    service = make_service(lambda request: httpx.Response(404, json={"message": "Not Found"}))

    with pytest.raises(LookupFailed, match="No Github profile found"):
        await service.get_repositories("nobody")


@pytest.mark.asyncio
async def test_server_error_is_lookup_failed():
    service = make_service(lambda request: httpx.Response(500))

    with pytest.raises(LookupFailed, match="500"):
        await service.get_repositories("octocat")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b'{"message": "rate limited"}', b"<html>"])
async def test_unexpected_body_is_lookup_failed(body):
    service = make_service(lambda request: httpx.Response(200, content=body))

    with pytest.raises(LookupFailed, match="malformed"):
        await service.get_repositories("octocat")


@pytest.mark.asyncio
async def test_timeouts_are_retried_then_reported():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    service = make_service(handler, max_attempts=3)

    with pytest.raises(LookupFailed, match="timed out"):
        await service.get_repositories("octocat")

    assert len(calls) == 3


@pytest.mark.asyncio
async def test_transient_connect_error_recovers():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=REPOS)

    repositories = await make_service(handler).get_repositories("octocat")

    assert len(calls) == 2
    assert repositories[0]["name"] == "hello-world"


@pytest.mark.asyncio
async def test_unreachable_github_is_lookup_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LookupFailed, match="unreachable"):
        await make_service(handler, max_attempts=2).get_repositories("octocat")


@pytest.mark.asyncio
async def test_cached_repositories_skip_the_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=REPOS)

    cache = MemoryCache()
    service = make_service(handler, cache=cache)

    first = await service.get_repositories("Octocat")
    second = await service.get_repositories("octocat")

    assert first == second
    assert len(calls) == 1
    assert "github:repos:octocat" in cache.values
