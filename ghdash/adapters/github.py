"""GitHub API adapter (async, read-only)."""

import logging
from typing import Any, Dict, List, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ghdash.adapters.base import DecodeError, HttpError, NetworkError, RateLimited
from ghdash.models import PullDetail, RequestedReviewers, Review, SearchItem, SearchResponse, User
from ghdash.utils import format_clock

LOG = logging.getLogger("ghdash.adapters.github")

DEFAULT_API_URL = "https://api.github.com"
SEARCH_PAGE_SIZE = 25
USER_AGENT = "gh-dash"

M = TypeVar("M", bound=BaseModel)

_REVIEWS = TypeAdapter(List[Review])


def is_rate_limited(resp: httpx.Response) -> bool:
    """429, or 403 whose x-ratelimit-remaining header is exactly "0"."""
    if resp.status_code == 429:
        return True
    return resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining") == "0"


def _reset_hint(resp: httpx.Response) -> str | None:
    raw = resp.headers.get("x-ratelimit-reset")
    if not raw:
        return None
    try:
        return format_clock(int(raw))
    except ValueError:
        return None


class GitHubAdapter:
    """GitHub REST API client for the dashboard.

    Holds one httpx.AsyncClient for the lifetime of a refresh. Every call
    is a GET; failures raise a GatewayError subclass. Use as an async
    context manager, or pass in a client you close yourself.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }

    async def __aenter__(self) -> "GitHubAdapter":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    async def _get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = self._url(path)
        try:
            resp = await self._client.get(url, params=params, headers=self._headers, follow_redirects=True)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            if is_rate_limited(resp):
                hint = _reset_hint(resp)
                LOG.warning("Rate limited on %s (resets at %s)", url, hint or "unknown")
                raise RateLimited(hint)
            raise HttpError(resp.status_code, resp.reason_phrase, resp.text or "")

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(str(e)) from e

    async def _get_model(self, path: str, model: Type[M], params: Dict[str, Any] | None = None) -> M:
        data = await self._get(path, params=params)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

    async def get_authenticated_user(self) -> User:
        """Return the user the token belongs to."""
        return await self._get_model("/user", User)

    async def search_pull_requests(self, query: str, per_page: int = SEARCH_PAGE_SIZE) -> List[SearchItem]:
        """Run an issue search and keep only results that are pull requests."""
        data = await self._get_model(
            "/search/issues",
            SearchResponse,
            params={"q": query, "per_page": per_page},
        )
        return [item for item in data.items if item.is_pull_request]

    async def list_reviews(self, owner: str, repo: str, number: int) -> List[Review]:
        """List reviews of a pull request in the order GitHub returns them."""
        data = await self._get(f"/repos/{owner}/{repo}/pulls/{number}/reviews")
        try:
            return _REVIEWS.validate_python(data)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

    async def get_requested_reviewers(self, owner: str, repo: str, number: int) -> RequestedReviewers:
        """Return users and teams whose review is still requested."""
        return await self._get_model(
            f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
            RequestedReviewers,
        )

    async def get_pull_detail(self, pull_url: str) -> PullDetail:
        """Fetch mergeability of a pull request by its API URL."""
        return await self._get_model(pull_url, PullDetail)
