"""GitHub JSON builders and a fake API served through httpx.MockTransport."""

from typing import Any, Callable, Dict, List

import httpx

from ghdash.models import Review, Team, User

API = "https://api.github.com"


def user_json(login: str, id: int = 1) -> Dict[str, Any]:
    return {"login": login, "avatar_url": f"https://avatars.example/{login}", "id": id}


def item_json(
    id: int,
    number: int | None = None,
    author: str = "alice",
    repo: str = "octo/hello",
    updated_at: str = "2024-01-01T00:00:00Z",
    pull: bool = True,
    labels: List[Dict[str, str]] | None = None,
    draft: bool = False,
) -> Dict[str, Any]:
    number = number if number is not None else id
    data: Dict[str, Any] = {
        "id": id,
        "number": number,
        "title": f"PR {number}",
        "html_url": f"https://github.com/{repo}/pull/{number}",
        "state": "open",
        "created_at": "2023-12-01T00:00:00Z",
        "updated_at": updated_at,
        "draft": draft,
        "user": user_json(author),
        "repository_url": f"{API}/repos/{repo}",
        "labels": labels or [],
    }
    if pull:
        data["pull_request"] = {
            "url": f"{API}/repos/{repo}/pulls/{number}",
            "html_url": f"https://github.com/{repo}/pull/{number}",
        }
    return data


def review_json(login: str, state: str, id: int = 1) -> Dict[str, Any]:
    return {"id": id, "user": user_json(login), "state": state, "submitted_at": "2024-01-02T00:00:00Z"}


def make_review(login: str, state: str) -> Review:
    return Review.model_validate(review_json(login, state))


def make_user(login: str) -> User:
    return User(login=login)


def make_team(name: str) -> Team:
    return Team(name=name, slug=name)


Route = Callable[[httpx.Request], httpx.Response]


class FakeGitHub:
    """Routes GET requests by URL path; unknown paths return 404.

    ``searches`` maps a query prefix ("author:", "review-requested:",
    "reviewed-by:") to the list of item dicts it returns.
    """

    def __init__(self, login: str = "me") -> None:
        self.login = login
        self.searches: Dict[str, List[Dict[str, Any]]] = {}
        self.reviews: Dict[str, List[Dict[str, Any]]] = {}
        self.requested: Dict[str, Dict[str, Any]] = {}
        self.details: Dict[str, Dict[str, Any]] = {}
        self.overrides: Dict[str, Route] = {}
        self.calls: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path
        if path in self.overrides:
            return self.overrides[path](request)
        if path == "/user":
            return httpx.Response(200, json=user_json(self.login))
        if path == "/search/issues":
            q = request.url.params["q"]
            for prefix, items in self.searches.items():
                if q.startswith(prefix):
                    return httpx.Response(200, json={"total_count": len(items), "items": items})
            return httpx.Response(200, json={"total_count": 0, "items": []})
        if path.endswith("/reviews"):
            return httpx.Response(200, json=self.reviews.get(path, []))
        if path.endswith("/requested_reviewers"):
            return httpx.Response(200, json=self.requested.get(path, {"users": [], "teams": []}))
        if "/pulls/" in path:
            return httpx.Response(200, json=self.details.get(path, {"mergeable": None, "mergeable_state": None}))
        return httpx.Response(404, text="Not Found")

    def paths(self) -> List[str]:
        return [c.url.path for c in self.calls]


