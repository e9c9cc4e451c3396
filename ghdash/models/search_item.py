"""Search result item (issue or pull request) from /search/issues."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ghdash.models.user import User


class Label(BaseModel):
    """Issue/PR label."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    color: str = ""


class PullRequestRef(BaseModel):
    """Link from a search item to its pull request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    html_url: str = ""


class SearchItem(BaseModel):
    """Candidate pull request from a search query.

    created_at and updated_at are kept as the ISO-8601 strings GitHub
    returns; they are fixed-width and zero-padded, so string comparison
    orders them chronologically.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    number: int
    title: str
    html_url: str
    state: str
    created_at: str
    updated_at: str
    draft: bool = False
    user: User
    repository_url: str
    pull_request: PullRequestRef | None = None
    labels: List[Label] = Field(default_factory=list)

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


class SearchResponse(BaseModel):
    """Envelope of /search/issues."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    total_count: int = 0
    incomplete_results: bool = False
    items: List[SearchItem] = Field(default_factory=list)
