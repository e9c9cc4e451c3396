"""Review events, outstanding reviewers and mergeability detail of a pull request."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from ghdash.models.user import User

ReviewState = Literal["APPROVED", "CHANGES_REQUESTED", "COMMENTED", "DISMISSED", "PENDING"]

# PENDING reviews are drafts that only their author can see
SUBMITTED_STATES: frozenset[str] = frozenset({"APPROVED", "CHANGES_REQUESTED", "COMMENTED", "DISMISSED"})


class Review(BaseModel):
    """One review event on a pull request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = 0
    user: User
    state: ReviewState
    submitted_at: str | None = None

    @property
    def is_submitted(self) -> bool:
        return self.state in SUBMITTED_STATES


class Team(BaseModel):
    """Team whose review is requested."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    slug: str = ""


class RequestedReviewers(BaseModel):
    """Individuals and teams whose review is still outstanding."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    users: List[User] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)


class PullDetail(BaseModel):
    """Mergeability fields of /repos/{owner}/{repo}/pulls/{number}.

    mergeable_state is one of clean, blocked, dirty, unstable, unknown
    (GitHub may also send others such as behind or has_hooks) or null
    while GitHub is still computing it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    mergeable: bool | None = None
    mergeable_state: str | None = None
