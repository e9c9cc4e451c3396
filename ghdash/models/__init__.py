"""Data models for GitHub payloads and dashboard records (Pydantic)."""

from ghdash.models.dashboard import (
    MY_PRS,
    MY_TURN,
    REVIEW_REQUESTS,
    SKIP,
    THEIR_TURN,
    CheckResult,
    DashboardAuthor,
    DashboardItem,
    DashboardLabel,
    DashboardSnapshot,
    Section,
    TurnCheck,
    TurnDebugInfo,
    TurnStatus,
)
from ghdash.models.review import (
    SUBMITTED_STATES,
    PullDetail,
    RequestedReviewers,
    Review,
    ReviewState,
    Team,
)
from ghdash.models.search_item import Label, PullRequestRef, SearchItem, SearchResponse
from ghdash.models.user import User

__all__ = [
    "MY_PRS",
    "MY_TURN",
    "REVIEW_REQUESTS",
    "SKIP",
    "SUBMITTED_STATES",
    "THEIR_TURN",
    "CheckResult",
    "DashboardAuthor",
    "DashboardItem",
    "DashboardLabel",
    "DashboardSnapshot",
    "Label",
    "PullDetail",
    "PullRequestRef",
    "RequestedReviewers",
    "Review",
    "ReviewState",
    "SearchItem",
    "SearchResponse",
    "Section",
    "Team",
    "TurnCheck",
    "TurnDebugInfo",
    "TurnStatus",
    "User",
]
