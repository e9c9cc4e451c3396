"""Dashboard records returned to the caller.

Field names are serialized in camelCase (``model_dump(by_alias=True)``)
because the UI layer reads them under those names.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TurnStatus = Literal["my-turn", "their-turn"]
CheckResult = Literal["my-turn", "their-turn", "skip"]
Section = Literal["my-prs", "review-requests"]

MY_TURN: TurnStatus = "my-turn"
THEIR_TURN: TurnStatus = "their-turn"
SKIP: CheckResult = "skip"

MY_PRS: Section = "my-prs"
REVIEW_REQUESTS: Section = "review-requests"


class _DashboardModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TurnCheck(_DashboardModel):
    """One evaluated step of the turn decision tree."""

    label: str
    value: str
    result: CheckResult


class TurnDebugInfo(_DashboardModel):
    """Ordered trace of the checks evaluated for one item."""

    section: Section
    checks: List[TurnCheck] = Field(default_factory=list)
    deciding_check: str


class DashboardAuthor(_DashboardModel):
    login: str
    avatar_url: str = ""


class DashboardLabel(_DashboardModel):
    name: str
    color: str = ""


class DashboardItem(_DashboardModel):
    """Search item enriched with its turn verdict, trace and review summary."""

    id: int
    number: int
    title: str
    url: str
    repo: str
    author: DashboardAuthor
    turn_status: TurnStatus
    turn_debug_info: TurnDebugInfo
    is_draft: bool = False
    created_at: str
    updated_at: str
    labels: List[DashboardLabel] = Field(default_factory=list)
    review_summary: str


class DashboardSnapshot(_DashboardModel):
    """Result of one refresh: both sorted lists plus who and when."""

    my_items: List[DashboardItem] = Field(default_factory=list)
    review_items: List[DashboardItem] = Field(default_factory=list)
    viewer_identity: str
    fetched_at: str

    def to_payload(self) -> dict:
        """Return the camelCase JSON-ready dict for the UI layer."""
        return self.model_dump(mode="json", by_alias=True)
