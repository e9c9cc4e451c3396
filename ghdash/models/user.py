"""GitHub user (item author, reviewer, or the authenticated viewer)."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """GitHub account as returned by /user and embedded in other payloads."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str
    avatar_url: str = ""
    id: int = 0
