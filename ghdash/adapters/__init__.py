"""GitHub API gateway (errors and async adapter)."""

from ghdash.adapters.base import (
    DecodeError,
    GatewayError,
    HttpError,
    NetworkError,
    RateLimited,
)
from ghdash.adapters.github import GitHubAdapter

__all__ = [
    "DecodeError",
    "GatewayError",
    "GitHubAdapter",
    "HttpError",
    "NetworkError",
    "RateLimited",
]
