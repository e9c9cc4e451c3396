"""Gateway errors raised by the GitHub adapter.

Callers route on the exception type: RateLimited is surfaced to the user
as is, everything else gets wrapped with the context of the failing stage.
"""

from ghdash.errors import GhDashError

BODY_SNIPPET_LIMIT = 200


class GatewayError(GhDashError):
    """Raised when a GitHub API call fails."""

    pass


class RateLimited(GatewayError):
    """HTTP 429, or 403 with x-ratelimit-remaining: 0."""

    def __init__(self, reset_hint: str | None = None) -> None:
        self.reset_hint = reset_hint
        message = "GitHub API rate limit exceeded."
        if reset_hint:
            message = f"{message} Resets at {reset_hint}."
        super().__init__(message)


class HttpError(GatewayError):
    """Non-success HTTP status that is not a rate limit."""

    def __init__(self, status: int, reason: str, body_snippet: str = "") -> None:
        self.status = status
        self.reason = reason
        self.body_snippet = body_snippet[:BODY_SNIPPET_LIMIT]
        super().__init__(f"GitHub API {status}: {reason} - {self.body_snippet}")


class NetworkError(GatewayError):
    """Request never got an HTTP response (DNS, connect, TLS, timeout)."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class DecodeError(GatewayError):
    """Response body is not the JSON shape we expected."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse GitHub response: {detail}")
