"""Errors surfaced by the dashboard pipeline.

Gateway errors (ghdash.adapters.base) describe what went wrong on the
wire; the wrappers here say which stage of a refresh it broke. RateLimited
is never wrapped.
"""


class GhDashError(Exception):
    """Base class for all gh-dash errors."""

    pass


class _StageError(GhDashError):
    prefix = ""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"{self.prefix}: {cause}")


class InvalidCredential(_StageError):
    """Identity resolution failed for a reason other than rate limiting."""

    prefix = "Invalid Personal Access Token or GitHub API error"


class SearchFailed(_StageError):
    """One of the search queries failed."""

    prefix = "GitHub search failed"


class EnrichmentFailed(_StageError):
    """Fetching reviews, reviewers or pull detail of an item failed."""

    prefix = "GitHub PR enrichment failed"


class RepoParseError(GhDashError):
    """repository_url of a search item has no owner/name after repos/."""

    def __init__(self, repository_url: str) -> None:
        self.repository_url = repository_url
        super().__init__(f"Could not parse owner/repo from: {repository_url}")
