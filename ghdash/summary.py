"""One-line review status of a pull request, e.g. "2 approved, 1 pending (1 team)"."""

from collections import Counter
from typing import Sequence

from ghdash.models import Review, Team, User
from ghdash.turn import latest_review_states

NO_REVIEWS = "No reviews"

# Listed in this order; DISMISSED is counted but never shown
SUMMARY_CLAUSES = (
    ("APPROVED", "approved"),
    ("CHANGES_REQUESTED", "changes requested"),
    ("COMMENTED", "commented"),
)


def build_review_summary(
    reviews: Sequence[Review],
    requested_reviewers: Sequence[User],
    requested_teams: Sequence[Team],
) -> str:
    """Summarize latest review states (author included) and outstanding requests."""
    counts = Counter(latest_review_states(reviews).values())
    parts = [f"{counts[state]} {text}" for state, text in SUMMARY_CLAUSES if counts[state] > 0]

    pending = len(requested_reviewers) + len(requested_teams)
    if pending > 0:
        suffix = ""
        if requested_teams:
            plural = "s" if len(requested_teams) > 1 else ""
            suffix = f" ({len(requested_teams)} team{plural})"
        parts.append(f"{pending} pending{suffix}")

    return ", ".join(parts) if parts else NO_REVIEWS
