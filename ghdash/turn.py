"""Turn classification: whose action a pull request is waiting on.

Two pure decision trees, one per dashboard section. Each evaluated step
appends a TurnCheck to the trace; the first step with a verdict decides
and later steps are not evaluated.

My PRs (the viewer is the author):
    1. No reviewer has submitted a review -> their turn
    2. Every submitter has been re-requested -> their turn
    3. Some reviewer's latest state is CHANGES_REQUESTED -> my turn
    4. Fall back on mergeable_state (blocked -> their turn, else my turn)

Review requests (someone else is the author):
    1. The viewer is an outstanding individual reviewer -> my turn
    2. Found via review-requested and a team is outstanding -> my turn,
       otherwise their turn
"""

from typing import Dict, Iterable, List, NamedTuple, Sequence

from ghdash.models import (
    MY_PRS,
    MY_TURN,
    REVIEW_REQUESTS,
    SKIP,
    THEIR_TURN,
    CheckResult,
    Review,
    Section,
    Team,
    TurnCheck,
    TurnDebugInfo,
    TurnStatus,
    User,
)

NO_REVIEWS = "No reviews submitted yet"
ALL_RE_REQUESTED = "All submitters re-requested"
CHANGES_REQUESTED = "Changes requested"
MY_REVIEW_REQUESTED = "My review requested"
MY_REVIEW_REQUESTED_VIA_TEAM = "My review requested (via team)"

# mergeable_state -> (verdict, description)
MERGEABLE_STATES: Dict[str, tuple[TurnStatus, str]] = {
    "clean": (MY_TURN, "Ready to merge, all branch protection met"),
    "blocked": (THEIR_TURN, "Insufficient approvals / CODEOWNERS not satisfied"),
    "dirty": (MY_TURN, "Merge conflicts, author needs to resolve"),
    "unstable": (MY_TURN, "Failing checks, author should investigate"),
}
UNKNOWN_MERGEABLE = (MY_TURN, "Unknown/null, conservative fallback")


def mergeable_label(mergeable_state: str | None) -> str:
    return f"Mergeable state: {mergeable_state or 'null'}"


class TurnResult(NamedTuple):
    turn_status: TurnStatus
    debug_info: TurnDebugInfo


class _Trace:
    """Accumulates checks for one section and closes them into a TurnResult."""

    def __init__(self, section: Section) -> None:
        self.section = section
        self.checks: List[TurnCheck] = []

    def check(self, label: str, value: str, result: CheckResult) -> None:
        self.checks.append(TurnCheck(label=label, value=value, result=result))

    def decide(self, label: str, value: str, status: TurnStatus) -> TurnResult:
        self.check(label, value, status)
        info = TurnDebugInfo(section=self.section, checks=list(self.checks), deciding_check=label)
        return TurnResult(status, info)


def latest_review_states(reviews: Iterable[Review], exclude: str | None = None) -> Dict[str, str]:
    """Fold submitted reviews into the latest state per reviewer.

    Keys are lowercased logins in first-seen order. A COMMENTED review
    does not replace an earlier APPROVED or CHANGES_REQUESTED; any other
    submitted state replaces what came before. PENDING reviews are
    ignored. ``exclude`` drops one login (case-insensitive), e.g. the
    author.
    """
    skip = exclude.lower() if exclude else None
    latest: Dict[str, str] = {}
    for review in reviews:
        if not review.is_submitted:
            continue
        login = review.user.login.lower()
        if login == skip:
            continue
        prev = latest.get(login)
        if prev in ("CHANGES_REQUESTED", "APPROVED") and review.state == "COMMENTED":
            continue
        latest[login] = review.state
    return latest


def _join(names: Iterable[str]) -> str:
    return ", ".join(names)


def determine_my_pr_turn(
    reviews: Sequence[Review],
    requested_reviewers: Sequence[User],
    author_login: str,
    mergeable_state: str | None,
) -> TurnResult:
    """Classify a pull request authored by the viewer."""
    trace = _Trace(MY_PRS)
    author = author_login.lower()

    submitters = sorted({r.user.login.lower() for r in reviews if r.is_submitted and r.user.login.lower() != author})
    if not submitters:
        return trace.decide(NO_REVIEWS, "No reviewers have submitted feedback", THEIR_TURN)
    trace.check(
        NO_REVIEWS,
        f"{len(submitters)} reviewer(s) submitted: {_join(submitters)}",
        SKIP,
    )

    requested = sorted({u.login.lower() for u in requested_reviewers})
    if all(login in requested for login in submitters):
        return trace.decide(ALL_RE_REQUESTED, f"All reviewers re-requested: {_join(submitters)}", THEIR_TURN)
    if requested:
        trace.check(ALL_RE_REQUESTED, f"Re-requested: {_join(requested)} (not all submitters)", SKIP)
    else:
        trace.check(ALL_RE_REQUESTED, "No re-requests pending", SKIP)

    latest = latest_review_states(reviews, exclude=author)
    states = _join(f"{login}: {state}" for login, state in sorted(latest.items()))
    if "CHANGES_REQUESTED" in latest.values():
        return trace.decide(CHANGES_REQUESTED, f"Changes requested found ({states})", MY_TURN)
    trace.check(CHANGES_REQUESTED, f"No changes requested ({states or 'none'})", SKIP)

    status, description = MERGEABLE_STATES.get(mergeable_state or "", UNKNOWN_MERGEABLE)
    return trace.decide(mergeable_label(mergeable_state), description, status)


def determine_review_request_turn(
    reviews: Sequence[Review],
    requested_reviewers: Sequence[User],
    requested_teams: Sequence[Team],
    my_login: str,
    is_review_requested: bool,
) -> TurnResult:
    """Classify a pull request where the viewer is (or was) a reviewer.

    ``reviews`` is accepted for symmetry with determine_my_pr_turn but does
    not influence the verdict: a reviewer who already left feedback and is
    not re-requested is simply waiting.
    """
    trace = _Trace(REVIEW_REQUESTS)
    me = my_login.lower()

    names = _join(u.login for u in requested_reviewers)
    if any(u.login.lower() == me for u in requested_reviewers):
        return trace.decide(
            MY_REVIEW_REQUESTED,
            f"Your review is currently requested (pending reviewers: {names})",
            MY_TURN,
        )
    if names:
        trace.check(MY_REVIEW_REQUESTED, f"Your review is not in the requested list (pending: {names})", SKIP)
    else:
        trace.check(MY_REVIEW_REQUESTED, "No pending individual review requests", SKIP)

    if is_review_requested and requested_teams:
        teams = _join(t.name for t in requested_teams)
        return trace.decide(MY_REVIEW_REQUESTED_VIA_TEAM, f"Requested via team (teams: {teams})", MY_TURN)
    if not is_review_requested:
        return trace.decide(
            MY_REVIEW_REQUESTED_VIA_TEAM,
            "PR found via reviewed-by search, not review-requested",
            THEIR_TURN,
        )
    return trace.decide(MY_REVIEW_REQUESTED_VIA_TEAM, "No team review requests", THEIR_TURN)
