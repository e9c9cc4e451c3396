"""Per-item enrichment: fetch review data concurrently, classify, summarize."""

import logging
from typing import List

from ghdash.adapters import GatewayError, GitHubAdapter, RateLimited
from ghdash.concurrency import gather_all
from ghdash.errors import EnrichmentFailed, RepoParseError
from ghdash.models import (
    MY_PRS,
    DashboardAuthor,
    DashboardItem,
    DashboardLabel,
    PullDetail,
    RequestedReviewers,
    Review,
    SearchItem,
    Section,
)
from ghdash.summary import build_review_summary
from ghdash.turn import determine_my_pr_turn, determine_review_request_turn

LOG = logging.getLogger("ghdash.enrich")

REPOS_SEGMENT = "repos/"


def parse_repo(repository_url: str) -> tuple[str, str]:
    """Split "https://api.github.com/repos/octocat/hello" into ("octocat", "hello").

    Everything after the first "/" following repos/ is the repository
    name. Raises RepoParseError when either part is missing.
    """
    idx = repository_url.find(REPOS_SEGMENT)
    if idx < 0:
        raise RepoParseError(repository_url)
    full_name = repository_url[idx + len(REPOS_SEGMENT) :]
    owner, sep, name = full_name.partition("/")
    if not sep or not owner or not name:
        raise RepoParseError(repository_url)
    return owner, name


def build_dashboard_item(
    item: SearchItem,
    repo: str,
    section: Section,
    viewer_login: str,
    is_review_requested: bool,
    reviews: List[Review],
    requested: RequestedReviewers,
    detail: PullDetail | None,
) -> DashboardItem:
    """Classify and summarize an item whose review data has been fetched.

    ``repo`` is the "owner/name" label parsed from the item's repository URL.
    """
    if section == MY_PRS:
        mergeable_state = detail.mergeable_state if detail is not None else None
        turn = determine_my_pr_turn(reviews, requested.users, item.user.login, mergeable_state)
    else:
        turn = determine_review_request_turn(
            reviews,
            requested.users,
            requested.teams,
            viewer_login,
            is_review_requested,
        )

    return DashboardItem(
        id=item.id,
        number=item.number,
        title=item.title,
        url=item.html_url,
        repo=repo,
        author=DashboardAuthor(login=item.user.login, avatar_url=item.user.avatar_url),
        turn_status=turn.turn_status,
        turn_debug_info=turn.debug_info,
        is_draft=item.draft,
        created_at=item.created_at,
        updated_at=item.updated_at,
        labels=[DashboardLabel(name=lb.name, color=lb.color) for lb in item.labels],
        review_summary=build_review_summary(reviews, requested.users, requested.teams),
    )


async def enrich_item(
    adapter: GitHubAdapter,
    item: SearchItem,
    section: Section,
    viewer_login: str,
    is_review_requested: bool = False,
) -> DashboardItem:
    """Fetch reviews, requested reviewers and (for my PRs) pull detail concurrently.

    The item fails as a unit: the first failing fetch cancels the others.
    Gateway errors are wrapped in EnrichmentFailed except RateLimited.
    """
    owner, name = parse_repo(item.repository_url)

    fetches = [
        adapter.list_reviews(owner, name, item.number),
        adapter.get_requested_reviewers(owner, name, item.number),
    ]
    if section == MY_PRS and item.pull_request is not None:
        fetches.append(adapter.get_pull_detail(item.pull_request.url))

    try:
        results = await gather_all(*fetches)
    except RateLimited:
        raise
    except GatewayError as e:
        raise EnrichmentFailed(e) from e

    reviews, requested = results[0], results[1]
    detail = results[2] if len(results) > 2 else None
    enriched = build_dashboard_item(
        item, f"{owner}/{name}", section, viewer_login, is_review_requested, reviews, requested, detail
    )
    LOG.debug(
        "%s#%d: %s (%s)",
        enriched.repo,
        item.number,
        enriched.turn_status,
        enriched.turn_debug_info.deciding_check,
    )
    return enriched
