"""Search aggregation: the three dashboard queries, merged and deduplicated."""

import logging
from typing import List, NamedTuple, Sequence, Set

from ghdash.adapters import GatewayError, GitHubAdapter, RateLimited
from ghdash.concurrency import gather_all
from ghdash.errors import SearchFailed
from ghdash.models import SearchItem

LOG = logging.getLogger("ghdash.search")

QUERY_FILTERS = "type:pr state:open sort:updated"


def authored_query(login: str) -> str:
    return f"author:{login} {QUERY_FILTERS}"


def review_requested_query(login: str) -> str:
    return f"review-requested:{login} {QUERY_FILTERS}"


def reviewed_by_query(login: str) -> str:
    return f"reviewed-by:{login} {QUERY_FILTERS}"


class ReviewCandidates(NamedTuple):
    """Merged review list plus the ids that came from review-requested."""

    items: List[SearchItem]
    review_requested_ids: Set[int]


class SearchResults(NamedTuple):
    authored: List[SearchItem]
    review: ReviewCandidates


def merge_review_candidates(
    review_requested: Sequence[SearchItem],
    reviewed_by: Sequence[SearchItem],
    viewer_login: str,
) -> ReviewCandidates:
    """Merge review-requested and reviewed-by results.

    Duplicates (same id) keep their first occurrence, so the
    review-requested copy wins. Items authored by the viewer are dropped.
    Provenance is taken from review_requested alone, before merging.
    """
    requested_ids = {item.id for item in review_requested}
    merged: dict[int, SearchItem] = {}
    for item in [*review_requested, *reviewed_by]:
        merged.setdefault(item.id, item)
    me = viewer_login.lower()
    items = [item for item in merged.values() if item.user.login.lower() != me]
    return ReviewCandidates(items, requested_ids)


async def _search(adapter: GitHubAdapter, query: str) -> List[SearchItem]:
    try:
        items = await adapter.search_pull_requests(query)
    except RateLimited:
        raise
    except GatewayError as e:
        raise SearchFailed(e) from e
    LOG.debug("Search %r returned %d pull request(s)", query, len(items))
    return items


async def search_dashboard_items(adapter: GitHubAdapter, viewer_login: str) -> SearchResults:
    """Run the three searches concurrently and build both candidate lists.

    Raises SearchFailed (or RateLimited) on the first failing query.
    """
    authored, requested, reviewed = await gather_all(
        _search(adapter, authored_query(viewer_login)),
        _search(adapter, review_requested_query(viewer_login)),
        _search(adapter, reviewed_by_query(viewer_login)),
    )
    review = merge_review_candidates(requested, reviewed, viewer_login)
    LOG.info(
        "Found %d authored and %d review pull request(s) for %s",
        len(authored),
        len(review.items),
        viewer_login,
    )
    return SearchResults(authored, review)
