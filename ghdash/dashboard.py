"""Dashboard entry points: validate a token, build a full snapshot.

A refresh runs in three phases:
    1. resolve the viewer from the token (everything else needs the login)
    2. run the three searches concurrently, then merge/dedupe
    3. enrich every item of both lists concurrently, then sort

The first error in any phase aborts the refresh; there is no partial
snapshot and nothing is retried.
"""

import logging
import time
from typing import Callable, Iterable, List

from ghdash.adapters import GatewayError, GitHubAdapter, RateLimited
from ghdash.adapters.github import DEFAULT_API_URL
from ghdash.concurrency import gather_all
from ghdash.enrich import enrich_item
from ghdash.errors import InvalidCredential
from ghdash.models import MY_PRS, MY_TURN, REVIEW_REQUESTS, DashboardItem, DashboardSnapshot, User
from ghdash.search import search_dashboard_items
from ghdash.utils import format_timestamp

LOG = logging.getLogger("ghdash.dashboard")


def sort_items(items: Iterable[DashboardItem]) -> List[DashboardItem]:
    """My-turn items first, then most recently updated first.

    Both sorts are stable, so ties keep their input order.
    """
    by_recency = sorted(items, key=lambda i: i.updated_at, reverse=True)
    return sorted(by_recency, key=lambda i: i.turn_status != MY_TURN)


async def resolve_viewer(adapter: GitHubAdapter) -> User:
    """Return the token owner; non-rate-limit failures become InvalidCredential."""
    try:
        return await adapter.get_authenticated_user()
    except RateLimited:
        raise
    except GatewayError as e:
        raise InvalidCredential(e) from e


async def validate_credential(
    token: str,
    api_url: str = DEFAULT_API_URL,
    timeout: float = 30,
    adapter: GitHubAdapter | None = None,
) -> User:
    """Check a token by resolving its user.

    Raises InvalidCredential or RateLimited.
    """
    if adapter is not None:
        return await resolve_viewer(adapter)
    async with GitHubAdapter(token, api_url=api_url, timeout=timeout) as own:
        return await resolve_viewer(own)


async def build_snapshot(
    adapter: GitHubAdapter,
    clock: Callable[[], float] = time.time,
) -> DashboardSnapshot:
    """Run a full refresh with an existing adapter."""
    viewer = await resolve_viewer(adapter)
    login = viewer.login
    LOG.info("Refreshing dashboard for %s", login)

    found = await search_dashboard_items(adapter, login)
    requested_ids = found.review.review_requested_ids

    n_authored = len(found.authored)
    enriched = await gather_all(
        *(enrich_item(adapter, item, MY_PRS, login) for item in found.authored),
        *(
            enrich_item(adapter, item, REVIEW_REQUESTS, login, item.id in requested_ids)
            for item in found.review.items
        ),
    )

    snapshot = DashboardSnapshot(
        my_items=sort_items(enriched[:n_authored]),
        review_items=sort_items(enriched[n_authored:]),
        viewer_identity=login,
        fetched_at=format_timestamp(clock()),
    )
    LOG.info(
        "Dashboard ready: %d my PR(s), %d review request(s)",
        len(snapshot.my_items),
        len(snapshot.review_items),
    )
    return snapshot


async def fetch_dashboard(
    token: str,
    api_url: str = DEFAULT_API_URL,
    timeout: float = 30,
    adapter: GitHubAdapter | None = None,
    clock: Callable[[], float] = time.time,
) -> DashboardSnapshot:
    """Build a DashboardSnapshot for the owner of ``token``.

    Raises RateLimited, InvalidCredential, SearchFailed, EnrichmentFailed
    or RepoParseError.
    """
    if adapter is not None:
        return await build_snapshot(adapter, clock=clock)
    async with GitHubAdapter(token, api_url=api_url, timeout=timeout) as own:
        return await build_snapshot(own, clock=clock)
