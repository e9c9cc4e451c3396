"""Poller: refresh the dashboard every poll interval until stopped."""

import asyncio
import logging
from typing import Awaitable, Callable

from ghdash.adapters import GitHubAdapter
from ghdash.config import AppConfig
from ghdash.dashboard import fetch_dashboard
from ghdash.errors import GhDashError
from ghdash.models import DashboardSnapshot

LOG = logging.getLogger("ghdash.poller")

SnapshotHandler = Callable[[DashboardSnapshot], Awaitable[None] | None]
ErrorHandler = Callable[[GhDashError], Awaitable[None] | None]


async def _call(handler: Callable, arg: object) -> None:
    result = handler(arg)
    if asyncio.iscoroutine(result):
        await result


async def run_poll_loop(
    config: AppConfig,
    token: str,
    on_snapshot: SnapshotHandler,
    on_error: ErrorHandler | None = None,
    max_ticks: int | None = None,
    fetch: Callable[..., Awaitable[DashboardSnapshot]] = fetch_dashboard,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    adapter: GitHubAdapter | None = None,
) -> None:
    """Loop: every poll interval, build a fresh snapshot and hand it over.

    One adapter (and so one HTTP client) serves every tick; it is opened
    here unless the caller passes one in. A failed refresh is logged (and
    passed to on_error) and the loop waits for the next tick; it does not
    retry early. max_ticks stops the loop after that many refreshes (None
    runs forever).
    """
    if adapter is None:
        async with GitHubAdapter(
            token,
            api_url=config.github.api_url,
            timeout=config.github.timeout_seconds,
        ) as own:
            await _poll(config, token, own, on_snapshot, on_error, max_ticks, fetch, sleep)
    else:
        await _poll(config, token, adapter, on_snapshot, on_error, max_ticks, fetch, sleep)


async def _poll(
    config: AppConfig,
    token: str,
    adapter: GitHubAdapter,
    on_snapshot: SnapshotHandler,
    on_error: ErrorHandler | None,
    max_ticks: int | None,
    fetch: Callable[..., Awaitable[DashboardSnapshot]],
    sleep: Callable[[float], Awaitable[None]],
) -> None:
    interval = config.poll_interval_seconds
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        ticks += 1
        try:
            snapshot = await fetch(
                token,
                api_url=config.github.api_url,
                timeout=config.github.timeout_seconds,
                adapter=adapter,
            )
        except GhDashError as e:
            LOG.error("Refresh failed: %s", e)
            if on_error is not None:
                await _call(on_error, e)
        else:
            await _call(on_snapshot, snapshot)
        if max_ticks is not None and ticks >= max_ticks:
            break
        await sleep(interval)
