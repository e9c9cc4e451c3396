"""Tests for the poll loop."""

from typing import List

import httpx
import pytest

from ghdash.adapters import GitHubAdapter
from ghdash.config import AppConfig, DashboardConfig
from ghdash.errors import GhDashError, SearchFailed
from ghdash.models import DashboardSnapshot
from ghdash.poller import run_poll_loop


def _snapshot(n: int) -> DashboardSnapshot:
    return DashboardSnapshot(viewer_identity="me", fetched_at=f"2024-03-01T00:00:0{n}Z")


@pytest.mark.asyncio
async def test_polls_until_max_ticks_and_keeps_going_after_errors() -> None:
    config = AppConfig(dashboard=DashboardConfig(poll_interval_ms=2500))
    outcomes: List[object] = [_snapshot(1), SearchFailed(RuntimeError("down")), _snapshot(3)]
    calls: List[dict] = []
    sleeps: List[float] = []
    seen: List[DashboardSnapshot] = []
    errors: List[GhDashError] = []

    async def fetch(token: str, **kwargs) -> DashboardSnapshot:
        calls.append({"token": token, **kwargs})
        outcome = outcomes[len(calls) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def sleep(seconds: float) -> None:
        sleeps.append(seconds)

    await run_poll_loop(
        config,
        "tok",
        on_snapshot=seen.append,
        on_error=errors.append,
        max_ticks=3,
        fetch=fetch,
        sleep=sleep,
    )

    assert [s.fetched_at for s in seen] == ["2024-03-01T00:00:01Z", "2024-03-01T00:00:03Z"]
    assert len(errors) == 1 and isinstance(errors[0], SearchFailed)
    assert sleeps == [2.5, 2.5]
    assert calls[0]["token"] == "tok"
    assert calls[0]["api_url"] == "https://api.github.com"


@pytest.mark.asyncio
async def test_async_snapshot_handler_is_awaited() -> None:
    seen: List[str] = []

    async def fetch(token: str, **kwargs) -> DashboardSnapshot:
        return _snapshot(1)

    async def handler(snapshot: DashboardSnapshot) -> None:
        seen.append(snapshot.viewer_identity)

    async def sleep(seconds: float) -> None:
        raise AssertionError("should not sleep after the last tick")

    await run_poll_loop(AppConfig(), "tok", on_snapshot=handler, max_ticks=1, fetch=fetch, sleep=sleep)

    assert seen == ["me"]


@pytest.mark.asyncio
async def test_every_tick_shares_one_adapter() -> None:
    adapters: List[object] = []

    async def fetch(token: str, **kwargs) -> DashboardSnapshot:
        adapters.append(kwargs["adapter"])
        return _snapshot(len(adapters))

    async def sleep(seconds: float) -> None:
        pass

    await run_poll_loop(AppConfig(), "tok", on_snapshot=lambda s: None, max_ticks=3, fetch=fetch, sleep=sleep)

    assert len(adapters) == 3
    assert isinstance(adapters[0], GitHubAdapter)
    assert adapters[0] is adapters[1] is adapters[2]
    assert adapters[0]._client.is_closed


@pytest.mark.asyncio
async def test_injected_adapter_is_used_and_left_open() -> None:
    adapters: List[object] = []

    async def fetch(token: str, **kwargs) -> DashboardSnapshot:
        adapters.append(kwargs["adapter"])
        return _snapshot(1)

    async with httpx.AsyncClient() as client:
        adapter = GitHubAdapter(token="tok", client=client)
        await run_poll_loop(AppConfig(), "tok", on_snapshot=lambda s: None, max_ticks=1, fetch=fetch, adapter=adapter)
        assert adapters == [adapter]
        assert not client.is_closed
