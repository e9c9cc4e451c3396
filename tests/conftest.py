"""Shared fixtures: fake GitHub API and an adapter wired to it."""

import httpx
import pytest
import pytest_asyncio
from helpers import API, FakeGitHub

from ghdash.adapters import GitHubAdapter


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest_asyncio.fixture
async def adapter(fake_github: FakeGitHub):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_github.handler))
    async with client:
        yield GitHubAdapter(token="test-token", api_url=API, client=client)
