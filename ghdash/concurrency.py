"""Fail-fast fan-out/fan-in on asyncio.TaskGroup."""

import asyncio
from typing import Any, Awaitable, List


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """Run awaitables concurrently and return their results in input order.

    The first failure cancels the remaining tasks and is re-raised as
    itself, not wrapped in an ExceptionGroup. If several tasks fail before
    cancellation takes effect, the earliest one wins.
    """
    if not aws:
        return []
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_as_coro(aw)) for aw in aws]
    except BaseExceptionGroup as group:
        raise _first_leaf(group)
    return [task.result() for task in tasks]


async def _as_coro(aw: Awaitable[Any]) -> Any:
    return await aw


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
