"""Structured fan-out for concurrent sub-queries.

:func:`gather_or_cancel` is the join-all-or-cancel counterpart of
``asyncio.gather``: every awaitable is scheduled immediately, the first
failure cancels the siblings that are still running, and cancelling the
caller cancels all of them before the cancellation propagates.  No task
outlives the call.

When more than one awaitable has failed by the time the join completes,
the error of the earliest awaitable in argument order wins.  Callers rely
on this to make error classification follow a specific sub-query.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable


async def _cancel_and_drain(tasks: list[asyncio.Future[Any]]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run *aws* concurrently and return their results in argument order.

    Raises
    ------
    BaseException
        The exception of the first failed awaitable (in argument order).
        Siblings still running at that point are cancelled and awaited.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        _done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _cancel_and_drain(tasks)
        raise

    if pending:
        await _cancel_and_drain(list(pending))

    for task in tasks:
        if task.cancelled():
            continue
        exc = task.exception()
        if exc is not None:
            raise exc

    return [task.result() for task in tasks]
