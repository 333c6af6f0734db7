"""Helpers for awaiting fetch tasks owned by queries and overlays."""

import asyncio
from typing import Optional


async def wait_settled(*tasks: Optional[asyncio.Task]) -> None:
    """Wait until every task has finished.

    A task cancelled because a newer intent replaced it counts as finished,
    so the caller carries on instead of inheriting the cancellation.
    Cancelling the caller still cancels the caller. Any other failure is
    re-raised.
    """
    pending = [task for task in tasks if task is not None]
    if not pending:
        return
    await asyncio.wait(pending)
    for task in pending:
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()


__all__ = ["wait_settled"]
