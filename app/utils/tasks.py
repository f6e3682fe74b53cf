# app/utils/tasks.py
from __future__ import annotations
from typing import Awaitable, Set
import asyncio
import logging

logger = logging.getLogger(__name__)

# Strong refs: the event loop only keeps weak refs to running tasks
_pending: Set[asyncio.Task] = set()


def _on_done(task: asyncio.Task) -> None:
    _pending.discard(task)
    if task.cancelled():
        logger.debug("background task cancelled name=%s", task.get_name())
        return
    if (exc := task.exception()) is not None:
        logger.warning("background task failed name=%s err=%r", task.get_name(), exc)


def fire_and_forget(coro: Awaitable, *, name: str) -> asyncio.Task:
    """
    Schedule `coro` detached from the caller.
    The caller never awaits it; failures are logged here and go nowhere else.
    """
    task = asyncio.ensure_future(coro)
    task.set_name(name)
    _pending.add(task)
    task.add_done_callback(_on_done)
    return task


def pending_count() -> int:
    return len(_pending)


async def drain(timeout: float | None = None) -> None:
    """Wait for in-flight background tasks (shutdown, tests). Leftovers are cancelled on timeout."""
    if not _pending:
        return
    tasks = list(_pending)
    _, not_done = await asyncio.wait(tasks, timeout=timeout)
    for t in not_done:
        t.cancel()
    if not_done:
        logger.warning("background drain timed out, cancelled=%s", len(not_done))
        await asyncio.gather(*not_done, return_exceptions=True)
