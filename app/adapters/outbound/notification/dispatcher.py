# app/adapters/outbound/notification/dispatcher.py

import asyncio
import logging
from typing import Set

from app.application.ports.outbound import INotificationSender

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Fire-and-forget delivery on top of a notification sender.

    `dispatch` schedules the send on the running loop and returns at once.
    Failures are logged and never reach the caller; there is no retry.
    References to pending tasks are kept so they are not garbage collected
    and can be awaited with `drain` on shutdown.
    """

    def __init__(self, sender: INotificationSender):
        self.sender = sender
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, to: str, subject: str, body: str) -> asyncio.Task:
        task = asyncio.create_task(self._deliver(to, subject, body))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver(self, to: str, subject: str, body: str) -> None:
        try:
            await self.sender.send(to, subject, body)
        except Exception:
            logger.exception(f"Failed to deliver notification to {to}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every notification still in flight."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
