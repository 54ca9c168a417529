"""Fire-and-forget submission of outbound platform requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Dict, Set


class RequestQueue:
    """Schedules requests without blocking the caller on their result.

    Each submitted request is wrapped in a task that the queue keeps a
    reference to until it finishes. Failures are logged, never raised back
    to whoever submitted the request.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self._pending: Set[asyncio.Task] = set()
        self._descriptions: Dict[asyncio.Task, str] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, request: Awaitable, description: str) -> asyncio.Task:
        task = asyncio.ensure_future(request)
        self._pending.add(task)
        self._descriptions[task] = description
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        description = self._descriptions.pop(task, "request")
        if task.cancelled():
            self.logger.debug("Request cancelled: %s", description)
            return
        error = task.exception()
        if error is not None:
            self.logger.error(
                "Request failed: %s: %s",
                description,
                error,
                exc_info=(type(error), error, error.__traceback__),
            )

    async def drain(self) -> None:
        """Wait for every outstanding request to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
