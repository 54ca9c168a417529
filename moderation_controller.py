"""Moderation actions submitted to the Discord API."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Any, Optional

from request_queue import RequestQueue


class ModerationController:
    def __init__(self, queue: RequestQueue) -> None:
        self.queue = queue

    def ban(self, target: Any, delete_message_days: int, reason: Optional[str] = None) -> asyncio.Task:
        """Queue a ban for ``target``; the result is only logged on failure."""
        history = timedelta(days=delete_message_days)
        kwargs = {"delete_message_seconds": int(history.total_seconds())}
        if reason:
            kwargs["reason"] = reason
        return self.queue.submit(target.ban(**kwargs), f"ban member {getattr(target, 'id', target)}")
