from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from app.models.queues import QueuedMessage
from app.services.storage_errors import StorageServiceError

logger = logging.getLogger(__name__)


class QueueMessageService:
    """Enqueues JSON work items for downstream processors and peeks at the backlog.

    Messages are never dequeued here; consumers live outside this app.
    """

    MAX_PEEK_MESSAGES: int = 32

    def __init__(self, queue: Any, *, queue_name: str) -> None:
        self._queue = queue
        self._queue_name = queue_name

    @property
    def queue_name(self) -> str:
        return self._queue_name

    async def send(self, message: BaseModel) -> str:
        try:
            sent = await self._queue.send_message(message.model_dump_json())
            return str(sent.id)
        except Exception as exc:
            logger.exception("Queue send failed (queue=%s)", self._queue_name)
            raise StorageServiceError(f"Failed to enqueue message on {self._queue_name}") from exc

    async def peek(self, *, max_messages: int = 10) -> list[QueuedMessage]:
        if max_messages < 1 or max_messages > self.MAX_PEEK_MESSAGES:
            raise ValueError(f"max_messages must be between 1 and {self.MAX_PEEK_MESSAGES}")

        try:
            messages = await self._queue.peek_messages(max_messages=max_messages)
            return [QueuedMessage.from_queue_message(m) for m in messages]
        except Exception as exc:
            logger.exception("Queue peek failed (queue=%s)", self._queue_name)
            raise StorageServiceError(f"Failed to peek messages on {self._queue_name}") from exc
