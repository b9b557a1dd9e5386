from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from starlette import status

from app.models.queues import EnqueueResponse, OrderMessage, PendingMessagesResponse
from app.services.dependencies import get_order_queue_service
from app.services.queue_message_service import QueueMessageService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=EnqueueResponse, status_code=status.HTTP_202_ACCEPTED)
async def submit_order(
    payload: OrderMessage,
    svc: QueueMessageService = Depends(get_order_queue_service),
) -> EnqueueResponse:
    message_id = await svc.send(payload)
    return EnqueueResponse(queue_name=svc.queue_name, message_id=message_id)


@router.get("/pending", response_model=PendingMessagesResponse)
async def pending_orders(
    max_messages: int = Query(default=10, ge=1, le=QueueMessageService.MAX_PEEK_MESSAGES),
    svc: QueueMessageService = Depends(get_order_queue_service),
) -> PendingMessagesResponse:
    messages = await svc.peek(max_messages=max_messages)
    return PendingMessagesResponse(queue_name=svc.queue_name, count=len(messages), messages=messages)
