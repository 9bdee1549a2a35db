"""
Telegram notification endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from cofound_core.models import (
    DeliveryFailed,
    NotificationEvent,
    ProfileNotFound,
    SkippedNoHandle,
    ValidationFailed,
)
from cofound_core.services import NotificationDispatcher

from backend.dependencies import get_dispatcher
from backend.schemas.notifications import TelegramNotificationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.post("/telegram")
def send_telegram_notification(
    request: TelegramNotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Send a connection event to the target user's linked Telegram chat.

    Returns:
        200 {"success": true} when sent
        200 {"success": false, "skipped": true} when no Telegram account is linked
        400 for missing/invalid fields, 404 for an unknown user, 502 when delivery fails
    """
    event = NotificationEvent(
        user_id=request.user_id or "",
        kind=request.type or "",
        sender_name=request.from_name or "",
        thread_id=request.thread_id,
        idea_id=request.idea_id,
        idea_title=request.idea_title,
    )

    try:
        result = dispatcher.dispatch(event)
    except Exception as e:
        logger.exception(f"Telegram notification error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    if isinstance(result, ProfileNotFound):
        raise HTTPException(status_code=404, detail=result.reason)
    if isinstance(result, ValidationFailed):
        raise HTTPException(status_code=400, detail=result.reason)
    if isinstance(result, SkippedNoHandle):
        return {"success": False, "skipped": True, "reason": result.reason}
    if isinstance(result, DeliveryFailed):
        return JSONResponse(
            status_code=502,
            content={"success": False, "reason": "Failed to send Telegram message"},
        )
    return {"success": True}
