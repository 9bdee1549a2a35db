"""Notification-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TelegramNotificationRequest(BaseModel):
    # Presence of kind-specific fields is checked by the dispatcher (400, not 422)
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    user_id: Optional[str] = Field(None, alias="userId")
    type: Optional[str] = None
    from_name: Optional[str] = Field(None, alias="fromName")
    thread_id: Optional[str] = Field(None, alias="threadId")
    idea_id: Optional[str] = Field(None, alias="ideaId")
    idea_title: Optional[str] = Field(None, alias="ideaTitle")
