"""Connection-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ConnectionRespondRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requester_id: Optional[str] = Field(None, alias="requesterId")
    connection_id: Optional[str] = Field(None, alias="connectionId")
    action: Optional[str] = None
