"""Message request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MessageCreateRequest(BaseModel):
    sender_name: str = Field("", alias="senderName", max_length=255)
    subject: str = Field("", max_length=255)
    message: str = Field("", max_length=10_000)

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    id: UUID
    sender_name: str
    subject: str
    message: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
