"""Timeline request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class TimeLineCreateRequest(BaseModel):
    title: str = Field("", max_length=255)
    description: str = Field("", max_length=5000)
    period_from: str = Field("", alias="from", max_length=50)
    period_to: str = Field("", alias="to", max_length=50)

    model_config = {"populate_by_name": True}


class TimeLineUpdateRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    period_from: str | None = Field(None, alias="from", max_length=50)
    period_to: str | None = Field(None, alias="to", max_length=50)

    model_config = {"populate_by_name": True}


class TimeLineResponse(BaseModel):
    id: UUID
    title: str
    description: str
    period_from: str
    period_to: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
