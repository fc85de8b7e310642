"""Software application response schema."""

from uuid import UUID

from pydantic import BaseModel

from ..integrations.media import MediaRefOut


class SoftwareApplicationResponse(BaseModel):
    id: UUID
    name: str
    icon: MediaRefOut

    model_config = {"from_attributes": True}
