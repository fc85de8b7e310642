"""Project response schema."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..integrations.media import MediaRefOut


class ProjectResponse(BaseModel):
    id: UUID
    title: str
    description: str
    technologies: list[str] = Field(default_factory=list)
    live_link: str | None = ""
    git_link: str | None = ""
    stack: str | None = ""
    languages: list[str] = Field(default_factory=list)
    deployed: bool = False
    banner: MediaRefOut
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
