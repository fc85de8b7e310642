"""Skill response schema."""

from uuid import UUID

from pydantic import BaseModel

from ..integrations.media import MediaRefOut


class SkillResponse(BaseModel):
    id: UUID
    title: str
    proficiency: str
    icon: MediaRefOut

    model_config = {"from_attributes": True}
