"""Portfolio project model."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID

from ..database.base import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    technologies = Column(JSON, default=list)  # ordered, no duplicates
    live_link = Column(String(500), default="")
    git_link = Column(String(500), default="")
    stack = Column(String(100), default="")
    languages = Column(JSON, default=list)  # ordered, no duplicates
    deployed = Column(Boolean, default=False, nullable=False)
    banner_public_id = Column(String(255), nullable=False)
    banner_url = Column(String(500), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    @property
    def banner(self) -> dict:
        return {"public_id": self.banner_public_id, "url": self.banner_url}
