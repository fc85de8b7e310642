"""Software application model (tools shown on the portfolio)."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID

from ..database.base import Base


class SoftwareApplication(Base):
    __tablename__ = "software_applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    icon_public_id = Column(String(255), nullable=False)
    icon_url = Column(String(500), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    @property
    def icon(self) -> dict:
        return {"public_id": self.icon_public_id, "url": self.icon_url}
