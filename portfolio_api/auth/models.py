"""User model for authentication and the public profile."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID

from ..database.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    gender = Column(String(10), nullable=False, default="others")
    phone = Column(String(30), default="")
    about_me = Column(Text, default="")

    avatar_public_id = Column(String(255), default="")
    avatar_url = Column(String(500), nullable=False)
    resume_public_id = Column(String(255), default="")
    resume_url = Column(String(500), nullable=False)

    portfolio_url = Column(String(500), default="")
    github_url = Column(String(500), default="")
    linkedin_url = Column(String(500), default="")

    # sha256 hex of the emailed reset token; always paired with the expiry
    reset_password_token = Column(String(64), nullable=True, index=True)
    reset_password_expire = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    @property
    def avatar(self) -> dict:
        return {"public_id": self.avatar_public_id, "url": self.avatar_url}

    @property
    def resume(self) -> dict:
        return {"public_id": self.resume_public_id, "url": self.resume_url}
