"""Shared test fixtures."""

import os

# Must be set before portfolio_api.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import uuid  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from portfolio_api.audit.models import AuditLog  # noqa: E402
from portfolio_api.auth.models import User  # noqa: E402
from portfolio_api.auth.service import hash_password  # noqa: E402
from portfolio_api.auth.tokens import TokenService  # noqa: E402
from portfolio_api.database.base import Base, get_db  # noqa: E402
from portfolio_api.errors import DeliveryError, UploadError  # noqa: E402
from portfolio_api.integrations.media import MediaRef  # noqa: E402
from portfolio_api.messages.models import Message  # noqa: E402
from portfolio_api.projects.models import Project  # noqa: E402
from portfolio_api.skills.models import Skill  # noqa: E402
from portfolio_api.software.models import SoftwareApplication  # noqa: E402
from portfolio_api.timeline.models import TimeLine  # noqa: E402

# Models must be imported so Base.metadata.create_all() sees all tables.
_ALL_MODELS = [AuditLog, Message, Project, Skill, SoftwareApplication, TimeLine]

TEST_PASSWORD = "Secret#123"


class FakeMediaStorage:
    """In-memory MediaStorage double recording every call."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, str]] = []
        self.deleted: list[str] = []
        self.deleted_types: list[str] = []
        self.fail_folders: set[str] = set()
        self.fail_delete = False
        self.raw_folders: set[str] = set()

    def upload(self, data: bytes, folder: str, filename: str = "") -> MediaRef:
        if folder in self.fail_folders:
            raise UploadError(f"Failed to upload file to {folder}")
        public_id = f"{folder}/{uuid.uuid4().hex[:12]}"
        resource_type = "raw" if folder in self.raw_folders else "image"
        self.uploads.append((folder, public_id))
        return MediaRef(
            public_id=public_id,
            url=f"https://res.cloudinary.com/demo/{resource_type}/upload/v1/{public_id}",
            resource_type=resource_type,
        )

    def delete(self, ref: MediaRef) -> None:
        if self.fail_delete:
            raise UploadError("Failed to delete remote file")
        self.deleted.append(ref.public_id)
        self.deleted_types.append(ref.resource_type)


class FakeMailer:
    """Mailer double; set ``fail`` to simulate an SMTP outage."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise DeliveryError("Error sending email: connection refused")
        self.sent.append((to, subject, body))


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def media():
    return FakeMediaStorage()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def tokens():
    return TokenService("test-jwt-secret")


@pytest.fixture
def test_user(db_session):
    """Create a test user with a real bcrypt hash of TEST_PASSWORD."""
    user = User(
        id=uuid.uuid4(),
        first_name="Ana",
        last_name="Silva",
        email="ana@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        avatar_public_id="PORTFOLIO_AVATAR/ana",
        avatar_url="https://res.cloudinary.com/demo/image/upload/v1/PORTFOLIO_AVATAR/ana",
        resume_public_id="PORTFOLIO_RESUME/ana",
        resume_url="https://res.cloudinary.com/demo/raw/upload/v1/PORTFOLIO_RESUME/ana",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def client(db_session, media, mailer, tokens):
    """TestClient with patched lifespan: no migrations, fake collaborators, test DB."""
    from portfolio_api.main import create_app

    @asynccontextmanager
    async def _test_lifespan(app):
        app.state.tokens = tokens
        app.state.media = media
        app.state.mailer = mailer
        yield

    def _test_db():
        yield db_session

    with patch("portfolio_api.main.lifespan", _test_lifespan):
        app = create_app()
        app.dependency_overrides[get_db] = _test_db
        with TestClient(app, raise_server_exceptions=False) as c:
            yield c


@pytest.fixture
def auth_client(client, test_user, tokens):
    """TestClient carrying a valid session token for test_user."""
    client.headers["Authorization"] = f"Bearer {tokens.issue_session(test_user.id)}"
    return client
