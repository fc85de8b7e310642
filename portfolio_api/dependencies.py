"""Shared FastAPI dependencies."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .auth.models import User
from .auth.tokens import TokenService
from .config import settings
from .database.base import get_db
from .errors import NotAuthenticated
from .integrations.media import MediaStorage
from .notifications.service import Mailer


def get_token_service(request: Request) -> TokenService:
    """Get the token service from app state."""
    return request.app.state.tokens


def get_media(request: Request) -> MediaStorage:
    """Get the media storage from app state."""
    return request.app.state.media


def get_mailer(request: Request) -> Mailer:
    """Get the mailer from app state."""
    return request.app.state.mailer


def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    auth = request.headers.get("Authorization", "")
    scheme, _, credentials = auth.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the session token to a live user, or reject the request.

    The user is kept on ``request.state`` for the rest of this request only.
    """
    token = _extract_token(request)
    if not token:
        raise NotAuthenticated()
    user_id = tokens.verify_session(token)
    user = db.get(User, user_id)
    if user is None:
        raise NotAuthenticated()
    request.state.user = user
    return user
