"""Session and password-reset tokens.

Session tokens are HS256 JWTs carrying the user id in ``sub``. Reset tokens
are random hex strings; only their sha256 digest is ever persisted, so a
lookup is a plain equality match on the stored digest.
"""

import hashlib
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import NamedTuple
from uuid import UUID

import jwt

from ..errors import ConfigurationError, InvalidToken

RESET_TOKEN_BYTES = 32


class ResetToken(NamedTuple):
    plain: str
    hashed: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies session and reset tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        session_ttl: timedelta = timedelta(days=3),
        reset_ttl: timedelta = timedelta(minutes=15),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock
        self.session_ttl = session_ttl
        self.reset_ttl = reset_ttl

    def issue_session(self, user_id: UUID) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.session_ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_session(self, token: str) -> UUID:
        """Return the user id in a valid token; every failure is InvalidToken."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
            return UUID(payload["sub"])
        except (jwt.InvalidTokenError, ValueError, TypeError) as exc:
            raise InvalidToken() from exc

    def issue_reset_token(self) -> ResetToken:
        plain = secrets.token_hex(RESET_TOKEN_BYTES)
        return ResetToken(plain, self.match_reset_token(plain), self._clock() + self.reset_ttl)

    @staticmethod
    def match_reset_token(plain: str) -> str:
        return hashlib.sha256(plain.encode()).hexdigest()
