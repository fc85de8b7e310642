"""Profile service: profile edits, password changes and the reset-token flow.

Reset flow states on a user row:
- no reset pending: reset_password_token and reset_password_expire are NULL
- reset pending: both set, expiry in the future
- consumed: the conditional UPDATE in reset_password wrote the new hash and
  cleared both fields in one statement
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from ..auth.models import User
from ..auth.service import get_user_by_email, hash_password, verify_password
from ..auth.tokens import TokenService
from ..errors import AuthenticationError, DeliveryError, InvalidResetToken, ValidationError
from ..integrations.media import (
    AVATAR_FOLDER,
    RESUME_FOLDER,
    FileUpload,
    MediaRef,
    MediaStorage,
    discard_media,
    upload_checked,
)
from ..notifications.service import Mailer, build_reset_email
from ..validation import check_strong_password, clean, validate_profile_fields

logger = logging.getLogger(__name__)


def update_profile(
    db: Session,
    media: MediaStorage,
    user: User,
    fields: dict,
    avatar: FileUpload | None = None,
    resume: FileUpload | None = None,
) -> User:
    """Apply a partial profile edit.

    New files are uploaded before the row is written; the previous assets are
    removed only once the new references are flushed.
    """
    changes = validate_profile_fields(fields)
    if not changes and avatar is None and resume is None:
        raise ValidationError("Request body is empty or invalid")

    uploaded: list[MediaRef] = []
    replaced: list[MediaRef] = []
    try:
        if avatar is not None:
            ref = upload_checked(media, avatar, AVATAR_FOLDER, "Avatar")
            uploaded.append(ref)
            replaced.append(MediaRef.stored(user.avatar_public_id, user.avatar_url))
            changes.update(avatar_public_id=ref.public_id, avatar_url=ref.url)
        if resume is not None:
            ref = upload_checked(media, resume, RESUME_FOLDER, "Resume")
            uploaded.append(ref)
            replaced.append(MediaRef.stored(user.resume_public_id, user.resume_url))
            changes.update(resume_public_id=ref.public_id, resume_url=ref.url)

        for key, value in changes.items():
            setattr(user, key, value)
        db.flush()
    except Exception:
        for ref in uploaded:
            discard_media(media, ref)
        raise

    for old in replaced:
        if old.public_id:
            discard_media(media, old)
    return user


def update_password(db: Session, user: User, old_password: str, new_password: str, confirm: str) -> None:
    if not old_password or not new_password or not confirm:
        raise ValidationError("Old password, new password, and confirmation are required")
    if new_password != confirm:
        raise ValidationError("New password and confirmation do not match")
    if not verify_password(old_password, user.password_hash):
        raise AuthenticationError()
    check_strong_password(new_password)

    user.password_hash = hash_password(new_password)
    db.flush()


def request_password_reset(
    db: Session,
    tokens: TokenService,
    mailer: Mailer,
    email: str,
    reset_url_base: str,
) -> bool:
    """Start a reset for ``email``. Returns False when no such user exists.

    The token digest is committed before the email goes out so the link is
    valid on arrival. A failed dispatch clears the pending reset again.
    """
    if not clean(email):
        raise ValidationError("Email is required")

    user = get_user_by_email(db, email)
    if not user:
        logger.info("Password reset requested for unknown email")
        return False

    reset = tokens.issue_reset_token()
    user.reset_password_token = reset.hashed
    user.reset_password_expire = reset.expires_at
    db.commit()

    subject, body = build_reset_email(f"{reset_url_base.rstrip('/')}/password/reset/{reset.plain}")
    try:
        mailer.send(user.email, subject, body)
    except DeliveryError:
        user.reset_password_token = None
        user.reset_password_expire = None
        db.commit()
        raise

    logger.info("Password reset pending for user %s", user.id)
    return True


def reset_password(
    db: Session,
    tokens: TokenService,
    plain_token: str,
    new_password: str,
    confirm: str,
) -> User:
    """Consume a reset token and set a new password.

    Unknown, expired and already used tokens all raise InvalidResetToken.
    """
    if not new_password or not confirm:
        raise ValidationError("New password and confirmation are required")
    if new_password != confirm:
        raise ValidationError("New password and confirmation do not match")
    check_strong_password(new_password)

    hashed = tokens.match_reset_token(plain_token)
    now = datetime.now(UTC)
    user = (
        db.query(User)
        .filter(User.reset_password_token == hashed, User.reset_password_expire > now)
        .first()
    )
    if not user:
        raise InvalidResetToken()

    # Compare-and-clear: only one concurrent consumer can match the digest
    updated = (
        db.query(User)
        .filter(
            User.id == user.id,
            User.reset_password_token == hashed,
            User.reset_password_expire > now,
        )
        .update(
            {
                User.password_hash: hash_password(new_password),
                User.reset_password_token: None,
                User.reset_password_expire: None,
            },
            synchronize_session=False,
        )
    )
    if updated != 1:
        raise InvalidResetToken()

    db.refresh(user)
    logger.info("Password reset completed for user %s", user.id)
    return user
