"""Authentication service: password hashing, registration, credential checks."""

import logging

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import ConflictError, ValidationError
from ..integrations.media import (
    AVATAR_FOLDER,
    RESUME_FOLDER,
    FileUpload,
    MediaStorage,
    check_upload_size,
    discard_media,
)
from ..validation import MAX_PASSWORD_BYTES, normalize_email, validate_signup
from .models import User

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    encoded = password.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode()


def verify_password(plain: str, hashed: str) -> bool:
    encoded = plain.encode()
    # No stored hash can match an input bcrypt refuses to hash
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode())


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Verify credentials and return user, or None if invalid."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def register_user(
    db: Session,
    media: MediaStorage,
    fields: dict,
    avatar: FileUpload | None,
    resume: FileUpload | None,
) -> User:
    """Create a user after uploading avatar and resume.

    Nothing is persisted unless both uploads succeed; uploads are removed
    again when the insert loses a uniqueness race.
    """
    data = validate_signup(fields)
    if avatar is None or resume is None:
        raise ValidationError("Avatar and Resume are required")
    check_upload_size(avatar.data, "Avatar")
    check_upload_size(resume.data, "Resume")

    if get_user_by_email(db, data["email"]):
        raise ConflictError("Email is already registered")

    # Sizes were checked above, before either upload
    avatar_ref = media.upload(avatar.data, AVATAR_FOLDER, avatar.filename)
    try:
        resume_ref = media.upload(resume.data, RESUME_FOLDER, resume.filename)
    except Exception:
        discard_media(media, avatar_ref)
        raise

    password = data.pop("password")
    user = User(
        **data,
        password_hash=hash_password(password),
        avatar_public_id=avatar_ref.public_id,
        avatar_url=avatar_ref.url,
        resume_public_id=resume_ref.public_id,
        resume_url=resume_ref.url,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        discard_media(media, avatar_ref)
        discard_media(media, resume_ref)
        raise ConflictError("Email is already registered") from exc

    logger.info("Registered user %s", user.id)
    return user
