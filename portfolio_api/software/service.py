"""Software application service."""

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..ids import get_or_404
from ..integrations.media import (
    SOFTWARE_APPLICATION_FOLDER,
    FileUpload,
    MediaRef,
    MediaStorage,
    discard_media,
    upload_checked,
)
from ..validation import MAX_TITLE_LENGTH, clean, require
from .models import SoftwareApplication


def create_application(db: Session, media: MediaStorage, name: str, icon: FileUpload | None) -> SoftwareApplication:
    if icon is None:
        raise ValidationError("SVG file is required")
    name = require(name, "Name", MAX_TITLE_LENGTH)

    ref = upload_checked(media, icon, SOFTWARE_APPLICATION_FOLDER, "SVG")
    app = SoftwareApplication(name=name, icon_public_id=ref.public_id, icon_url=ref.url)
    db.add(app)
    try:
        db.flush()
    except Exception:
        discard_media(media, ref)
        raise
    return app


def list_applications(db: Session) -> list[SoftwareApplication]:
    return db.query(SoftwareApplication).order_by(SoftwareApplication.created_at.asc()).all()


def get_application(db: Session, app_id: str) -> SoftwareApplication:
    return get_or_404(db, SoftwareApplication, app_id, "Software application not found")


def update_application(
    db: Session,
    media: MediaStorage,
    app_id: str,
    name: str | None = None,
    icon: FileUpload | None = None,
) -> SoftwareApplication:
    app = get_application(db, app_id)
    if clean(name):
        app.name = require(name, "Name", MAX_TITLE_LENGTH)

    old_icon = None
    new_ref = None
    if icon is not None:
        new_ref = upload_checked(media, icon, SOFTWARE_APPLICATION_FOLDER, "SVG")
        old_icon = MediaRef.stored(app.icon_public_id, app.icon_url)
        app.icon_public_id = new_ref.public_id
        app.icon_url = new_ref.url
    try:
        db.flush()
    except Exception:
        if new_ref is not None:
            discard_media(media, new_ref)
        raise

    if old_icon is not None and old_icon.public_id:
        discard_media(media, old_icon)
    return app


def delete_application(db: Session, media: MediaStorage, app_id: str) -> None:
    app = get_application(db, app_id)
    icon = MediaRef.stored(app.icon_public_id, app.icon_url)
    db.delete(app)
    db.flush()
    media.delete(icon)
