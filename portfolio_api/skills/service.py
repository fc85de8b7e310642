"""Skill service."""

import logging

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..ids import get_or_404
from ..integrations.media import SKILL_FOLDER, FileUpload, MediaRef, MediaStorage, discard_media, upload_checked
from ..validation import MAX_TITLE_LENGTH, clean, normalize_proficiency, require
from .models import Skill

logger = logging.getLogger(__name__)


def create_skill(db: Session, media: MediaStorage, title: str, proficiency: str, icon: FileUpload | None) -> Skill:
    if icon is None:
        raise ValidationError("SVG file is required")
    title = require(title, "Title", MAX_TITLE_LENGTH)
    proficiency = normalize_proficiency(proficiency)

    ref = upload_checked(media, icon, SKILL_FOLDER, "SVG")
    skill = Skill(title=title, proficiency=proficiency, icon_public_id=ref.public_id, icon_url=ref.url)
    db.add(skill)
    try:
        db.flush()
    except Exception:
        discard_media(media, ref)
        raise
    return skill


def list_skills(db: Session) -> list[Skill]:
    return db.query(Skill).order_by(Skill.created_at.asc()).all()


def get_skill(db: Session, skill_id: str) -> Skill:
    return get_or_404(db, Skill, skill_id, "Skill not found")


def update_skill(
    db: Session,
    media: MediaStorage,
    skill_id: str,
    title: str | None = None,
    proficiency: str | None = None,
    icon: FileUpload | None = None,
) -> Skill:
    skill = get_skill(db, skill_id)
    if clean(title):
        skill.title = require(title, "Title", MAX_TITLE_LENGTH)
    if clean(proficiency):
        skill.proficiency = normalize_proficiency(proficiency)

    old_icon = None
    new_ref = None
    if icon is not None:
        new_ref = upload_checked(media, icon, SKILL_FOLDER, "SVG")
        old_icon = MediaRef.stored(skill.icon_public_id, skill.icon_url)
        skill.icon_public_id = new_ref.public_id
        skill.icon_url = new_ref.url
    try:
        db.flush()
    except Exception:
        if new_ref is not None:
            discard_media(media, new_ref)
        raise

    if old_icon is not None and old_icon.public_id:
        discard_media(media, old_icon)
    return skill


def delete_skill(db: Session, media: MediaStorage, skill_id: str) -> None:
    skill = get_skill(db, skill_id)
    icon = MediaRef.stored(skill.icon_public_id, skill.icon_url)
    db.delete(skill)
    db.flush()
    media.delete(icon)
    logger.info("Deleted skill %s", skill_id)
