"""Project service: CRUD with banner ownership and tag-set merging."""

import logging

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..ids import get_or_404
from ..integrations.media import (
    PROJECT_BANNER_FOLDER,
    FileUpload,
    MediaRef,
    MediaStorage,
    discard_media,
    upload_checked,
)
from ..validation import (
    MAX_STACK_LENGTH,
    MAX_TITLE_LENGTH,
    check_max_length,
    check_url,
    clean,
    merge_tags,
    normalize_tags,
    require,
)
from .models import Project

logger = logging.getLogger(__name__)


def _optional_url(value: str | None, label: str) -> str | None:
    value = clean(value)
    if not value:
        return None
    return check_url(value, label)


def create_project(
    db: Session,
    media: MediaStorage,
    *,
    title: str,
    description: str,
    banner: FileUpload | None,
    technologies: list[str] | None = None,
    live_link: str | None = None,
    git_link: str | None = None,
    stack: str | None = None,
    languages: list[str] | None = None,
    deployed: bool | None = None,
) -> Project:
    """Validate, upload the banner, then insert. No row without a banner."""
    if banner is None:
        raise ValidationError("Project banner image is required")
    title = require(title, "Title", MAX_TITLE_LENGTH)
    description = require(description, "Description")
    live_link = _optional_url(live_link, "Live link")
    git_link = _optional_url(git_link, "Git link")
    stack = clean(stack)
    check_max_length(stack, "Stack", MAX_STACK_LENGTH)

    ref = upload_checked(media, banner, PROJECT_BANNER_FOLDER, "Project banner")
    project = Project(
        title=title,
        description=description,
        technologies=normalize_tags(technologies),
        live_link=live_link or "",
        git_link=git_link or "",
        stack=stack,
        languages=normalize_tags(languages),
        deployed=bool(deployed),
        banner_public_id=ref.public_id,
        banner_url=ref.url,
    )
    db.add(project)
    try:
        db.flush()
    except Exception:
        discard_media(media, ref)
        raise
    return project


def list_projects(db: Session) -> list[Project]:
    return db.query(Project).order_by(Project.created_at.asc()).all()


def get_project(db: Session, project_id: str) -> Project:
    return get_or_404(db, Project, project_id, "Project not found")


def update_project(
    db: Session,
    media: MediaStorage,
    project_id: str,
    *,
    banner: FileUpload | None = None,
    title: str | None = None,
    description: str | None = None,
    technologies: list[str] | None = None,
    live_link: str | None = None,
    git_link: str | None = None,
    stack: str | None = None,
    languages: list[str] | None = None,
    deployed: bool | None = None,
    clear_technologies: bool = False,
    clear_languages: bool = False,
) -> Project:
    """Partial update. Blank scalars keep their value; tags are unioned
    into the existing sets unless the matching clear flag is set, in which
    case the supplied tags (possibly none) replace them."""
    project = get_project(db, project_id)

    changes: dict = {}
    if clean(title):
        changes["title"] = require(title, "Title", MAX_TITLE_LENGTH)
    if clean(description):
        changes["description"] = clean(description)
    if clean(live_link):
        changes["live_link"] = _optional_url(live_link, "Live link")
    if clean(git_link):
        changes["git_link"] = _optional_url(git_link, "Git link")
    if clean(stack):
        changes["stack"] = clean(stack)
        check_max_length(changes["stack"], "Stack", MAX_STACK_LENGTH)
    if deployed is not None:
        changes["deployed"] = deployed

    new_tech = normalize_tags(technologies)
    if clear_technologies:
        changes["technologies"] = new_tech
    elif new_tech:
        changes["technologies"] = merge_tags(project.technologies, new_tech)

    new_langs = normalize_tags(languages)
    if clear_languages:
        changes["languages"] = new_langs
    elif new_langs:
        changes["languages"] = merge_tags(project.languages, new_langs)

    old_banner = None
    new_ref = None
    if banner is not None:
        new_ref = upload_checked(media, banner, PROJECT_BANNER_FOLDER, "Project banner")
        old_banner = MediaRef.stored(project.banner_public_id, project.banner_url)
        changes.update(banner_public_id=new_ref.public_id, banner_url=new_ref.url)

    # JSON columns are replaced, never mutated in place
    for key, value in changes.items():
        setattr(project, key, value)
    try:
        db.flush()
    except Exception:
        if new_ref is not None:
            discard_media(media, new_ref)
        raise

    if old_banner is not None and old_banner.public_id:
        discard_media(media, old_banner)
    return project


def delete_project(db: Session, media: MediaStorage, project_id: str) -> None:
    """Delete the row and its remote banner. A failed remote delete aborts."""
    project = get_project(db, project_id)
    banner = MediaRef.stored(project.banner_public_id, project.banner_url)
    db.delete(project)
    db.flush()
    media.delete(banner)
    logger.info("Deleted project %s", project_id)
