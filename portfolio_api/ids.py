"""Id parsing and lookup helpers shared by the entity services."""

from uuid import UUID

from sqlalchemy.orm import Session

from .errors import NotFoundError


def to_uuid(value: str | UUID | None) -> UUID | None:
    """Convert string to UUID, returning None on failure."""
    if not value:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, AttributeError):
        return None


def get_or_404(db: Session, model, entity_id: str | UUID, message: str):
    """Load a row by primary key; malformed ids count as not found."""
    uid = to_uuid(entity_id)
    entity = db.get(model, uid) if uid is not None else None
    if entity is None:
        raise NotFoundError(message)
    return entity
