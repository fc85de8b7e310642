"""Timeline service."""

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..ids import get_or_404
from ..validation import MAX_PERIOD_LENGTH, MAX_TITLE_LENGTH, check_max_length, clean
from .models import TimeLine

LIMITS = {
    "title": ("Title", MAX_TITLE_LENGTH),
    "period_from": ("From", MAX_PERIOD_LENGTH),
    "period_to": ("To", MAX_PERIOD_LENGTH),
}


def _check_limits(values: dict[str, str]) -> None:
    for key, (label, max_len) in LIMITS.items():
        if values.get(key):
            check_max_length(values[key], label, max_len)


def create_timeline(db: Session, title: str, description: str, period_from: str, period_to: str) -> TimeLine:
    values = [clean(v) for v in (title, description, period_from, period_to)]
    if not all(values):
        raise ValidationError("Please fill all the fields")
    title, description, period_from, period_to = values
    _check_limits({"title": title, "period_from": period_from, "period_to": period_to})

    entry = TimeLine(title=title, description=description, period_from=period_from, period_to=period_to)
    db.add(entry)
    db.flush()
    return entry


def list_timelines(db: Session) -> list[TimeLine]:
    return db.query(TimeLine).order_by(TimeLine.created_at.desc()).all()


def get_timeline(db: Session, timeline_id: str) -> TimeLine:
    return get_or_404(db, TimeLine, timeline_id, "TimeLine not found")


def update_timeline(db: Session, timeline_id: str, **fields: str | None) -> TimeLine:
    """Partial update; only non-blank values among title, description,
    period_from and period_to are applied."""
    entry = get_timeline(db, timeline_id)
    values = {key: clean(fields.get(key)) for key in ("title", "description", "period_from", "period_to")}
    _check_limits(values)
    for key, value in values.items():
        if value:
            setattr(entry, key, value)
    db.flush()
    return entry


def delete_timeline(db: Session, timeline_id: str) -> None:
    db.delete(get_timeline(db, timeline_id))
    db.flush()
