"""Message service: contact-form submissions. Messages are never edited."""

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..ids import get_or_404
from ..validation import MAX_TITLE_LENGTH, check_length, check_max_length, clean
from .models import Message


def create_message(db: Session, sender_name: str, subject: str, message: str) -> Message:
    sender_name, subject, message = clean(sender_name), clean(subject), clean(message)
    if not sender_name or not subject or not message:
        raise ValidationError("Please fill all the fields")
    check_length(sender_name, "Sender name", 2)
    check_max_length(sender_name, "Sender name", MAX_TITLE_LENGTH)
    check_length(subject, "Subject", 2)
    check_max_length(subject, "Subject", MAX_TITLE_LENGTH)
    check_length(message, "Message", 2)

    msg = Message(sender_name=sender_name, subject=subject, message=message)
    db.add(msg)
    db.flush()
    return msg


def list_messages(db: Session) -> list[Message]:
    return db.query(Message).order_by(Message.created_at.desc()).all()


def get_message(db: Session, message_id: str) -> Message:
    return get_or_404(db, Message, message_id, "Message not found")


def delete_message(db: Session, message_id: str) -> None:
    db.delete(get_message(db, message_id))
    db.flush()
