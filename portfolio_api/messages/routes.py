"""Message routes. Sending is public; reading and deleting require a session."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..config import settings
from ..database.base import get_db
from ..dependencies import get_current_user
from ..rate_limit import limiter
from .schemas import MessageCreateRequest, MessageResponse
from .service import create_message, delete_message, get_message, list_messages

router = APIRouter(tags=["messages"])


def _out(msg) -> dict:
    return MessageResponse.model_validate(msg).model_dump(mode="json")


@router.post("/send", status_code=201)
@limiter.limit(settings.rate_limit_contact)
def send_message(request: Request, body: MessageCreateRequest, db: Session = Depends(get_db)):
    create_message(db, body.sender_name, body.subject, body.message)
    db.commit()
    return JSONResponse({"success": True, "message": "Message sent successfully"}, status_code=201)


@router.get("/getAllMessages")
def all_messages(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "messages": [_out(m) for m in list_messages(db)]})


@router.get("/getMessage/{message_id}")
def one_message(message_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "data": _out(get_message(db, message_id))})


@router.delete("/deleteMessage/{message_id}")
def remove_message(message_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    delete_message(db, message_id)
    db.commit()
    return JSONResponse({"success": True, "message": "Message deleted successfully"})
