"""Timeline routes, mounted under /timeline."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .schemas import TimeLineCreateRequest, TimeLineResponse, TimeLineUpdateRequest
from .service import create_timeline, delete_timeline, get_timeline, list_timelines, update_timeline

router = APIRouter(prefix="/timeline", tags=["timeline"])


def _out(entry) -> dict:
    data = TimeLineResponse.model_validate(entry).model_dump(mode="json")
    data["timeLine"] = entry.time_line
    return data


@router.post("/create", status_code=201)
def add_timeline(body: TimeLineCreateRequest, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    entry = create_timeline(db, body.title, body.description, body.period_from, body.period_to)
    db.commit()
    return JSONResponse(
        {"success": True, "message": "TimeLine created successfully", "timeLine": _out(entry)},
        status_code=201,
    )


@router.get("/getAllTimeLines")
def all_timelines(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "timeLines": [_out(t) for t in list_timelines(db)]})


@router.get("/{timeline_id}")
def one_timeline(timeline_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "timeLine": _out(get_timeline(db, timeline_id))})


@router.put("/update/{timeline_id}")
def edit_timeline(
    timeline_id: str,
    body: TimeLineUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    entry = update_timeline(db, timeline_id, **body.model_dump())
    db.commit()
    return JSONResponse({"success": True, "message": "TimeLine updated successfully", "timeLine": _out(entry)})


@router.delete("/delete/{timeline_id}")
def remove_timeline(timeline_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    delete_timeline(db, timeline_id)
    db.commit()
    return JSONResponse({"success": True, "message": "TimeLine deleted successfully"})
