"""Software application routes."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..auth.routes import read_upload
from ..database.base import get_db
from ..dependencies import get_current_user, get_media
from ..integrations.media import MediaStorage
from .schemas import SoftwareApplicationResponse
from .service import create_application, delete_application, get_application, list_applications, update_application

router = APIRouter(tags=["software-applications"])


def _out(app) -> dict:
    return SoftwareApplicationResponse.model_validate(app).model_dump(mode="json")


@router.post("/addSoftwareApplication", status_code=201)
def add_application(
    name: str = Form(""),
    svg: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    app = create_application(db, media, name, read_upload(svg))
    db.commit()
    return JSONResponse(
        {"success": True, "message": "Software application created successfully", "softwareApplication": _out(app)},
        status_code=201,
    )


@router.get("/getSoftwareApplications")
def all_applications(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "softwareApplications": [_out(a) for a in list_applications(db)]})


@router.get("/getSoftwareApplication/{app_id}")
def one_application(app_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "softwareApplication": _out(get_application(db, app_id))})


@router.put("/updateSoftwareApplication/{app_id}")
def edit_application(
    app_id: str,
    name: str | None = Form(None),
    svg: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    app = update_application(db, media, app_id, name, read_upload(svg))
    db.commit()
    return JSONResponse(
        {"success": True, "message": "Software application updated successfully", "softwareApplication": _out(app)}
    )


@router.delete("/deleteSoftwareApplication/{app_id}")
def remove_application(
    app_id: str,
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    delete_application(db, media, app_id)
    db.commit()
    return JSONResponse({"success": True, "message": "Software application deleted successfully"})
