"""Skill routes."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..auth.routes import read_upload
from ..database.base import get_db
from ..dependencies import get_current_user, get_media
from ..integrations.media import MediaStorage
from .schemas import SkillResponse
from .service import create_skill, delete_skill, get_skill, list_skills, update_skill

router = APIRouter(tags=["skills"])


def _out(skill) -> dict:
    return SkillResponse.model_validate(skill).model_dump(mode="json")


@router.post("/addSkill", status_code=201)
def add_skill(
    title: str = Form(""),
    proficiency: str = Form(""),
    svg: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    skill = create_skill(db, media, title, proficiency, read_upload(svg))
    db.commit()
    return JSONResponse(
        {"success": True, "message": "Skill created successfully", "skill": _out(skill)},
        status_code=201,
    )


@router.get("/getAllSkills")
def all_skills(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "skills": [_out(s) for s in list_skills(db)]})


@router.get("/getSkill/{skill_id}")
def one_skill(skill_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "skill": _out(get_skill(db, skill_id))})


@router.put("/updateSkill/{skill_id}")
def edit_skill(
    skill_id: str,
    title: str | None = Form(None),
    proficiency: str | None = Form(None),
    svg: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    skill = update_skill(db, media, skill_id, title, proficiency, read_upload(svg))
    db.commit()
    return JSONResponse({"success": True, "message": "Skill updated successfully", "skill": _out(skill)})


@router.delete("/deleteSkill/{skill_id}")
def remove_skill(
    skill_id: str,
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    delete_skill(db, media, skill_id)
    db.commit()
    return JSONResponse({"success": True, "message": "Skill deleted successfully"})
