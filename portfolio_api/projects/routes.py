"""Project routes. Listing and reading are public."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..auth.routes import read_upload
from ..database.base import get_db
from ..dependencies import get_current_user, get_media
from ..integrations.media import MediaStorage
from .schemas import ProjectResponse
from .service import create_project, delete_project, get_project, list_projects, update_project

router = APIRouter(tags=["projects"])


def _out(project) -> dict:
    return ProjectResponse.model_validate(project).model_dump(mode="json")


@router.post("/addProject", status_code=201)
def add_project(
    title: str = Form(""),
    description: str = Form(""),
    technologies: list[str] = Form([]),
    live_link: str = Form("", alias="liveLink"),
    git_link: str = Form("", alias="gitLink"),
    stack: str = Form(""),
    languages: list[str] = Form([]),
    deployed: bool = Form(False),
    project_banner: UploadFile | None = File(None, alias="projectBanner"),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    project = create_project(
        db,
        media,
        title=title,
        description=description,
        banner=read_upload(project_banner),
        technologies=technologies,
        live_link=live_link,
        git_link=git_link,
        stack=stack,
        languages=languages,
        deployed=deployed,
    )
    db.commit()
    return JSONResponse(
        {"success": True, "message": "Project created successfully", "project": _out(project)},
        status_code=201,
    )


@router.get("/getAllProjects")
def all_projects(db: Session = Depends(get_db)):
    return JSONResponse({"success": True, "projects": [_out(p) for p in list_projects(db)]})


@router.get("/getProject/{project_id}")
def one_project(project_id: str, db: Session = Depends(get_db)):
    return JSONResponse({"success": True, "project": _out(get_project(db, project_id))})


@router.put("/updateProject/{project_id}")
def edit_project(
    project_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    technologies: list[str] | None = Form(None),
    live_link: str | None = Form(None, alias="liveLink"),
    git_link: str | None = Form(None, alias="gitLink"),
    stack: str | None = Form(None),
    languages: list[str] | None = Form(None),
    deployed: bool | None = Form(None),
    clear_technologies: bool = Form(False, alias="clearTechnologies"),
    clear_languages: bool = Form(False, alias="clearLanguages"),
    project_banner: UploadFile | None = File(None, alias="projectBanner"),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    project = update_project(
        db,
        media,
        project_id,
        banner=read_upload(project_banner),
        title=title,
        description=description,
        technologies=technologies,
        live_link=live_link,
        git_link=git_link,
        stack=stack,
        languages=languages,
        deployed=deployed,
        clear_technologies=clear_technologies,
        clear_languages=clear_languages,
    )
    db.commit()
    return JSONResponse({"success": True, "message": "Project updated successfully", "updatedProject": _out(project)})


@router.delete("/deleteProject/{project_id}")
def remove_project(
    project_id: str,
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    delete_project(db, media, project_id)
    db.commit()
    return JSONResponse({"success": True, "message": "Project deleted successfully"})
