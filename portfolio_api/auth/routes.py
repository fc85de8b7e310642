"""Authentication routes: register, login, logout."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..config import settings
from ..database.base import get_db
from ..dependencies import get_media, get_token_service
from ..errors import AuthenticationError
from ..integrations.media import FileUpload, MediaStorage
from ..rate_limit import limiter
from .schemas import LoginRequest, UserResponse
from .service import authenticate_user, register_user
from .tokens import TokenService

router = APIRouter(tags=["auth"])


def read_upload(upload: UploadFile | None) -> FileUpload | None:
    if upload is None or not upload.filename:
        return None
    return FileUpload(data=upload.file.read(), filename=upload.filename)


def set_session_cookie(response: JSONResponse, token: str, tokens: TokenService) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=int(tokens.session_ttl.total_seconds()),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def user_payload(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.post("/register", status_code=201)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    first_name: str = Form("", alias="firstName"),
    last_name: str = Form("", alias="lastName"),
    email: str = Form(""),
    password: str = Form(""),
    gender: str = Form(""),
    phone: str = Form(""),
    about_me: str = Form("", alias="aboutMe"),
    portfolio_url: str = Form("", alias="portfolio"),
    github_url: str = Form("", alias="githubUrl"),
    linkedin_url: str = Form("", alias="linkedInUrl"),
    avatar: UploadFile | None = File(None),
    resume: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    tokens: TokenService = Depends(get_token_service),
):
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "password": password,
        "gender": gender,
        "phone": phone,
        "about_me": about_me,
        "portfolio_url": portfolio_url,
        "github_url": github_url,
        "linkedin_url": linkedin_url,
    }
    user = register_user(db, media, fields, read_upload(avatar), read_upload(resume))
    audit(db, request, "register", f"email={user.email}", user_id=user.id)
    db.commit()

    response = JSONResponse(
        {"success": True, "message": "User registered successfully", "data": user_payload(user)},
        status_code=201,
    )
    set_session_cookie(response, tokens.issue_session(user.id), tokens)
    return response


@router.post("/login")
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate_user(db, body.email, body.password)
    if not user:
        audit(db, request, "login_failed", f"email={body.email}")
        db.commit()
        raise AuthenticationError()

    audit(db, request, "login", f"email={user.email}", user_id=user.id)
    db.commit()
    response = JSONResponse({"success": True, "message": "User login successfully", "data": user_payload(user)})
    set_session_cookie(response, tokens.issue_session(user.id), tokens)
    return response


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    audit(db, request, "logout")
    db.commit()
    response = JSONResponse({"success": True, "message": "User logged out successfully"})
    response.delete_cookie(settings.session_cookie_name, httponly=True, samesite="lax")
    return response
