"""Profile routes: view/edit profile, change password, forgot/reset password."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..auth.routes import read_upload, user_payload
from ..auth.schemas import ForgotPasswordRequest, ResetPasswordRequest, UpdatePasswordRequest
from ..auth.tokens import TokenService
from ..config import settings
from ..database.base import get_db
from ..dependencies import get_current_user, get_mailer, get_media, get_token_service
from ..integrations.media import MediaStorage
from ..notifications.service import Mailer
from ..rate_limit import limiter
from .service import request_password_reset, reset_password, update_password, update_profile

router = APIRouter(tags=["profile"])


@router.get("/profileView")
def profile_view(user: User = Depends(get_current_user)):
    return JSONResponse({"success": True, "data": user_payload(user)})


@router.put("/profileEdit")
def profile_edit(
    first_name: str | None = Form(None, alias="firstName"),
    last_name: str | None = Form(None, alias="lastName"),
    gender: str | None = Form(None),
    phone: str | None = Form(None),
    about_me: str | None = Form(None, alias="aboutMe"),
    portfolio_url: str | None = Form(None, alias="portfolio"),
    github_url: str | None = Form(None, alias="githubUrl"),
    linkedin_url: str | None = Form(None, alias="linkedInUrl"),
    avatar: UploadFile | None = File(None),
    resume: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    media: MediaStorage = Depends(get_media),
    user: User = Depends(get_current_user),
):
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "gender": gender,
        "phone": phone,
        "about_me": about_me,
        "portfolio_url": portfolio_url,
        "github_url": github_url,
        "linkedin_url": linkedin_url,
    }
    update_profile(db, media, user, fields, read_upload(avatar), read_upload(resume))
    db.commit()
    return JSONResponse({"success": True, "message": "Profile updated successfully", "data": user_payload(user)})


@router.put("/updatePassword")
def change_password(
    request: Request,
    body: UpdatePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    update_password(db, user, body.old_password, body.new_password, body.confirm_new_password)
    audit(db, request, "password_update")
    db.commit()
    return JSONResponse({"success": True, "message": "Password updated successfully"})


@router.post("/forgotPassword")
@limiter.limit(settings.rate_limit_auth)
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    mailer: Mailer = Depends(get_mailer),
):
    if request_password_reset(db, tokens, mailer, body.email, settings.frontend_url):
        audit(db, request, "password_reset_requested", f"email={body.email.strip().lower()}")
        db.commit()
    # Same answer whether or not the address is registered
    return JSONResponse(
        {"success": True, "message": "If the email is registered, a password reset link has been sent"}
    )


@router.post("/resetPassword/{token}")
@limiter.limit(settings.rate_limit_auth)
def reset_password_route(
    request: Request,
    token: str,
    body: ResetPasswordRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = reset_password(db, tokens, token, body.new_password, body.confirm_new_password)
    audit(db, request, "password_reset", user_id=user.id)
    db.commit()
    return JSONResponse({"success": True, "message": "Password reset successfully"})
