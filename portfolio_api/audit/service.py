"""Audit log service."""

import logging

from fastapi import Request
from sqlalchemy.orm import Session

from ..rate_limit import client_ip
from .models import AuditLog

logger = logging.getLogger(__name__)


def audit(db: Session, request: Request, action: str, detail: str = "", user_id=None) -> None:
    """Stage an audit entry on ``db``; the caller's commit persists it.

    Defaults to the user resolved by get_current_user for this request.
    """
    if user_id is None:
        user = getattr(request.state, "user", None)
        if user is not None:
            user_id = user.id

    logger.debug("audit action=%s user=%s detail=%s", action, user_id, detail)
    db.add(
        AuditLog(
            user_id=user_id,
            action=action,
            detail=detail,
            ip_address=client_ip(request)[:45],
            user_agent=request.headers.get("User-Agent", "")[:255],
        )
    )
