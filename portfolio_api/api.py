"""API router: all JSON endpoints, mounted at the application root."""

from fastapi import APIRouter

from .auth.routes import router as auth_router
from .messages.routes import router as messages_router
from .profile.routes import router as profile_router
from .projects.routes import router as projects_router
from .skills.routes import router as skills_router
from .software.routes import router as software_router
from .timeline.routes import router as timeline_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(messages_router)
api_router.include_router(projects_router)
api_router.include_router(skills_router)
api_router.include_router(software_router)
api_router.include_router(timeline_router)
