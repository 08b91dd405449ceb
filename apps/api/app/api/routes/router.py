from fastapi import APIRouter

from app.api.routes.attendees import router as attendees_router
from app.api.routes.auth import router as auth_router
from app.api.routes.events import router as events_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(events_router)
router.include_router(attendees_router)
