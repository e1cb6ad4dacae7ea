"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.follows import router as follows_router
from api.v1.routes.me import router as me_router
from api.v1.routes.notifications import router as notifications_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.thoughts import router as thoughts_router

router = APIRouter()
router.include_router(me_router)
router.include_router(profiles_router)
router.include_router(thoughts_router)
router.include_router(follows_router)
router.include_router(notifications_router)
