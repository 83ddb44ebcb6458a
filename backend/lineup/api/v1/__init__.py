from fastapi import APIRouter

from lineup.api.v1.auth import router as auth_router
from lineup.api.v1.schedule import router as schedule_router
from lineup.api.v1.shows import router as shows_router
from lineup.api.v1.show_items import router as show_items_router
from lineup.api.v1.interviewees import router as interviewees_router
from lineup.api.v1.day_notes import router as day_notes_router
from lineup.api.v1.workers import router as workers_router
from lineup.api.v1.producer_roles import router as producer_roles_router
from lineup.api.v1.producer_assignments import router as producer_assignments_router
from lineup.api.v1.system_settings import router as system_settings_router
from lineup.api.v1.storage import router as storage_router
from lineup.api.v1.admin import router as admin_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(schedule_router)
router.include_router(shows_router)
router.include_router(show_items_router)
router.include_router(interviewees_router)
router.include_router(day_notes_router)
router.include_router(workers_router)
router.include_router(producer_roles_router)
router.include_router(producer_assignments_router)
router.include_router(system_settings_router)
router.include_router(storage_router)
router.include_router(admin_router)
