from fastapi import APIRouter

# Admin: shows and their images
from showdesk.api.v1.admin.shows import router as shows_router
from showdesk.api.v1.admin.show_images import router as show_images_router

# Admin: season dashboard
from showdesk.api.v1.admin.dashboard import router as dashboard_router

# Admin: settings & persisted sort orders
from showdesk.api.v1.admin.settings import router as settings_router, sort_order_router

# AI text proxies
from showdesk.api.v1.ai import router as ai_router

api_router = APIRouter()

# --- Admin ---
api_router.include_router(shows_router)
api_router.include_router(show_images_router)
api_router.include_router(dashboard_router)
api_router.include_router(settings_router)
api_router.include_router(sort_order_router)

# --- AI ---
api_router.include_router(ai_router)
