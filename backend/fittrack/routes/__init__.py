"""API routes."""
from fittrack.routes.auth import router as auth_router
from fittrack.routes.user import router as user_router
from fittrack.routes.workout import router as workout_router
from fittrack.routes.nutrition import router as nutrition_router
from fittrack.routes.sleep import router as sleep_router
from fittrack.routes.progress import router as progress_router
from fittrack.routes.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "user_router",
    "workout_router",
    "nutrition_router",
    "sleep_router",
    "progress_router",
    "dashboard_router",
]
