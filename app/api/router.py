"""
API router.

Aggregates all endpoints under ``/api``.
"""

from fastapi import APIRouter

from app.api.endpoints import ai, auth, pdf, users, workouts

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    auth.router, prefix="/auth", tags=["Authentication"]
)
api_router.include_router(
    users.router, prefix="/users", tags=["Users"]
)
api_router.include_router(
    workouts.router, prefix="/workouts", tags=["Workouts"]
)
api_router.include_router(
    ai.router, prefix="/ai", tags=["AI coach"]
)
api_router.include_router(
    pdf.router, prefix="/pdf", tags=["PDF export"]
)
