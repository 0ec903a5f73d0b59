"""API routes."""

from fastapi import APIRouter

from app.api.v1 import appointment

router = APIRouter()
router.include_router(appointment.router, prefix="/appointment", tags=["appointments"])
