"""Pydantic request/response schemas."""

from app.schemas.appointment import AppointmentOut, AppointmentPayload, MessageResponse
from app.schemas.auth import TokenClaims

__all__ = [
    "AppointmentOut",
    "AppointmentPayload",
    "MessageResponse",
    "TokenClaims",
]
