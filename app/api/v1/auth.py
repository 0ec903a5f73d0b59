"""Credential and collaborator dependencies for the appointment endpoint."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.services.appointments import AppointmentService
from app.services.store import SqlAppointmentStore
from app.services.token_ledger import SqlTokenLedger

# auto_error=False: a missing cookie is reported by the token validator, not by FastAPI.
token_cookie = APIKeyCookie(name=settings.AUTH_COOKIE_NAME, auto_error=False)


def get_credential(
    token: Annotated[str | None, Depends(token_cookie)],
) -> str | None:
    """Dependency: raw token from the auth cookie, or None when absent."""
    return token


def get_appointment_service(
    db: Annotated[Session, Depends(get_db)],
) -> AppointmentService:
    """Dependency: AppointmentService bound to this request's DB session."""
    return AppointmentService(
        store=SqlAppointmentStore(db),
        ledger=SqlTokenLedger(db),
        settings=get_settings(),
    )
