"""SQLAlchemy ORM models."""

from app.models.appointment import Appointment
from app.models.base import Base
from app.models.token import UsedToken
from app.models.user import User

__all__ = ["Appointment", "Base", "UsedToken", "User"]
