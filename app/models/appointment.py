"""ORM model for appointments (named positions held by accounts)."""

import uuid

from sqlalchemy import Column, String

from app.models.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Appointment(Base):
    """
    A named position optionally bound to one account.

    account_id is a weak reference: there is no foreign key, and the account
    may be deleted while the appointment still points at it.
    """

    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=_new_id)
    appointment_name = Column(String(255), nullable=False)
    account_type = Column(String(32), nullable=False)
    account_id = Column(String(36), nullable=True, index=True)
