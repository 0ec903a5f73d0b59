"""Persistence operations the appointment handler depends on."""

import logging
from typing import Protocol

from sqlalchemy.orm import Session

from app.models import Appointment, User

logger = logging.getLogger(__name__)


class AppointmentStore(Protocol):
    """Appointment and account access used by AppointmentService."""

    def list_appointments(self) -> list[Appointment]: ...

    def get_appointment(self, appointment_id: str) -> Appointment | None: ...

    def add_appointment(
        self, appointment_name: str, account_type: str, account_id: str | None
    ) -> Appointment: ...

    def set_appointment_account(self, appointment_id: str, account_id: str) -> None: ...

    def delete_appointment(self, appointment_id: str) -> None: ...

    def get_account(self, account_id: str) -> User | None: ...

    def set_account_appointment(self, account_id: str, appointment_name: str) -> None: ...


class SqlAppointmentStore:
    """
    AppointmentStore over a SQLAlchemy session.

    Every write commits on its own; callers that perform several writes get
    no atomicity across them.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_appointments(self) -> list[Appointment]:
        return self.session.query(Appointment).all()

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        return self.session.get(Appointment, appointment_id)

    def add_appointment(
        self, appointment_name: str, account_type: str, account_id: str | None
    ) -> Appointment:
        appointment = Appointment(
            appointment_name=appointment_name,
            account_type=account_type,
            account_id=account_id,
        )
        self.session.add(appointment)
        self.session.commit()
        self.session.refresh(appointment)
        return appointment

    def set_appointment_account(self, appointment_id: str, account_id: str) -> None:
        (
            self.session.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .update({Appointment.account_id: account_id}, synchronize_session=False)
        )
        self.session.commit()

    def delete_appointment(self, appointment_id: str) -> None:
        (
            self.session.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()

    def get_account(self, account_id: str) -> User | None:
        return self.session.get(User, account_id)

    def set_account_appointment(self, account_id: str, appointment_name: str) -> None:
        updated = (
            self.session.query(User)
            .filter(User.id == account_id)
            .update({User.appointment: appointment_name}, synchronize_session=False)
        )
        self.session.commit()
        if not updated:
            logger.warning(
                "Appointment assigned to unknown account",
                extra={"account_id": account_id, "appointment_name": appointment_name},
            )
