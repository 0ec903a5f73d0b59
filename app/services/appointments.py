"""Appointment operations: authenticate, authorize, validate, then read or write the store."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.core.errors import (
    AccountNotFound,
    AppointmentNotFound,
    InvalidInput,
    ProtectedAppointment,
)
from app.core.permissions import Role, authorize
from app.core.security import validate_token
from app.schemas.appointment import AppointmentOut
from app.schemas.auth import TokenClaims
from app.services.operations import (
    CreateAppointment,
    DeleteAppointment,
    ListAppointments,
    Operation,
    UpdateAppointment,
)

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.services.store import AppointmentStore
    from app.services.token_ledger import TokenLedger

logger = logging.getLogger(__name__)

# Core appointments every company has; (name, account type the slot is for).
CORE_APPOINTMENTS: tuple[tuple[str, str], ...] = (
    ("Captain", Role.OFFICER.value),
    ("CSM", Role.BOY.value),
    ("Dy CSM", Role.BOY.value),
    ("Sec 4/5 PS", Role.BOY.value),
    ("Sec 3 PS", Role.BOY.value),
    ("Sec 2 PS", Role.BOY.value),
    ("Sec 1 PS", Role.BOY.value),
)

PROTECTED_APPOINTMENT_NAMES: frozenset[str] = frozenset(
    name.lower() for name, _ in CORE_APPOINTMENTS
)


def is_protected_appointment(name: str) -> bool:
    """True if name is a core appointment (case-insensitive)."""
    return name.lower() in PROTECTED_APPOINTMENT_NAMES


@dataclass(frozen=True)
class OperationResult:
    status_code: int
    body: Any


class AppointmentService:
    """
    Runs one appointment operation per call.

    No state is kept between calls; the store and ledger are per-request
    adapters over the shared database engine.
    """

    def __init__(
        self,
        store: "AppointmentStore",
        ledger: "TokenLedger",
        settings: "Settings",
    ) -> None:
        self.store = store
        self.ledger = ledger
        self.settings = settings

    def execute(self, operation: Operation, token: str | None) -> OperationResult:
        """Authenticate the token, apply the operation's role gate, and run it."""
        claims = validate_token(token, self.ledger)
        if operation.allowed_roles is not None:
            self._authorize_caller(claims, operation.allowed_roles)

        if isinstance(operation, ListAppointments):
            return self.list_appointments()
        if isinstance(operation, CreateAppointment):
            return self.create_appointment(operation, claims)
        if isinstance(operation, UpdateAppointment):
            return self.update_appointment(operation, claims)
        if isinstance(operation, DeleteAppointment):
            return self.delete_appointment(operation, claims)
        raise TypeError(f"Unsupported operation: {type(operation).__name__}")

    def _authorize_caller(self, claims: TokenClaims, allowed: frozenset[Role]) -> None:
        account = self.store.get_account(claims.id)
        if account is None:
            raise AccountNotFound()
        authorize(account.account_type, allowed)

    def list_appointments(self) -> OperationResult:
        items: list[dict[str, Any]] = []
        for appointment in self.store.list_appointments():
            out = AppointmentOut.model_validate(appointment)
            account = (
                self.store.get_account(appointment.account_id)
                if appointment.account_id
                else None
            )
            if account is not None:
                out.account_name = account.account_name
                out.account_id = account.id
            items.append(out.model_dump(exclude_none=True))
        return OperationResult(status_code=200, body=items)

    def create_appointment(
        self, operation: CreateAppointment, claims: TokenClaims
    ) -> OperationResult:
        if not (
            operation.appointment_name
            and operation.account_type
            and operation.account_id
        ):
            raise InvalidInput("Missing appointment details")

        appointment = self.store.add_appointment(
            appointment_name=operation.appointment_name,
            account_type=operation.account_type,
            account_id=operation.account_id,
        )
        appointment_id = appointment.id
        self.store.set_account_appointment(
            operation.account_id, operation.appointment_name
        )
        logger.info(
            "Appointment created",
            extra={
                "appointment_id": appointment_id,
                "appointment_name": operation.appointment_name,
                "account_id": operation.account_id,
                "actor_id": claims.id,
            },
        )
        return OperationResult(
            status_code=201, body={"message": "Appointment created successfully"}
        )

    def update_appointment(
        self, operation: UpdateAppointment, claims: TokenClaims
    ) -> OperationResult:
        if not (operation.account_id and operation.appointment_id):
            raise InvalidInput("Missing appointment ID or account ID")

        appointment = self.store.get_appointment(operation.appointment_id)
        if appointment is None:
            raise AppointmentNotFound()
        appointment_name = appointment.appointment_name

        self.store.set_appointment_account(operation.appointment_id, operation.account_id)
        # The new holder's appointment field is left alone unless explicitly enabled.
        if self.settings.SYNC_ACCOUNT_ON_REASSIGN:
            self.store.set_account_appointment(operation.account_id, appointment_name)
        logger.info(
            "Appointment reassigned",
            extra={
                "appointment_id": operation.appointment_id,
                "account_id": operation.account_id,
                "account_synced": self.settings.SYNC_ACCOUNT_ON_REASSIGN,
                "actor_id": claims.id,
            },
        )
        return OperationResult(
            status_code=200, body={"message": "Appointment updated successfully"}
        )

    def delete_appointment(
        self, operation: DeleteAppointment, claims: TokenClaims
    ) -> OperationResult:
        if not operation.appointment_id:
            raise InvalidInput("Missing appointment ID")

        appointment = self.store.get_appointment(operation.appointment_id)
        if appointment is None:
            raise AppointmentNotFound()
        appointment_name = appointment.appointment_name
        if is_protected_appointment(appointment_name):
            raise ProtectedAppointment()

        self.store.delete_appointment(operation.appointment_id)
        logger.info(
            "Appointment deleted",
            extra={
                "appointment_id": operation.appointment_id,
                "appointment_name": appointment_name,
                "actor_id": claims.id,
            },
        )
        return OperationResult(
            status_code=200, body={"message": "Appointment deleted successfully"}
        )


def seed_core_appointments(store: "AppointmentStore") -> int:
    """
    Create any core appointment that does not exist yet, unassigned.

    Existing names are matched case-insensitively. Returns the number created;
    safe to run repeatedly.
    """
    existing = {a.appointment_name.lower() for a in store.list_appointments()}
    created = 0
    for name, account_type in CORE_APPOINTMENTS:
        if name.lower() in existing:
            continue
        store.add_appointment(
            appointment_name=name, account_type=account_type, account_id=None
        )
        created += 1
    if created > 0:
        logger.info("Seeded core appointments: created=%s", created)
    return created
