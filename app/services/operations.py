"""The four appointment operations and how a request selects one."""

from dataclasses import dataclass
from typing import ClassVar, Union

from app.core.errors import MissingRoute, RouteNotFound
from app.core.permissions import MANAGER_ROLES, Role
from app.schemas.appointment import AppointmentPayload


@dataclass(frozen=True)
class ListAppointments:
    # None: any authenticated caller, no account lookup
    allowed_roles: ClassVar[frozenset[Role] | None] = None


@dataclass(frozen=True)
class CreateAppointment:
    allowed_roles: ClassVar[frozenset[Role] | None] = MANAGER_ROLES

    appointment_name: str | None = None
    account_type: str | None = None
    account_id: str | None = None


@dataclass(frozen=True)
class UpdateAppointment:
    allowed_roles: ClassVar[frozenset[Role] | None] = MANAGER_ROLES

    appointment_id: str | None = None
    account_id: str | None = None


@dataclass(frozen=True)
class DeleteAppointment:
    allowed_roles: ClassVar[frozenset[Role] | None] = MANAGER_ROLES

    appointment_id: str | None = None


Operation = Union[ListAppointments, CreateAppointment, UpdateAppointment, DeleteAppointment]

ROUTES: dict[tuple[str, str], type] = {
    ("GET", "get_appointments"): ListAppointments,
    ("POST", "create_appointment"): CreateAppointment,
    ("PUT", "update_appointment"): UpdateAppointment,
    ("DELETE", "delete_appointment"): DeleteAppointment,
}


def parse_operation(
    method: str,
    route: str | None,
    body: AppointmentPayload | None = None,
    query_id: str | None = None,
) -> Operation:
    """
    Build the operation named by (method, route) from the request inputs.

    Field presence is not checked here; the handler validates inputs only
    after the caller is authenticated and authorized.
    """
    if not route or not route.strip():
        raise MissingRoute()
    key = (method.upper(), route.strip().lstrip("/"))
    kind = ROUTES.get(key)
    if kind is None:
        raise RouteNotFound()

    payload = body or AppointmentPayload()
    if kind is CreateAppointment:
        return CreateAppointment(
            appointment_name=payload.appointment_name,
            account_type=payload.account_type,
            account_id=payload.account_id,
        )
    if kind is UpdateAppointment:
        return UpdateAppointment(
            appointment_id=payload.appointment_id,
            account_id=payload.account_id,
        )
    if kind is DeleteAppointment:
        return DeleteAppointment(appointment_id=query_id)
    return ListAppointments()
