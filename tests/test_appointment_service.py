"""Unit tests for app.services.appointments: the four operations over an in-memory store."""

import time
import unittest
from typing import Any

import jwt

from app.core.config import Settings, get_settings
from app.core.errors import (
    AccountNotFound,
    AppointmentNotFound,
    InvalidInput,
    MissingCredential,
    MissingRole,
    ProtectedAppointment,
    RoleNotAllowed,
    TokenAlreadyUsed,
    TokenExpired,
)
from app.models import Appointment, User
from app.services.appointments import (
    AppointmentService,
    is_protected_appointment,
    seed_core_appointments,
)
from app.services.operations import (
    CreateAppointment,
    DeleteAppointment,
    ListAppointments,
    UpdateAppointment,
)


def _token(account_id: str = "O1", exp_in: int = 3600, **extra: Any) -> str:
    """Sign a token for account_id with the configured secret."""
    settings = get_settings()
    claims = {"id": account_id, "exp": int(time.time()) + exp_in, **extra}
    return jwt.encode(claims, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


class _Ledger:
    def __init__(self, consumed: set[str] | None = None) -> None:
        self.consumed = consumed or set()

    def was_consumed(self, token: str) -> bool:
        return token in self.consumed


class _MemoryStore:
    """AppointmentStore over dicts; records every write in call order."""

    def __init__(self) -> None:
        self.appointments: dict[str, Appointment] = {}
        self.accounts: dict[str, User] = {}
        self.writes: list[tuple[Any, ...]] = []
        self.account_lookups: list[str] = []
        self._next_id = 1

    def add_account(self, account_id: str, name: str, role: str) -> User:
        user = User(id=account_id, account_name=name, account_type=role, appointment=None)
        self.accounts[account_id] = user
        return user

    def put_appointment(self, name: str, account_type: str = "Boy", account_id: str | None = None) -> Appointment:
        appointment = Appointment(
            id=f"apt-{self._next_id}",
            appointment_name=name,
            account_type=account_type,
            account_id=account_id,
        )
        self._next_id += 1
        self.appointments[appointment.id] = appointment
        return appointment

    def list_appointments(self) -> list[Appointment]:
        return list(self.appointments.values())

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        return self.appointments.get(appointment_id)

    def add_appointment(self, appointment_name: str, account_type: str, account_id: str | None) -> Appointment:
        self.writes.append(("add_appointment", appointment_name, account_type, account_id))
        return self.put_appointment(appointment_name, account_type, account_id)

    def set_appointment_account(self, appointment_id: str, account_id: str) -> None:
        self.writes.append(("set_appointment_account", appointment_id, account_id))
        self.appointments[appointment_id].account_id = account_id

    def delete_appointment(self, appointment_id: str) -> None:
        self.writes.append(("delete_appointment", appointment_id))
        del self.appointments[appointment_id]

    def get_account(self, account_id: str) -> User | None:
        self.account_lookups.append(account_id)
        return self.accounts.get(account_id)

    def set_account_appointment(self, account_id: str, appointment_name: str) -> None:
        self.writes.append(("set_account_appointment", account_id, appointment_name))
        if account_id in self.accounts:
            self.accounts[account_id].appointment = appointment_name


class _ServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _MemoryStore()
        self.store.add_account("O1", "Officer One", "Officer")
        self.store.add_account("AD", "Admin", "Admin")
        self.store.add_account("P1", "Primer One", "Primer")
        self.store.add_account("B1", "Boy One", "Boy")
        self.store.add_account("A1", "Alex Tan", "Boy")
        self.ledger = _Ledger()
        self.service = AppointmentService(self.store, self.ledger, Settings())


class TestAuthentication(_ServiceTestCase):
    def test_every_operation_requires_a_token(self) -> None:
        for op in (ListAppointments(), CreateAppointment(), UpdateAppointment(), DeleteAppointment()):
            with self.assertRaises(MissingCredential):
                self.service.execute(op, None)
        self.assertEqual(self.store.writes, [])
        self.assertEqual(self.store.account_lookups, [])

    def test_expired_token(self) -> None:
        with self.assertRaises(TokenExpired):
            self.service.execute(ListAppointments(), _token(exp_in=-60))

    def test_consumed_token(self) -> None:
        token = _token()
        self.ledger.consumed.add(token)
        with self.assertRaises(TokenAlreadyUsed):
            self.service.execute(ListAppointments(), token)


class TestAuthorization(_ServiceTestCase):
    def _mutations(self) -> list[Any]:
        apt = self.store.put_appointment("Drummer")
        return [
            CreateAppointment(appointment_name="Drummer", account_type="Boy", account_id="A1"),
            UpdateAppointment(appointment_id=apt.id, account_id="A1"),
            DeleteAppointment(appointment_id=apt.id),
        ]

    def test_non_manager_roles_rejected(self) -> None:
        for account_id in ("P1", "B1"):
            for op in self._mutations():
                with self.assertRaises(RoleNotAllowed):
                    self.service.execute(op, _token(account_id))
        self.assertEqual(self.store.writes, [])

    def test_manager_roles_pass(self) -> None:
        for account_id in ("O1", "AD"):
            create, update, delete = self._mutations()
            self.assertEqual(self.service.execute(create, _token(account_id)).status_code, 201)
            self.assertEqual(self.service.execute(update, _token(account_id)).status_code, 200)
            self.assertEqual(self.service.execute(delete, _token(account_id)).status_code, 200)

    def test_unknown_caller_account(self) -> None:
        op = CreateAppointment(appointment_name="Drummer", account_type="Boy", account_id="A1")
        with self.assertRaises(AccountNotFound) as ctx:
            self.service.execute(op, _token("GHOST"))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "User not found")

    def test_caller_without_role(self) -> None:
        self.store.add_account("NR", "No Role", "")
        with self.assertRaises(MissingRole):
            self.service.execute(DeleteAppointment(appointment_id="x"), _token("NR"))

    def test_list_needs_no_account_or_role(self) -> None:
        result = self.service.execute(ListAppointments(), _token("GHOST"))
        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.body, [])

    def test_role_checked_before_input(self) -> None:
        with self.assertRaises(RoleNotAllowed):
            self.service.execute(CreateAppointment(), _token("B1"))


class TestListAppointments(_ServiceTestCase):
    def test_enriches_with_account_name(self) -> None:
        apt = self.store.put_appointment("Drummer", account_id="A1")
        result = self.service.execute(ListAppointments(), _token("B1"))
        self.assertEqual(
            result.body,
            [
                {
                    "id": apt.id,
                    "appointment_name": "Drummer",
                    "account_type": "Boy",
                    "account_id": "A1",
                    "account_name": "Alex Tan",
                }
            ],
        )

    def test_deleted_account_returns_item_unenriched(self) -> None:
        orphan = self.store.put_appointment("Bugler", account_id="GONE")
        held = self.store.put_appointment("Drummer", account_id="A1")
        result = self.service.execute(ListAppointments(), _token())
        self.assertEqual(result.status_code, 200)
        by_id = {item["id"]: item for item in result.body}
        self.assertNotIn("account_name", by_id[orphan.id])
        self.assertEqual(by_id[orphan.id]["account_id"], "GONE")
        self.assertEqual(by_id[held.id]["account_name"], "Alex Tan")

    def test_unassigned_appointment_is_not_looked_up(self) -> None:
        apt = self.store.put_appointment("Captain", account_type="Officer")
        result = self.service.execute(ListAppointments(), _token())
        self.assertEqual(result.body, [{"id": apt.id, "appointment_name": "Captain", "account_type": "Officer"}])
        self.assertEqual(self.store.account_lookups, [])

    def test_preserves_store_order(self) -> None:
        names = ["Zulu", "Alpha", "Mike"]
        for name in names:
            self.store.put_appointment(name)
        result = self.service.execute(ListAppointments(), _token())
        self.assertEqual([item["appointment_name"] for item in result.body], names)


class TestCreateAppointment(_ServiceTestCase):
    def test_creates_and_syncs_account(self) -> None:
        op = CreateAppointment(appointment_name="Sec 1 PS", account_type="Boy", account_id="A1")
        result = self.service.execute(op, _token())
        self.assertEqual(result.status_code, 201)
        self.assertEqual(result.body, {"message": "Appointment created successfully"})
        self.assertEqual(self.store.accounts["A1"].appointment, "Sec 1 PS")
        created = self.store.list_appointments()
        self.assertEqual(len(created), 1)
        self.assertEqual(created[0].appointment_name, "Sec 1 PS")
        self.assertEqual(created[0].account_id, "A1")
        self.assertEqual(
            [w[0] for w in self.store.writes],
            ["add_appointment", "set_account_appointment"],
        )

    def test_missing_any_field_rejected_without_write(self) -> None:
        full = {"appointment_name": "Drummer", "account_type": "Boy", "account_id": "A1"}
        for field in full:
            for blank in (None, ""):
                op = CreateAppointment(**{**full, field: blank})
                with self.assertRaises(InvalidInput) as ctx:
                    self.service.execute(op, _token())
                self.assertEqual(ctx.exception.status_code, 400)
                self.assertEqual(ctx.exception.message, "Missing appointment details")
        self.assertEqual(self.store.writes, [])
        self.assertIsNone(self.store.accounts["A1"].appointment)


class TestUpdateAppointment(_ServiceTestCase):
    def test_reassigns_holder_without_syncing_account(self) -> None:
        apt = self.store.put_appointment("Drummer", account_id="B1")
        op = UpdateAppointment(appointment_id=apt.id, account_id="A1")
        result = self.service.execute(op, _token())
        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.body, {"message": "Appointment updated successfully"})
        self.assertEqual(self.store.appointments[apt.id].account_id, "A1")
        self.assertIsNone(self.store.accounts["A1"].appointment)
        self.assertEqual(self.store.writes, [("set_appointment_account", apt.id, "A1")])

    def test_sync_setting_updates_new_holder(self) -> None:
        service = AppointmentService(self.store, self.ledger, Settings(SYNC_ACCOUNT_ON_REASSIGN=True))
        apt = self.store.put_appointment("Drummer", account_id="B1")
        service.execute(UpdateAppointment(appointment_id=apt.id, account_id="A1"), _token())
        self.assertEqual(self.store.accounts["A1"].appointment, "Drummer")

    def test_missing_ids(self) -> None:
        for op in (
            UpdateAppointment(appointment_id="apt-1"),
            UpdateAppointment(account_id="A1"),
            UpdateAppointment(),
        ):
            with self.assertRaises(InvalidInput) as ctx:
                self.service.execute(op, _token())
            self.assertEqual(ctx.exception.message, "Missing appointment ID or account ID")

    def test_unknown_appointment(self) -> None:
        with self.assertRaises(AppointmentNotFound):
            self.service.execute(UpdateAppointment(appointment_id="nope", account_id="A1"), _token())
        self.assertEqual(self.store.writes, [])


class TestDeleteAppointment(_ServiceTestCase):
    def test_deletes_non_protected(self) -> None:
        apt = self.store.put_appointment("Drummer")
        result = self.service.execute(DeleteAppointment(appointment_id=apt.id), _token())
        self.assertEqual(result.status_code, 200)
        self.assertEqual(result.body, {"message": "Appointment deleted successfully"})
        self.assertNotIn(apt.id, self.store.appointments)

    def test_protected_names_any_case(self) -> None:
        for name in ("Captain", "CAPTAIN", "captain", "CSM", "Dy CSM", "SEC 4/5 PS", "sec 3 ps", "Sec 2 PS", "Sec 1 PS"):
            apt = self.store.put_appointment(name)
            with self.assertRaises(ProtectedAppointment) as ctx:
                self.service.execute(DeleteAppointment(appointment_id=apt.id), _token())
            self.assertEqual(ctx.exception.status_code, 403)
            self.assertEqual(ctx.exception.message, "Core appointments cannot be deleted")
            self.assertIn(apt.id, self.store.appointments)
        self.assertEqual(self.store.writes, [])

    def test_missing_id(self) -> None:
        with self.assertRaises(InvalidInput) as ctx:
            self.service.execute(DeleteAppointment(), _token())
        self.assertEqual(ctx.exception.message, "Missing appointment ID")

    def test_unknown_appointment(self) -> None:
        with self.assertRaises(AppointmentNotFound):
            self.service.execute(DeleteAppointment(appointment_id="nope"), _token())


class TestProtectedNames(unittest.TestCase):
    def test_similar_names_are_not_protected(self) -> None:
        self.assertTrue(is_protected_appointment("Dy CSM"))
        self.assertFalse(is_protected_appointment("Captain's Aide"))
        self.assertFalse(is_protected_appointment("Sec 5 PS"))


class TestSeedCoreAppointments(unittest.TestCase):
    def test_creates_missing_core_appointments_once(self) -> None:
        store = _MemoryStore()
        store.put_appointment("captain", account_type="Officer", account_id="O1")
        self.assertEqual(seed_core_appointments(store), 6)
        names = sorted(a.appointment_name for a in store.list_appointments())
        self.assertEqual(
            names,
            sorted(["captain", "CSM", "Dy CSM", "Sec 4/5 PS", "Sec 3 PS", "Sec 2 PS", "Sec 1 PS"]),
        )
        self.assertTrue(all(a.account_id is None for a in store.list_appointments() if a.appointment_name != "captain"))
        self.assertEqual(seed_core_appointments(store), 0)
