"""Request/response schemas for the appointment endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class AppointmentPayload(BaseModel):
    """
    JSON body for create_appointment and update_appointment.

    Every field is optional at parse time; which ones are required depends on
    the operation and is checked after authorization. Surrounding whitespace is
    stripped, so a blank value counts as missing.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    appointment_name: str | None = Field(default=None, max_length=255)
    account_type: str | None = Field(default=None, max_length=32)
    account_id: str | None = Field(default=None, max_length=36)
    appointment_id: str | None = Field(default=None, max_length=36)


class AppointmentOut(BaseModel):
    """
    One appointment as returned by get_appointments.

    account_name is present only when account_id resolves to an existing account.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    appointment_name: str
    account_type: str
    account_id: str | None = None
    account_name: str | None = None


class MessageResponse(BaseModel):
    """Status message returned by mutating operations and by every error."""

    message: str
