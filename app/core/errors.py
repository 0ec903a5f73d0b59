"""Typed failures raised by the appointment service.

Each failure carries the HTTP status and the message returned to the caller.
They are translated into JSON responses by the handlers in app.main.
"""


class AppointmentServiceError(Exception):
    """Base class for every failure the service reports to callers."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailure(AppointmentServiceError):
    """Credential missing, invalid, expired or already used."""

    status_code = 401
    default_message = "Unauthorized"


class MissingCredential(AuthenticationFailure):
    default_message = "Missing authorization token"


class InvalidSignature(AuthenticationFailure):
    """Signature does not verify, token cannot be parsed, or claims are malformed."""

    default_message = "Invalid token"


class TokenExpired(AuthenticationFailure):
    default_message = "Token expired"


class TokenAlreadyUsed(AuthenticationFailure):
    default_message = "Token already used"


class MissingRoute(AuthenticationFailure):
    """Request did not name an operation in the x-route header."""

    default_message = "Missing route in headers"


class AuthorizationFailure(AppointmentServiceError):
    status_code = 403
    default_message = "Forbidden"


class MissingRole(AuthorizationFailure):
    status_code = 400
    default_message = "Missing token type"


class RoleNotAllowed(AuthorizationFailure):
    default_message = "Invalid token type"


class ValidationFailure(AppointmentServiceError):
    status_code = 400
    default_message = "Malformed request"


class InvalidInput(ValidationFailure):
    default_message = "Missing appointment details"


class NotFoundFailure(AppointmentServiceError):
    status_code = 404
    default_message = "Not found"


class AccountNotFound(NotFoundFailure):
    default_message = "User not found"


class AppointmentNotFound(NotFoundFailure):
    default_message = "Appointment not found"


class RouteNotFound(NotFoundFailure):
    default_message = "Route not found"


class InvariantViolation(AppointmentServiceError):
    status_code = 403
    default_message = "Operation not permitted"


class ProtectedAppointment(InvariantViolation):
    default_message = "Core appointments cannot be deleted"


class UnexpectedFailure(AppointmentServiceError):
    status_code = 500
    default_message = "Internal server error"
