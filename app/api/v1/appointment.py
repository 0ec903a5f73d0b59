"""Appointment endpoint: one URL, operation selected by HTTP method plus the x-route header."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Header, Query, Request
from fastapi.responses import JSONResponse

from app.api.v1.auth import get_appointment_service, get_credential
from app.schemas.appointment import AppointmentPayload, MessageResponse
from app.services.appointments import AppointmentService
from app.services.operations import parse_operation

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": MessageResponse, "description": "Missing or malformed input"},
    401: {"model": MessageResponse, "description": "Missing route or credential failure"},
    403: {"model": MessageResponse, "description": "Role not allowed or core appointment"},
    404: {"model": MessageResponse, "description": "Unknown route, account or appointment"},
    500: {"model": MessageResponse, "description": "Unexpected failure"},
}


@router.api_route("", methods=["GET", "POST", "PUT", "DELETE"], responses=_ERROR_RESPONSES)
def handle_appointment(
    request: Request,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    token: Annotated[str | None, Depends(get_credential)],
    route: Annotated[str | None, Header(alias="x-route")] = None,
    appointment_id: Annotated[str | None, Query(alias="id")] = None,
    body: Annotated[AppointmentPayload | None, Body()] = None,
) -> JSONResponse:
    """
    Run one appointment operation.

    x-route names the operation: GET get_appointments, POST create_appointment,
    PUT update_appointment, DELETE delete_appointment. The credential comes from
    the token cookie. Create and update read a JSON body; delete reads ?id=.
    Errors are returned as {"message": ...} by the application's exception handlers.
    """
    operation = parse_operation(request.method, route, body=body, query_id=appointment_id)
    result = service.execute(operation, token)
    return JSONResponse(status_code=result.status_code, content=result.body)
