"""FastAPI application entrypoint. No business logic; only wiring, middleware and error translation."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1 import router as api_router
from app.core.config import settings
from app.core.errors import AppointmentServiceError, UnexpectedFailure, ValidationFailure

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Appointments API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "x-route"],
    max_age=86400,
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(AppointmentServiceError)
async def handle_service_error(request: Request, exc: AppointmentServiceError) -> JSONResponse:
    """Typed failures: status and message come from the failure class."""
    logger.warning(
        "Request rejected",
        extra={
            "failure": type(exc).__name__,
            "status_code": exc.status_code,
            "method": request.method,
            "route": request.headers.get("x-route"),
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies, headers or query parameters are a plain 400."""
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content={"message": ValidationFailure.default_message},
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown paths and disallowed methods keep their status with a message body."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log with traceback and return a generic 500."""
    logger.error(
        "Unhandled error processing %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=UnexpectedFailure.status_code,
        content={"message": UnexpectedFailure.default_message},
    )


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Appointments API"}
