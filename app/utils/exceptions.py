import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    status_code: int = 400
    code: str = "BAD_REQUEST"
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidRangeError(AppException):
    code = "INVALID_RANGE"
    default_message = "End date must be after start date"


class PastStartError(AppException):
    code = "PAST_START"
    default_message = "Start date must be in the future"


class VehicleNotFoundError(AppException):
    status_code = 404
    code = "VEHICLE_NOT_FOUND"
    default_message = "Vehicle not found"


class VehicleUnavailableError(AppException):
    code = "VEHICLE_UNAVAILABLE"
    default_message = "Vehicle is not available"


class BookingConflictError(AppException):
    status_code = 409
    code = "BOOKING_CONFLICT"
    default_message = "Vehicle is already booked for this period"


class BookingNotFoundError(AppException):
    status_code = 404
    code = "BOOKING_NOT_FOUND"
    default_message = "Booking not found"


class ForbiddenError(AppException):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Not authorized"


class InvalidTransitionError(AppException):
    code = "INVALID_TRANSITION"
    default_message = "Booking cannot change to the requested state"


class InvalidHireTypeError(AppException):
    code = "INVALID_HIRE_TYPE"
    default_message = "Unknown hire type"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, code=exc.code),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error", code="INTERNAL_ERROR"),
        )
