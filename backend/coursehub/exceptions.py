"""
Error taxonomy for the Course Hub API.

Services raise these; the handlers registered in ``register_exception_handlers``
turn them into ``{"message": ...}`` JSON bodies with the matching status code.
Token and reset-code failures carry one fixed message each; the specific
cause is only logged.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings

logger = logging.getLogger(__name__)

# pydantic error type for rule violations whose message is shown verbatim
INPUT_ERROR_TYPE = "invalid_input"

class CourseHubError(Exception):
    """Base exception for all Course Hub errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class DuplicateIdentityError(CourseHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists with this email"

class InvalidCredentialsError(CourseHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"

class NoTokenError(CourseHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, no token"

class InvalidTokenError(CourseHubError):
    """Any token failure: malformed, expired, bad signature or orphaned subject"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, token failed"

class ForbiddenError(CourseHubError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"

class NotFoundError(CourseHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"

class CourseNotFoundError(NotFoundError):
    default_message = "Course not found"

class EnrollmentNotFoundError(NotFoundError):
    default_message = "Enrollment not found"

class AlreadyEnrolledError(CourseHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already enrolled in this course"

class InvalidOrExpiredCodeError(CourseHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or expired reset code"

def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        if error.get("type") == INPUT_ERROR_TYPE:
            messages.append(error.get("msg"))
            continue
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location)
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return ", ".join(messages) or "Invalid request data"

def register_exception_handlers(app: FastAPI) -> None:
    """Translate every error into a status code + {"message"} body"""

    @app.exception_handler(CourseHubError)
    async def handle_course_hub_error(request: Request, exc: CourseHubError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        stack = None
        if not settings.is_production:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc) or "Internal server error", "stack": stack},
        )
