import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_directory.core.exceptions import UserDirectoryError

logger = logging.getLogger(__name__)


def _error_body(kind: str, message: str, field=None) -> dict:
    return {"error": kind, "message": message, "field": field}


async def user_directory_error_handler(request: Request, exc: UserDirectoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.kind, exc.message, exc.field))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparseable or missing bodies are input errors too
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=400, content=_error_body("validation_error", message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body("internal_error", "Internal server error"))


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserDirectoryError, user_directory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
