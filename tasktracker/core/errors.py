# tasktracker/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_BODY_MESSAGE = "Invalid JSON body"


class TaskRequestError(Exception):
    """Rejected request, answered with 400 before the store is touched."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskStoreError(RuntimeError):
    """Any failure while reading or writing the ``tasks`` table."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskRequestError)
    async def _on_request_error(request: Request, exc: TaskRequestError):
        log.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(TaskStoreError)
    async def _on_store_error(request: Request, exc: TaskStoreError):
        log.error("Task store failure on %s %s: %s", request.method, request.url.path, exc.message)
        return _error(500, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(e.get("type") == "json_invalid" for e in errors):
            return _error(400, INVALID_BODY_MESSAGE)
        msg = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(400, msg)

    @app.exception_handler(StarletteHTTPException)
    async def _on_http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))
