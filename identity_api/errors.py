from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = structlog.get_logger()

class ApiError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def body(self) -> dict[str, Any]:
        return {"status": "error", "message": self.message}

class RequestValidationFailed(ApiError):
    """Per-field validation failure.

    The auth endpoints answer 422 with a bare ``errors`` list; the ``/api``
    endpoints answer 400 with the client-error envelope.
    """

    def __init__(self, errors: list[dict[str, str]], status_code: int = 400):
        super().__init__("Client error")
        self.errors = errors
        self.status_code = status_code

    def body(self) -> dict[str, Any]:
        if self.status_code == 422:
            return {"errors": self.errors}
        return {"status": "Bad Request", "message": self.message, "errors": self.errors}

class DuplicateEmail(ApiError):
    status_code = 400
    message = "User already exists"

    def body(self) -> dict[str, Any]:
        return {"errors": [{"field": "email", "message": self.message}]}

class AuthenticationFailed(ApiError):
    status_code = 401
    message = "Authentication failed"

    def body(self) -> dict[str, Any]:
        # same shape for unknown email and wrong password
        return {"status": "Bad request", "message": self.message, "statusCode": 401}

class MissingOrInvalidToken(ApiError):
    status_code = 401
    message = "Token is not valid"

    def body(self) -> dict[str, Any]:
        return {"msg": self.message}

class NotFound(ApiError):
    status_code = 404
    message = "Not found"

class AccessDenied(ApiError):
    status_code = 403
    message = "Access denied"

class InternalError(ApiError):
    status_code = 500

# path prefix -> status for body validation failures
VALIDATION_STATUS_BY_PREFIX = {"/auth": 422}

FIELD_MESSAGES = {
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "email": "Please include a valid email",
    "password": "Password is required",
    "name": "Name is required",
    "userId": "User ID is required",
}

def _validation_status(path: str) -> int:
    for prefix, status in VALIDATION_STATUS_BY_PREFIX.items():
        if path.startswith(prefix):
            return status
    return 400

def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = loc[-1] if loc else "body"
        msg = FIELD_MESSAGES.get(field, err.get("msg", "Invalid value"))
        if field == "password" and err.get("type") == "string_too_short":
            msg = "Password must be at least 6 characters long"
        out.append({"field": field, "message": msg})
    return out

async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())

async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = RequestValidationFailed(_field_errors(exc), status_code=_validation_status(request.url.path))
    return await api_error_handler(request, err)

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(
        "request.failed",
        method=request.method,
        path=request.url.path,
        error=exc.__class__.__name__,
    )
    return await api_error_handler(request, InternalError())

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
