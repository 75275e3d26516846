"""
errors.py
=========
Error taxonomy for the API and the handlers that turn it into JSON.

Every handler-level failure is raised as one of the ClinicError subclasses
below and rendered as {"message": ..., "errors"?: [...], "reason"?: ...}.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code = 500
    default_message = "Server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        reason: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        self.reason = reason
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        if self.reason:
            body["reason"] = self.reason
        return body


class ValidationError(ClinicError):
    status_code = 400
    default_message = "Invalid request data"


class MissingParameter(ClinicError):
    status_code = 400
    default_message = "Missing required parameter"


class DuplicateEmail(ClinicError):
    status_code = 400
    default_message = "Doctor already exists"


class InvalidCredentials(ClinicError):
    status_code = 400
    default_message = "Invalid Credentials"


class InvalidId(ClinicError):
    status_code = 400
    default_message = "Invalid ID"


class Unauthenticated(ClinicError):
    status_code = 401
    default_message = "Authorization denied"

    # reason codes
    MISSING = "missing_token"
    MALFORMED = "malformed_token"
    EXPIRED = "token_expired"
    INVALID = "invalid_token"


class NotAuthorized(ClinicError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(ClinicError):
    status_code = 404
    default_message = "Resource not found"


# ---------------------------------------------------------------------------
# HANDLERS
# ---------------------------------------------------------------------------

def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    out = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        out.append({"field": ".".join(loc), "msg": err.get("msg", "Invalid value")})
    return out


async def clinic_error_handler(request: Request, exc: ClinicError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)

    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = None
    if request.method == "POST" and request.url.path.rstrip("/") == "/api/assessments":
        message = "Invalid assessment data"
    error = ValidationError(message, errors=_field_errors(exc))
    return await clinic_error_handler(request, error)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown routes and wrong methods share the {"message": ...} shape
    logger.info("%s %s -> %s", request.method, request.url.path, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = {"message": "Server error"}
    if not settings.is_production():
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClinicError, clinic_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
