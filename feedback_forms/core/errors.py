# feedback_forms/core/errors.py
"""
Domain failures and their JSON rendering.

Every failure maps to a stable machine-readable ``kind`` plus a human
readable ``message``. Services raise these; routes never build error
responses by hand.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FormsError(Exception):
    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class Violation:
    """One failing field inside a ValidationError."""

    def __init__(self, code: str, field: str, message: str):
        self.code = code
        self.field = field
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "field": self.field, "message": self.message}

    def __repr__(self):
        return f"Violation({self.code!r}, {self.field!r})"


class ValidationError(FormsError):
    kind = "validation-error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: List[Violation], message: Optional[str] = None):
        if message is None:
            message = "; ".join(v.message for v in violations) or "Invalid input"
        super().__init__(message)
        self.violations = violations

    @property
    def codes(self) -> List[str]:
        return [v.code for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = [v.to_dict() for v in self.violations]
        return body


class NotFound(FormsError):
    kind = "not-found"
    status_code = status.HTTP_404_NOT_FOUND


class Forbidden(FormsError):
    """
    The target exists but the caller may not act on it, either because the
    caller is not the owner or because the form's state refuses the operation.
    """

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN

    NOT_OWNER = "not-owner"
    CLOSED = "closed"
    CONTENT_LOCKED = "content-locked"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["reason"] = self.reason
        return body


class Conflict(FormsError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class Internal(FormsError):
    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_forms_error(request: Request, exc: FormsError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


_HTTP_KINDS = {
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: Forbidden.kind,
    status.HTTP_404_NOT_FOUND: NotFound.kind,
    status.HTTP_405_METHOD_NOT_ALLOWED: "method-not-allowed",
}


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": _HTTP_KINDS.get(exc.status_code, "http-error"), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = []
    for err in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in err.get("loc", ())][1:]
        violations.append(Violation("invalid-field", ".".join(loc), err.get("msg", "Invalid value")))
    return await handle_forms_error(request, ValidationError(violations))


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return await handle_forms_error(request, Internal("Server Error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FormsError, handle_forms_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
