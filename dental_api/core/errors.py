"""
Error taxonomy shared by the stores, resolvers and routers.

Core operations report failures as values (``AccessDecision``, ``None`` for a
missing row); routers turn them into ``ClinicError`` and the handlers below
render the HTTP response.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dental_api.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.MISSING_CREDENTIAL: 400,
    ErrorKind.INVALID_CREDENTIAL: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

_DEFAULT_MESSAGES = {
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INVALID_ARGUMENT: "Invalid argument",
    ErrorKind.MISSING_CREDENTIAL: "Password is required",
    ErrorKind.INVALID_CREDENTIAL: "Password is incorrect",
    ErrorKind.UNAUTHENTICATED: "Authentication required",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.INTERNAL: "Internal server error",
}


class ClinicError(Exception):
    """Raised at the request boundary; rendered by ``clinic_error_handler``."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


@dataclass(frozen=True)
class AccessDecision:
    """ALLOW / DENY outcome of an authorization check."""

    allowed: bool
    failure: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, kind: ErrorKind, message: Optional[str] = None) -> "AccessDecision":
        return cls(allowed=False, failure=kind, message=message)

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise ClinicError(self.failure or ErrorKind.FORBIDDEN, self.message)


def not_found(what: str) -> ClinicError:
    return ClinicError(ErrorKind.NOT_FOUND, f"{what} not found")


async def clinic_error_handler(request: Request, exc: ClinicError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message, kind=exc.kind.value)
    elif exc.kind in (ErrorKind.FORBIDDEN, ErrorKind.INVALID_CREDENTIAL):
        logger.warning("request_denied", path=request.url.path, kind=exc.kind.value)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind.value},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": _DEFAULT_MESSAGES[ErrorKind.INTERNAL], "error": ErrorKind.INTERNAL.value},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClinicError, clinic_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
