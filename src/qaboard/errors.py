from typing import Any
from uuid import uuid4

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import get_logger

logger = get_logger(__name__)


class QABoardError(Exception):
    """Base class for domain failures surfaced to API clients."""

    status_code = 400
    code = "BAD_REQUEST"
    title = "Bad Request"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(QABoardError):
    status_code = 404
    code = "NOT_FOUND"
    title = "Not Found"


class ConflictError(QABoardError):
    status_code = 409
    code = "CONFLICT"
    title = "Conflict"


class InvalidInputError(QABoardError):
    status_code = 422
    code = "VALIDATION_ERROR"
    title = "Unprocessable Entity"


def _code_by_status(status: int) -> str:
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
    }.get(status, "HTTP_ERROR")


_TITLES = {
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
}


def correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid4())


def problem_json_ext(
    *,
    status: int,
    title: str,
    detail: str,
    instance: str,
    correlation_id: str,
    type_: str = "about:blank",
    code: str | None = None,
    message: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = {
        "type": type_,
        "title": title,
        "status": status,
        "detail": detail,
        "instance": instance,
        "correlation_id": correlation_id,
        "code": code or _code_by_status(status),
        "message": message or (detail or title),
        "details": details or {},
    }
    return JSONResponse(
        status_code=status,
        content=body,
        media_type="application/problem+json",
    )


def make_exception_handlers():
    async def domain_exc_handler(request: Request, exc: QABoardError):
        return problem_json_ext(
            status=exc.status_code,
            title=exc.title,
            detail=exc.message,
            instance=str(request.url),
            correlation_id=correlation_id(request),
            code=exc.code,
            details=exc.details,
        )

    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        # Structured details ({"code", "message", "details"}) come from the
        # auth dependencies; plain strings from everything else.
        code = None
        details = None
        if isinstance(exc.detail, dict):
            code = exc.detail.get("code")
            detail = exc.detail.get("message") or _TITLES.get(exc.status_code, "HTTP Error")
            details = exc.detail.get("details")
        else:
            detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        if exc.status_code == 404 and detail == "Not Found":
            code = "HTTP_ERROR"
        response = problem_json_ext(
            status=exc.status_code,
            title=_TITLES.get(exc.status_code, "HTTP Error"),
            detail=detail,
            instance=str(request.url),
            correlation_id=correlation_id(request),
            code=code,
            details=details,
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
            for e in exc.errors()
        ]
        return problem_json_ext(
            status=422,
            title="Unprocessable Entity",
            detail=errors[0]["msg"] if errors else "Validation failed",
            instance=str(request.url),
            correlation_id=correlation_id(request),
            type_="https://datatracker.ietf.org/doc/html/rfc4918#section-11.2",
            code="VALIDATION_ERROR",
            details={"errors": errors},
        )

    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", error=str(exc), path=request.url.path)
        return problem_json_ext(
            status=500,
            title="Internal error",
            detail="Something went wrong",
            instance=str(request.url),
            correlation_id=correlation_id(request),
            code="INTERNAL_ERROR",
        )

    return {
        QABoardError: domain_exc_handler,
        StarletteHTTPException: http_exc_handler,
        RequestValidationError: validation_exc_handler,
        Exception: unhandled_exc_handler,
    }
