"""Custom exceptions following RFC 9457 Problem Details for HTTP APIs."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ProblemDetailsException(HTTPException):
    """
    An error kind that knows its HTTP status and renders as RFC 9457 Problem Details.

    ``detail`` is the human-readable message; it is kept on ``message`` because
    ``HTTPException.detail`` holds the full problem body. ``extensions`` are
    merged into the body as top-level members.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.title = title
        self.message = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        body = {"type": self.type_uri, "title": title, "status": status_code}
        optional = {"detail": detail, "instance": instance}
        body.update({key: value for key, value in optional.items() if value})
        body.update(self.extensions)
        self.problem_details = body

        super().__init__(status_code=status_code, detail=body, headers=headers)

    def __str__(self) -> str:
        return self.message or self.title


class ValidationError(ProblemDetailsException):
    """Caller input is missing or malformed."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        errors: Optional[Dict[str, Any]] = None,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if errors:
            extensions["errors"] = errors

        super().__init__(
            status_code=400,
            title="Validation Error",
            detail=detail,
            type_uri="https://tourmarket.dev/problems/validation-error",
            instance=instance,
            extensions=extensions,
        )


class NotFoundError(ProblemDetailsException):
    """A referenced entity is absent."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" with ID '{resource_id}'"
            detail += " could not be found"

        extensions = {
            "resource_type": resource_type,
        }
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri="https://tourmarket.dev/problems/resource-not-found",
            instance=instance,
            extensions=extensions,
        )


class StorageError(ProblemDetailsException):
    """
    The underlying query could not be executed.

    The detail is a fixed user-facing message; the driver error is only logged.
    """

    def __init__(
        self,
        detail: str = "The operation could not be completed",
        error_id: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        super().__init__(
            status_code=500,
            title="Storage Error",
            detail=detail,
            type_uri="https://tourmarket.dev/problems/storage-error",
            instance=instance,
            extensions={
                "error_id": error_id or str(uuid.uuid4()),
                "timestamp": _utc_timestamp(),
            },
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    content = dict(exc.problem_details)
    content.setdefault("instance", request.url.path)

    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "status_code": exc.status_code,
            "title": exc.title,
            "detail": exc.message,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures as Problem Details with violations."""
    violations = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({
            "type": "https://tourmarket.dev/problems/request-validation",
            "title": "Unprocessable Request",
            "status": 422,
            "detail": "The request does not match the expected schema",
            "instance": request.url.path,
            "violations": violations,
        }),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_id": error_id,
            "error": str(exc),
        },
        exc_info=exc,
    )

    problem_details = {
        "type": "https://tourmarket.dev/problems/internal-server-error",
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred while processing the request",
        "instance": request.url.path,
        "error_id": error_id,
        "timestamp": _utc_timestamp(),
    }

    return JSONResponse(
        status_code=500,
        content=problem_details,
    )
