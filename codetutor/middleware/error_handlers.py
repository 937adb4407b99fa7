"""Centralized error handling system with proper categorization.

This module provides:
1. Error categories for the failures the service can produce
2. Consistent error response formatting
3. Logging of request context for unexpected failures
"""

import logging
from typing import Any
from uuid import UUID, uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from codetutor.ai.errors import AIRuntimeError, AIRuntimeErrorCategory
from codetutor.exceptions import ResourceNotFoundError


logger = logging.getLogger(__name__)


# === Error Categories ===


class ErrorCategory:
    """Error category constants."""

    VALIDATION = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE_ERROR"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode:
    """Specific error codes for better client handling."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"

    # External service errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"

    # Internal errors
    INTERNAL = "INTERNAL_ERROR"


# === Error Response Formatting ===


def format_error_response(
    category: str,
    code: str,
    detail: str,
    status_code: int,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    """Format a consistent error response."""
    content: dict[str, Any] = {
        "error": {
            "category": category,
            "code": code,
            "detail": detail,
        }
    }

    if suggestions:
        content["error"]["suggestions"] = suggestions

    if metadata:
        content["error"]["metadata"] = metadata

    return JSONResponse(status_code=status_code, content=content)


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Handle validation errors from Pydantic and custom validators."""
    logger.info(f"Validation error on {request.method} {request.url.path}", extra={"error": str(exc)})

    if isinstance(exc, PydanticValidationError):
        # Extract field errors from Pydantic
        errors = []
        for error in exc.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({"field": field, "message": error["msg"], "type": error["type"]})

        return format_error_response(
            category=ErrorCategory.VALIDATION,
            code=ErrorCode.INVALID_INPUT,
            detail="Invalid input data",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            metadata={"errors": errors},
        )
    # Custom validation error
    return format_error_response(
        category=ErrorCategory.VALIDATION,
        code=ErrorCode.INVALID_INPUT,
        detail=str(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_not_found_errors(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    """Handle lookups of lessons, slides and chats that do not exist."""
    logger.info(f"Not found on {request.method} {request.url.path}: {exc.message}")

    return format_error_response(
        category=ErrorCategory.RESOURCE_NOT_FOUND,
        code=ErrorCode.NOT_FOUND,
        detail=exc.message,
        status_code=status.HTTP_404_NOT_FOUND,
        metadata={"resource_type": exc.resource_type, "resource_id": str(exc.resource_id)},
    )


async def handle_ai_runtime_errors(request: Request, exc: AIRuntimeError) -> JSONResponse:
    """Handle completion-provider failures."""
    logger.error(f"AI service error on {request.method} {request.url.path}: {exc}", extra={"category": exc.category.value})

    if exc.category == AIRuntimeErrorCategory.RATE_LIMIT_OR_QUOTA:
        return format_error_response(
            category=ErrorCategory.EXTERNAL_SERVICE,
            code=ErrorCode.RATE_LIMITED,
            detail=str(exc),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            suggestions=["Wait a moment before trying again"],
        )

    if exc.category == AIRuntimeErrorCategory.TIMEOUT:
        return format_error_response(
            category=ErrorCategory.EXTERNAL_SERVICE,
            code=ErrorCode.TIMEOUT,
            detail=str(exc),
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            suggestions=["Please try again later"],
        )

    return format_error_response(
        category=ErrorCategory.EXTERNAL_SERVICE,
        code=ErrorCode.SERVICE_UNAVAILABLE,
        detail=str(exc),
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        suggestions=["The AI service is temporarily unavailable", "Please try again later"],
        metadata={"ai_category": exc.category.value},
    )


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the request context and hide internals."""
    error_id = uuid4()
    log_error_context(request, exc, error_id)

    return format_error_response(
        category=ErrorCategory.INTERNAL,
        code=ErrorCode.INTERNAL,
        detail="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        metadata={"error_id": str(error_id)},
    )


# === Utility Functions ===


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log comprehensive error context for debugging."""
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    # Add request headers (excluding sensitive ones)
    safe_headers = {
        k: v for k, v in request.headers.items() if k.lower() not in ["authorization", "cookie", "x-api-key"]
    }
    context["headers"] = safe_headers

    logger.error("Request failed", extra=context, exc_info=exc)
