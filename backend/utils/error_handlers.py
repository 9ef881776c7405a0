"""
Error handling decorators and utilities for API endpoints.

Centralizes the translation of domain errors, application errors and service
results into HTTP responses so the route functions stay one-liners.
"""

from functools import wraps
from typing import Callable
from fastapi import HTTPException
import inspect
import logging

from constants import HTTPStatus
from domain.exceptions import DomainError
from exceptions import (
    ConfigurationError,
    ValidationError,
    DatabaseError,
    ApplicationError
)
from services.results import CommandResult, Outcome

logger = logging.getLogger(__name__)

_RESULT_STATUS = {
    Outcome.OK: HTTPStatus.NO_CONTENT,
    Outcome.CREATED: HTTPStatus.CREATED,
    Outcome.NOT_FOUND: HTTPStatus.NOT_FOUND,
    Outcome.REJECTED: HTTPStatus.BAD_REQUEST,
    Outcome.CONFLICT: HTTPStatus.CONFLICT,
}


def status_for_result(result: CommandResult) -> int:
    """
    Map a command outcome to its HTTP status code.

    OK -> 204, CREATED -> 201, NOT_FOUND -> 404, REJECTED -> 400, CONFLICT -> 409
    """
    return _RESULT_STATUS[result.outcome]


def raise_for_result(result: CommandResult) -> CommandResult:
    """
    Raise an HTTPException for a command that did not succeed.

    Returns:
        The result unchanged when it succeeded
    """
    if result.succeeded:
        return result
    raise HTTPException(
        status_code=status_for_result(result),
        detail=result.message or result.outcome.value
    )


def _translate(operation_name: str, error: Exception) -> HTTPException:
    if isinstance(error, DomainError):
        logger.warning(f"{operation_name} - Domain rule violated: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, (ConfigurationError, ValidationError)):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, DatabaseError):
        logger.error(f"{operation_name} - Database error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}"
        )
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {error.message}"
        )
    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Domain errors and validation errors become 400 responses, database and
    other application errors become 500 responses, and anything unexpected
    becomes a 500 with a generic message. HTTPException passes through.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Add work order item")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/{work_order_id}/items")
        @handle_api_errors("Add work order item")
        def add_item(...):
            raise_for_result(service.add_item(...))
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise _translate(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise _translate(operation_name, e) from e

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator
