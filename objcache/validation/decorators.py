"""
objcache - Validation Decorators

Provides decorators for applying Pydantic validation to tool functions.

- validate_input decorator for automatic input validation
- Structured error responses with ErrorCode, for invalid input and for
  errors raised by the wrapped function
"""

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from ..errors import ErrorCode, ObjcacheError, extract_error_code, make_error_response

logger = logging.getLogger(__name__)


def _invalid_input_response(func_name: str, error: ValidationError, kwargs: dict[str, Any]) -> dict[str, Any]:
    validation_errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        validation_errors.append(
            {
                "field": field_path,
                "message": item["msg"],
                "type": item["type"],
            }
        )

    logger.warning(
        f"Input validation failed for {func_name}",
        extra={
            "function": func_name,
            "validation_errors": validation_errors,
            "input_kwargs": kwargs,
        },
    )

    return make_error_response(
        error_code=ErrorCode.INVALID_INPUT,
        message="Input validation failed",
        context={
            "validation_errors": validation_errors,
            "function": func_name,
        },
    )


def _error_response(func_name: str, error: Exception) -> dict[str, Any]:
    logger.error(
        f"Error in {func_name}: {error}",
        extra={
            "function": func_name,
            "error": str(error),
            "error_type": type(error).__name__,
        },
        exc_info=True,
    )

    context: dict[str, Any] = {"function": func_name}
    if isinstance(error, ObjcacheError):
        context.update(error.details)

    return make_error_response(
        error_code=extract_error_code(error),
        message=str(error),
        context=context,
    )


def validate_input(schema: type[BaseModel]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to validate tool inputs using a Pydantic schema.

    Args:
        schema: Pydantic model class for input validation

    Returns:
        Decorated function with automatic validation

    Example:
        >>> @validate_input(ObjectCacheGetInput)
        ... async def objcache_get(id: str, group: str = "default", tenant_id: int | None = None):
        ...     pass

    Error Response:
        {
            "success": False,
            "error_code": "INVALID_INPUT",
            "message": "Input validation failed",
            "details": {
                "validation_errors": [
                    {
                        "field": "id",
                        "message": "String should have at least 1 character",
                        "type": "string_too_short"
                    }
                ]
            }
        }
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                validated = schema(**kwargs)
                return await func(*args, **validated.model_dump(exclude_unset=False))
            except ValidationError as e:
                return _invalid_input_response(func.__name__, e, kwargs)
            except Exception as e:
                return _error_response(func.__name__, e)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                validated = schema(**kwargs)
                return func(*args, **validated.model_dump(exclude_unset=False))
            except ValidationError as e:
                return _invalid_input_response(func.__name__, e, kwargs)
            except Exception as e:
                return _error_response(func.__name__, e)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
