"""
Central error handling for the API.
Maps the error taxonomy to HTTP responses for all routers.
"""

import asyncio
import logging
from functools import wraps
from typing import Callable, Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.errors import DomainError, InfrastructureError


logger = logging.getLogger("uvicorn.error")


def _convert(exc: Exception, operation_name: str) -> InfrastructureError:
    logger.exception("Unexpected error in %s: %s", operation_name, exc)
    return InfrastructureError(f"Unexpected error during {operation_name}: {exc}")


def handle_db_errors(operation_name: str = "database operation"):
    """
    Decorator for uniform error handling in API endpoints.

    Domain errors and HTTPExceptions pass through; anything else is logged
    and re-raised as InfrastructureError.

    Args:
        operation_name: Name of the operation for log messages

    Usage:
        @router.post("/endpoint")
        @handle_db_errors("create data")
        def my_endpoint(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except (HTTPException, DomainError):
                raise
            except Exception as exc:
                raise _convert(exc, operation_name) from exc

        @wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except (HTTPException, DomainError):
                raise
            except Exception as exc:
                raise _convert(exc, operation_name) from exc

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        # Internal detail stays in the log
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        detail = exc.public_detail
    else:
        detail = exc.detail
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
