#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Central error handling for the repository layer.
#
"""
Central error handling for the repository layer.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, Any
import logging

from mysql.connector.errors import Error as MySQLError, OperationalError, InterfaceError, DatabaseError

from domain.errors import InfrastructureError

logger = logging.getLogger("uvicorn.error")


def _build_repository_error_detail(
    operation_name: str,
    base_message: str,
    exc: Exception,
    error_message: str | None = None,
) -> str:
    final_message = error_message or base_message
    return f"{final_message} ({operation_name}): {exc}"


def handle_repository_errors(
    operation_name: str = "database operation",
    error_message: str | None = None,
):
    """
    Decorator for consistent error handling in repositories.

    Driver errors are logged with their traceback and re-raised as
    InfrastructureError chained to the driver error.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except (OperationalError, InterfaceError) as exc:
                detail = _build_repository_error_detail(operation_name, "Database connection error", exc, error_message)
                logger.exception(detail)
                raise InfrastructureError(detail) from exc
            except (DatabaseError, MySQLError) as exc:
                detail = _build_repository_error_detail(operation_name, "Database error", exc, error_message)
                logger.exception(detail)
                raise InfrastructureError(detail) from exc
        return wrapper
    return decorator
