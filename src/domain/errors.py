#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Error taxonomy shared by the core and the API layer.
#
"""
Error taxonomy shared by the core and the API layer.

Every error carries the HTTP status the API answers with and a public
detail string. Infrastructure errors never expose the underlying cause
to the caller; the cause stays available through exception chaining.
"""


class DomainError(Exception):
    """Base class for all errors the API maps to a status code."""

    status_code = 500
    public_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_detail)
        self.detail = detail or self.public_detail


class ValidationError(DomainError):
    """Malformed input (body, parameters, period)."""

    status_code = 400
    public_detail = "Invalid request"


class UnauthorizedError(DomainError):
    """Missing, expired or mismatched session, or bad login credentials."""

    status_code = 401
    public_detail = "Unauthorized"


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    status_code = 404
    public_detail = "Not found"


class ThrottledError(DomainError):
    """Origin is currently penalised."""

    status_code = 429
    public_detail = "Try again later"


class InfrastructureError(DomainError):
    """Data store, transaction or crypto failure."""

    status_code = 500
    public_detail = "Internal server error"


class DeadlineExceededError(InfrastructureError):
    """The request deadline elapsed before the work completed."""

    status_code = 504
    public_detail = "Request timed out"


class RollbackError(InfrastructureError):
    """Rollback failed after a failed step; chained to the step error."""

    public_detail = "Transaction rollback failed"
