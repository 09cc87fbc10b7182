"""
FastAPI dependencies for request context and authorization
"""

from fastapi import Depends, Request

from api.app_context import AppContext, get_app_context
from api.models import AuthData
from domain.request_context import RequestContext


UNKNOWN_ORIGIN = "unknown"


def get_request_context(request: Request, app: AppContext = Depends(get_app_context)) -> RequestContext:
    """
    Build the request context: client address as origin, deadline from config.

    The origin is passed on as an opaque string and never parsed.
    """
    origin = request.client.host if request.client else UNKNOWN_ORIGIN
    timeout = float(app.config["api"]["request_timeout_seconds"])
    return RequestContext.with_timeout(origin, timeout)


def require_session(payload: AuthData, context: RequestContext, app: AppContext) -> None:
    """
    Guard for mutating endpoints; must run before any write.

    Raises:
        UnauthorizedError: No valid session for the caller
    """
    app.session_store.authorized(context.origin, payload.username, payload.secret)
