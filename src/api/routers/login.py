"""
Login API Router - session issuance and logout.
"""

from fastapi import APIRouter, Depends

from api.app_context import AppContext, get_app_context
from api.dependencies import get_request_context
from api.error_handling import handle_db_errors
from api.models import LoginRequest, LogoutRequest, SessionCredential, format_timestamp
from domain.request_context import RequestContext


router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=SessionCredential)
@handle_db_errors("user login")
def login(
    credentials: LoginRequest,
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """
    Log in with username and passphrase.

    Penalised origins get 429 without the credential store being consulted;
    bad credentials get 401 and penalise the origin.
    """
    session = app.login_service.login(context, credentials.userid, credentials.passphrase, credentials.period)
    return SessionCredential(
        secret=session.secret,
        expiration=format_timestamp(session.expiration, app.time_format),
    )


@router.post("/logout")
@handle_db_errors("user logout")
def logout(
    request: LogoutRequest,
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """End the caller's session."""
    app.login_service.logout(context, request.username, request.secret)
    return {"message": "Logged out"}
