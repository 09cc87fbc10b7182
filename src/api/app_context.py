"""
Centralized application context storage for the app.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, status

from auth.penalty_tracker import PenaltyTracker
from auth.session_store import SessionStore
from services.blog_service import BlogService
from services.login_service import LoginService
from services.static_service import StaticPageService


@dataclass(frozen=True)
class AppContext:
    """Shared state owned by one application instance."""
    config: dict
    database: object
    session_store: SessionStore
    penalty_tracker: PenaltyTracker
    login_service: LoginService
    blog_service: BlogService
    static_service: StaticPageService

    @property
    def time_format(self) -> str:
        return self.config["auth"]["time_format"]


def set_app_context(app, context: AppContext) -> None:
    """Attach the application context to the FastAPI app state."""
    app.state.app_context = context


def get_app_context(request: Request) -> AppContext:
    """Fetch the application context from the FastAPI app state."""
    context: Optional[AppContext] = getattr(request.app.state, "app_context", None)
    if not context:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return context
