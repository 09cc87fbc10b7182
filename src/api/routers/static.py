"""
Static pages API Router
"""

from fastapi import APIRouter, Depends

from api.app_context import AppContext, get_app_context
from api.dependencies import get_request_context, require_session
from api.error_handling import handle_db_errors
from api.models import AuthData, StaticPageResponse, StaticPost, StaticPostResponse, format_timestamp
from domain.request_context import RequestContext


router = APIRouter(prefix="/static", tags=["static"])


@router.get("/{name}", response_model=StaticPageResponse)
@handle_db_errors("fetch static page")
def get_static_page(
    name: str,
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    page = app.static_service.get_page(name, context)
    return StaticPageResponse(
        body=page["body"],
        created=format_timestamp(page["created"], app.time_format),
        updated=format_timestamp(page["updated"], app.time_format),
    )


@router.post("", response_model=StaticPostResponse)
@handle_db_errors("create static page")
def create_static_page(
    post: AuthData[StaticPost],
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """Create a static page; content and index rows are inserted in one transaction."""
    require_session(post, context, app)
    created = app.static_service.create_page(post.data.name, post.data.body, context)
    return StaticPostResponse(
        name=created["name"],
        body=created["body"],
        created=format_timestamp(created["created"], app.time_format),
        updated=format_timestamp(created["updated"], app.time_format),
    )
