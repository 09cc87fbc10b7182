"""
Blog API Router
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.app_context import AppContext, get_app_context
from api.dependencies import get_request_context, require_session
from api.error_handling import handle_db_errors
from api.models import (
    AuthData, BlogDelete, BlogHeader, BlogPost, BlogPut, BlogPutResponse, BlogResponse, format_timestamp,
)
from domain.errors import ValidationError
from domain.request_context import RequestContext


router = APIRouter(tags=["blog"])


def _blog_response(post: dict, time_format: str) -> BlogResponse:
    return BlogResponse(
        id=str(post["id"]),
        title=post["title"],
        subtitle=post["subtitle"],
        tag=post["tag"],
        body=post["body"],
        created=format_timestamp(post["created"], time_format),
        updated=format_timestamp(post["updated"], time_format),
    )


@router.get("/blogs", response_model=list[BlogHeader])
@handle_db_errors("list blogs")
def list_blogs(
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """Get all blog headers ordered by creation time."""
    return [
        BlogHeader(
            id=str(head["id"]),
            title=head["title"],
            subtitle=head["subtitle"],
            tag=head["tag"],
            created=format_timestamp(head["created"], app.time_format),
            updated=format_timestamp(head["updated"], app.time_format),
        )
        for head in app.blog_service.list_posts(context)
    ]


@router.get("/blog", response_model=BlogResponse)
@handle_db_errors("fetch blog")
def get_blog(
    id: Optional[str] = None,
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """Get one blog post by ID."""
    try:
        blog_id = int(id)
    except (TypeError, ValueError):
        raise ValidationError("Invalid query parameter")
    return _blog_response(app.blog_service.get_post(blog_id, context), app.time_format)


@router.post("/blog", response_model=BlogResponse)
@handle_db_errors("create blog")
def create_blog(
    post: AuthData[BlogPost],
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """
    Create a blog post.

    Content and index rows are inserted in one transaction.
    """
    require_session(post, context, app)
    created = app.blog_service.create_post(
        post.data.title, post.data.subtitle, post.data.tag, post.data.body, context,
    )
    return _blog_response(created, app.time_format)


@router.put("/blog", response_model=BlogPutResponse)
@handle_db_errors("update blog")
def update_blog(
    post: AuthData[BlogPut],
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """Update a blog post's header and body."""
    require_session(post, context, app)
    updated = app.blog_service.update_post(
        post.data.id, post.data.title, post.data.subtitle, post.data.tag, post.data.body, context,
    )
    return BlogPutResponse(
        id=str(updated["id"]),
        title=updated["title"],
        subtitle=updated["subtitle"],
        tag=updated["tag"],
        body=updated["body"],
        updated=format_timestamp(updated["updated"], app.time_format),
    )


@router.delete("/blog")
@handle_db_errors("delete blog")
def delete_blog(
    post: AuthData[BlogDelete],
    context: RequestContext = Depends(get_request_context),
    app: AppContext = Depends(get_app_context),
):
    """Delete a blog post (index and content rows)."""
    require_session(post, context, app)
    app.blog_service.delete_post(post.data.id, context)
    return {"id": str(post.data.id)}
