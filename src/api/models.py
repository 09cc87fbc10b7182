"""
Pydantic models for API request/response validation
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


def format_timestamp(value, time_format: str) -> str:
    """Render a stored timestamp; drivers return datetime or text depending on column type."""
    if isinstance(value, datetime):
        return value.strftime(time_format)
    return str(value)


class LoginRequest(BaseModel):
    """Login request model"""
    userid: str
    passphrase: str
    period: str


class SessionCredential(BaseModel):
    """Issued session: secret plus formatted expiration"""
    secret: str
    expiration: str


class LogoutRequest(BaseModel):
    username: str
    secret: str


class AuthData(BaseModel, Generic[T]):
    """Mutating request body: caller identity and session secret wrapped around the payload"""
    username: str
    secret: str
    data: T


class BlogPost(BaseModel):
    title: str
    subtitle: str = ""
    tag: str = ""
    body: str


class BlogPut(BaseModel):
    id: int
    title: str
    subtitle: str = ""
    tag: str = ""
    body: str


class BlogDelete(BaseModel):
    id: int


class BlogHeader(BaseModel):
    """Blog list entry (no body)"""
    id: str
    title: str
    subtitle: str
    tag: str
    created: str
    updated: str


class BlogResponse(BaseModel):
    id: str
    title: str
    subtitle: str
    tag: str
    body: str
    created: str
    updated: str


class BlogPutResponse(BaseModel):
    id: str
    title: str
    subtitle: str
    tag: str
    body: str
    updated: str


class StaticPost(BaseModel):
    name: str
    body: str


class StaticPageResponse(BaseModel):
    body: str
    created: str
    updated: str


class StaticPostResponse(BaseModel):
    name: str
    body: str
    created: str
    updated: str
