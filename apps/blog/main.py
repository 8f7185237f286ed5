"""
Blog API

CRUD endpoints for blog posts. Creating a post requires a bearer token;
update and delete are open unless ENFORCE_OWNERSHIP is enabled, in which
case only the post's owner may change it.

Aggregates over blog collections (total likes) live in apps/blog/list_helper.py.
"""
import os
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, Security
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from apps.shared.auth import bearer_scheme, get_current_user_id
from apps.shared.database import get_db, check_db_connection
from apps.blog import service
from apps.blog.schemas import BlogCreate, BlogUpdate, BlogResponse
from apps.blog.store import BlogStore, UserStore, get_blog_store, get_user_store

logger = logging.getLogger(__name__)

ENFORCE_OWNERSHIP = os.getenv("ENFORCE_OWNERSHIP", "false").lower() in {"1", "true", "yes"}

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


def _check_ownership(
    blogs: BlogStore,
    blog_id: int,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> None:
    if not ENFORCE_OWNERSHIP:
        return
    user_id = get_current_user_id(credentials)
    service.ensure_owner(blogs, blog_id, user_id)


@router.get("/health")
def health():
    """Health check endpoint."""
    db_connected = check_db_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "service": "blog",
        "database": "connected" if db_connected else "disconnected",
    }


@router.get("", response_model=list[BlogResponse])
def list_blogs(blogs: BlogStore = Depends(get_blog_store)):
    """List every blog post with its owner."""
    return service.list_blogs(blogs)


@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: int, blogs: BlogStore = Depends(get_blog_store)):
    return service.get_blog(blogs, blog_id)


@router.post("", response_model=BlogResponse, status_code=201)
def create_blog(
    blog_data: BlogCreate,
    user_id: int = Depends(get_current_user_id),
    blogs: BlogStore = Depends(get_blog_store),
    users: UserStore = Depends(get_user_store),
    db: Session = Depends(get_db),
):
    """
    Create a blog post owned by the authenticated user.
    Requires: Authorization: Bearer <token>
    """
    blog = service.create_blog(blogs, users, user_id, blog_data)
    db.commit()
    return blog


@router.put("/{blog_id}", response_model=BlogResponse)
def update_blog(
    blog_id: int,
    blog_data: BlogUpdate,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    blogs: BlogStore = Depends(get_blog_store),
    db: Session = Depends(get_db),
):
    """Update the supplied fields of a blog post."""
    _check_ownership(blogs, blog_id, credentials)
    blog = service.update_blog(blogs, blog_id, blog_data)
    db.commit()
    return blog


@router.delete("/{blog_id}", status_code=204)
def delete_blog(
    blog_id: int,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    blogs: BlogStore = Depends(get_blog_store),
    db: Session = Depends(get_db),
):
    """Delete a blog post. Unknown ids are ignored."""
    _check_ownership(blogs, blog_id, credentials)
    service.delete_blog(blogs, blog_id)
    db.commit()
    return Response(status_code=204)
