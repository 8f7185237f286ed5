"""
Blog collection operations.

Each function takes the stores it needs explicitly and performs its store
calls one after another. Committing is left to the caller.
"""
import logging
from typing import List

from apps.shared.errors import AuthenticationError, NotFoundError, PermissionDeniedError
from apps.blog.models import Blog
from apps.blog.schemas import BlogCreate, BlogUpdate
from apps.blog.store import BlogStore, UserStore

logger = logging.getLogger(__name__)

# Fields a client may clear by sending null; the rest are required columns
NULLABLE_FIELDS = {"author"}


def list_blogs(blogs: BlogStore) -> List[Blog]:
    return blogs.find()


def get_blog(blogs: BlogStore, blog_id: int) -> Blog:
    blog = blogs.find_by_id(blog_id)
    if blog is None:
        raise NotFoundError("blog not found")
    return blog


def create_blog(
    blogs: BlogStore,
    users: UserStore,
    user_id: int,
    data: BlogCreate,
) -> Blog:
    """
    Create a post owned by ``user_id`` and append it to the owner's posts.

    Raises:
        AuthenticationError: If the authenticated user no longer exists
    """
    user = users.find_by_id(user_id)
    if user is None:
        raise AuthenticationError("user for token not found")

    blog = blogs.insert(
        Blog(
            title=data.title,
            author=data.author,
            url=data.url,
            likes=data.likes or 0,
            user_id=user.id,
        )
    )
    users.append_post(user, blog)

    logger.info(f"Created blog {blog.id} for user {user.id}")
    return blog


def update_blog(blogs: BlogStore, blog_id: int, data: BlogUpdate) -> Blog:
    """Replace the supplied fields; id and owner are never touched."""
    fields = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }

    blog = blogs.update_by_id(blog_id, fields)
    if blog is None:
        raise NotFoundError("blog not found")

    logger.info(f"Updated blog {blog_id}: {sorted(fields)}")
    return blog


def delete_blog(blogs: BlogStore, blog_id: int) -> None:
    """Remove a post; deleting an unknown id is a no-op."""
    blogs.delete_by_id(blog_id)
    logger.info(f"Deleted blog {blog_id}")


def ensure_owner(blogs: BlogStore, blog_id: int, user_id: int) -> None:
    """
    Check that ``user_id`` owns the post before it is modified.

    An absent post passes, so update still reports not found and delete
    stays idempotent.
    """
    blog = blogs.find_by_id(blog_id)
    if blog is not None and blog.user_id != user_id:
        raise PermissionDeniedError("only the owner can modify this blog")
