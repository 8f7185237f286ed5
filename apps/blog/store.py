"""
Store interfaces for blog posts and users.

Service functions depend on the ``BlogStore`` / ``UserStore`` protocols
rather than on a global session, so an in-memory implementation can stand
in for tests.

The SQLAlchemy stores share the request's Session. Their writes flush but
never commit: the endpoint commits once, which keeps the post insert and
the owner update of a create in one transaction.
"""
import logging
from typing import Any, Dict, List, Optional, Protocol

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from apps.shared.database import get_db
from apps.shared.errors import ValidationError
from apps.blog.models import Blog, User

logger = logging.getLogger(__name__)


class BlogStore(Protocol):
    def find(self) -> List[Blog]: ...

    def find_by_id(self, blog_id: int) -> Optional[Blog]: ...

    def insert(self, blog: Blog) -> Blog: ...

    def update_by_id(self, blog_id: int, fields: Dict[str, Any]) -> Optional[Blog]: ...

    def delete_by_id(self, blog_id: int) -> None: ...


class UserStore(Protocol):
    def find(self) -> List[User]: ...

    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def find_by_username(self, username: str) -> Optional[User]: ...

    def insert(self, user: User) -> User: ...

    def append_post(self, user: User, blog: Blog) -> User: ...


class SqlBlogStore:
    """BlogStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find(self) -> List[Blog]:
        return (
            self.db.query(Blog)
            .options(joinedload(Blog.user))
            .order_by(Blog.id.asc())
            .all()
        )

    def find_by_id(self, blog_id: int) -> Optional[Blog]:
        return self.db.get(Blog, blog_id)

    def insert(self, blog: Blog) -> Blog:
        self.db.add(blog)
        self.db.flush()
        return blog

    def update_by_id(self, blog_id: int, fields: Dict[str, Any]) -> Optional[Blog]:
        blog = self.db.get(Blog, blog_id)
        if blog is None:
            return None
        for key, value in fields.items():
            setattr(blog, key, value)
        self.db.flush()
        return blog

    def delete_by_id(self, blog_id: int) -> None:
        blog = self.db.get(Blog, blog_id)
        if blog is None:
            return
        self.db.delete(blog)
        self.db.flush()


class SqlUserStore:
    """UserStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find(self) -> List[User]:
        return (
            self.db.query(User)
            .options(selectinload(User.blogs))
            .order_by(User.id.asc())
            .all()
        )

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def insert(self, user: User) -> User:
        """
        Insert a user, relying on the unique constraint for usernames.

        A failed flush leaves the session unusable until it is closed or
        rolled back by its owner.

        Raises:
            ValidationError: If the username is already taken
        """
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError:
            # Session is left for the request to discard
            logger.info(f"Username already taken: {user.username}")
            raise ValidationError("username must be unique")
        return user

    def append_post(self, user: User, blog: Blog) -> User:
        # Collection may already hold the post if it was loaded after the insert
        if blog not in user.blogs:
            user.blogs.append(blog)
        self.db.flush()
        return user


def get_blog_store(db: Session = Depends(get_db)) -> SqlBlogStore:
    return SqlBlogStore(db)


def get_user_store(db: Session = Depends(get_db)) -> SqlUserStore:
    return SqlUserStore(db)
