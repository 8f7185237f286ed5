"""In-memory stores implementing BlogStore and UserStore."""

from typing import Any, Dict, List, Optional

from apps.shared.errors import ValidationError
from apps.blog.models import Blog, User


class InMemoryBlogStore:
    def __init__(self):
        self._blogs: Dict[int, Blog] = {}
        self._next_id = 1

    def find(self) -> List[Blog]:
        return list(self._blogs.values())

    def find_by_id(self, blog_id: int) -> Optional[Blog]:
        return self._blogs.get(blog_id)

    def insert(self, blog: Blog) -> Blog:
        blog.id = self._next_id
        self._next_id += 1
        self._blogs[blog.id] = blog
        return blog

    def update_by_id(self, blog_id: int, fields: Dict[str, Any]) -> Optional[Blog]:
        blog = self._blogs.get(blog_id)
        if blog is None:
            return None
        for key, value in fields.items():
            setattr(blog, key, value)
        return blog

    def delete_by_id(self, blog_id: int) -> None:
        self._blogs.pop(blog_id, None)


class InMemoryUserStore:
    def __init__(self):
        self._users: Dict[int, User] = {}
        self._next_id = 1

    def find(self) -> List[User]:
        return list(self._users.values())

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def insert(self, user: User) -> User:
        if self.find_by_username(user.username) is not None:
            raise ValidationError("username must be unique")
        user.id = self._next_id
        self._next_id += 1
        self._users[user.id] = user
        return user

    def append_post(self, user: User, blog: Blog) -> User:
        if blog not in user.blogs:
            user.blogs.append(blog)
        return user
