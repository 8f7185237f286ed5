"""
Blog database models.

Stores blog posts and the users that own them. Every post has exactly one
owner, set at creation and never reassigned.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship

from apps.shared.database import Base


class User(Base):
    """
    Account that owns blog posts.

    ``blogs`` is the ordered list of posts the user created; the API only
    ever appends to it. ``password_hash`` never leaves the service.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(200))
    password_hash = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    blogs = relationship("Blog", back_populates="user", order_by="Blog.id")

    def __repr__(self):
        return f"<User id={self.id} username={self.username!r}>"


class Blog(Base):
    """A single blog entry with its like count and owner."""
    __tablename__ = "blogs"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_blogs_likes_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    author = Column(String(200))
    url = Column(String(500), nullable=False)
    likes = Column(Integer, nullable=False, default=0)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="blogs")

    def __repr__(self):
        return f"<Blog id={self.id} title={self.title!r}>"
