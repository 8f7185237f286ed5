"""Shared fixtures: an in-memory SQLite database wired into the app."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import apps.shared.auth as auth
from apps.shared.auth import create_access_token, hash_password
from apps.shared.database import Base, get_db
from apps.blog.models import Blog, User
from app.main import app
from tests.helper import INITIAL_BLOGS


@pytest.fixture(autouse=True)
def auth_settings(monkeypatch):
    monkeypatch.setattr(auth, "SECRET_KEY", "test-secret")
    monkeypatch.setattr(auth, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def root_user(session_factory):
    """User 'root' (password 'sekret') owning INITIAL_BLOGS."""
    db = session_factory()
    user = User(username="root", name="Superuser", password_hash=hash_password("sekret"))
    db.add(user)
    db.flush()
    for data in INITIAL_BLOGS:
        user.blogs.append(Blog(**data, user_id=user.id))
    db.commit()
    user_id = user.id
    db.close()
    return {"id": user_id, "username": "root"}


@pytest.fixture
def client(session_factory, root_user):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header(root_user):
    token = create_access_token(root_user["id"], root_user["username"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def blogs_in_db(session_factory):
    def _blogs_in_db() -> list[dict]:
        db = session_factory()
        try:
            return [
                {
                    "id": b.id,
                    "title": b.title,
                    "author": b.author,
                    "url": b.url,
                    "likes": b.likes,
                    "user_id": b.user_id,
                }
                for b in db.query(Blog).order_by(Blog.id).all()
            ]
        finally:
            db.close()

    return _blogs_in_db


@pytest.fixture
def user_blog_ids(session_factory):
    def _user_blog_ids(user_id: int) -> list[int]:
        db = session_factory()
        try:
            return [b.id for b in db.get(User, user_id).blogs]
        finally:
            db.close()

    return _user_blog_ids
