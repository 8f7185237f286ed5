"""
Users API

Registration and listing of users, plus the login endpoint that issues
the bearer tokens required to create blog posts.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from apps.shared.database import get_db
from apps.blog.store import UserStore, get_user_store
from apps.users import service
from apps.users.schemas import LoginRequest, TokenResponse, UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])
login_router = APIRouter(prefix="/api/login", tags=["login"])


@router.get("", response_model=list[UserResponse])
def list_users(users: UserStore = Depends(get_user_store)):
    """List all users with their blog posts."""
    return service.list_users(users)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    user_data: UserCreate,
    users: UserStore = Depends(get_user_store),
    db: Session = Depends(get_db),
):
    """Register a new user."""
    user = service.register_user(users, user_data)
    db.commit()
    return user


@login_router.post("", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    users: UserStore = Depends(get_user_store),
):
    """Log in and receive a bearer token."""
    return service.login(users, credentials)
