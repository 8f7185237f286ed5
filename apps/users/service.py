"""
User registration and login.
"""
import logging
from typing import List

from apps.shared.auth import create_access_token, hash_password, verify_password
from apps.shared.errors import AuthenticationError, ValidationError
from apps.blog.models import User
from apps.blog.store import UserStore
from apps.users.schemas import LoginRequest, TokenResponse, UserCreate

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 3


def register_user(users: UserStore, data: UserCreate) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ValidationError: If username/password is too short or the username is taken
    """
    if len(data.username) < MIN_USERNAME_LENGTH or len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("username or password too short")

    if users.find_by_username(data.username) is not None:
        raise ValidationError("username must be unique")

    user = users.insert(
        User(
            username=data.username,
            name=data.name,
            password_hash=hash_password(data.password),
        )
    )
    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def list_users(users: UserStore) -> List[User]:
    return users.find()


def login(users: UserStore, credentials: LoginRequest) -> TokenResponse:
    """
    Exchange username and password for a bearer token.

    Raises:
        AuthenticationError: If the user is unknown or the password is wrong
    """
    user = users.find_by_username(credentials.username)
    if user is None or not verify_password(credentials.password, user.password_hash):
        raise AuthenticationError("invalid username or password")

    token = create_access_token(user.id, user.username)
    logger.info(f"User {user.id} logged in")
    return TokenResponse(token=token, username=user.username, name=user.name)
