"""Auth service: login."""

import logging

from sqlalchemy.orm import Session

from app.core.security import create_access_token, verify_password
from app.errors import UnauthorizedError
from app.repositories.user import get_user_by_email
from app.schemas.user import Token, User

logger = logging.getLogger(__name__)


def login(db: Session, email: str, password: str) -> Token:
    """
    Authenticate user by email and password, return JWT access token.

    Raises:
        UnauthorizedError: If email not found, password incorrect or account inactive.
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Incorrect email or password")

    if not user.is_active:
        raise UnauthorizedError("Inactive user")

    logger.info("User %s logged in", user.id)
    return Token(
        access_token=create_access_token(user.id),
        token_type="bearer",
        user=User.model_validate(user),
    )
