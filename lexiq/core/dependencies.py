"""
Dependency injection for FastAPI endpoints.
"""
from typing import Generator, Optional, cast

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from lexiq.core.config import settings
from lexiq.core.security import decode_token
from lexiq.db.base import SessionLocal
from lexiq.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.TOKEN_URL)
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.TOKEN_URL, auto_error=False)


def get_db() -> Generator:
    """
    Dependency for database session.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_from_token(db: Session, token: str) -> Optional[User]:
    payload = decode_token(token)
    if payload is None:
        return None

    user_id: Optional[str] = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        return None

    return db.query(User).filter(User.id == int(user_id)).first()


def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        db: Database session
        token: JWT token

    Returns:
        Current user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    user = _user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Get current active user.

    Raises:
        HTTPException: If user is inactive
    """
    if not cast(bool, current_user.is_active):
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


def get_optional_user(
    db: Session = Depends(get_db), token: Optional[str] = Depends(optional_oauth2_scheme)
) -> Optional[User]:
    """Current user if a valid token was sent, None for anonymous requests."""
    if not token:
        return None
    return _user_from_token(db, token)
