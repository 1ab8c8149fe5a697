"""FastAPI dependencies for authentication, authorization and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backoffice.database import get_db
from backoffice.models.enums import Action, Resource
from backoffice.models.user import User
from backoffice.services.auth import decode_access_token
from backoffice.services.rbac import authorize
from backoffice.services.stat_category_item_service import StatCategoryItemService
from backoffice.services.stat_category_service import StatCategoryService

security = HTTPBearer()


def _credentials_error(detail: str = "Invalid authentication credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _credentials_error()

    user_id = payload.get("sub")
    if user_id is None:
        raise _credentials_error()

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise _credentials_error("User not found")
    if not user.is_active:
        raise _credentials_error("User is inactive")

    return user


def require_permission(resource: Resource, action: Action) -> Callable[..., User]:
    """Build a dependency that returns the current user if they hold the capability."""

    def dependency(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        authorize(current_user, resource, action)
        return current_user

    return dependency


def get_stat_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> StatCategoryService:
    """Get stat category service with dependencies."""
    return StatCategoryService(db)


def get_stat_category_item_service(
    db: Annotated[Session, Depends(get_db)],
) -> StatCategoryItemService:
    """Get stat category item service with dependencies."""
    return StatCategoryItemService(db)
