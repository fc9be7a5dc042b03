"""
Request guards for protected routes.

``authenticate`` resolves the bearer token into an ``AuthenticatedUser``
which handlers receive as an explicit argument; ``authorize`` builds a
dependency that additionally checks the caller's role.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import jwt
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from .auth import decode_access_token
from .db import get_db
from .models import Role, User
from .service import AuthService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str
    role: Role


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> AuthenticatedUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Unauthorized, please log in first")
    token = authorization.split(" ", 1)[1].strip()

    try:
        data = decode_access_token(token)
    except jwt.PyJWTError as exc:
        logger.info("Rejected token: %s", exc)
        raise _unauthorized("Invalid or expired token, please log in again") from exc

    user_id = data.get("id")
    if not user_id:
        raise _unauthorized("Invalid or expired token, please log in again")

    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User no longer exists, please log in again")

    return AuthenticatedUser(id=user.id, email=user.email, role=user.role)


def authorize(roles: Iterable[Role]) -> Callable[..., AuthenticatedUser]:
    """
    Build a dependency that only lets through users holding one of ``roles``.

    Args:
        roles: Allowed roles (enum members or their string values)

    Returns:
        Dependency function yielding the authenticated user
    """
    allowed = {Role(role) for role in roles}

    def verify_role(user: AuthenticatedUser = Depends(authenticate)) -> AuthenticatedUser:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions to access this resource",
            )
        return user

    return verify_role
