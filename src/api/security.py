"""Session cookie handling and authorization dependencies."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_session_issuer
from domain.model.session import Session
from domain.model.user import Role
from services.session_service import SessionTokenIssuer
from utils.config import get_session_cookie_secure

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session_token"

security = HTTPBearer(auto_error=False)


def read_session_token(request: Request) -> Optional[str]:
    """Session token from the http-only cookie."""
    return request.cookies.get(SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, token: str, issuer: SessionTokenIssuer) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=issuer.max_age_seconds,
        httponly=True,
        secure=get_session_cookie_secure(),
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=get_session_cookie_secure(),
        samesite="lax",
        path="/",
    )


def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: SessionTokenIssuer = Depends(get_session_issuer),
) -> Optional[Session]:
    """Current session (optional). Cookie first, then Bearer header; None if neither resolves."""
    token = read_session_token(request)
    if not token and credentials:
        token = credentials.credentials
    return issuer.resolve(token)


def require_session(session: Optional[Session] = Depends(get_current_session)) -> Session:
    """Current session (required). Raises 401 if not authenticated."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_admin(session: Session = Depends(require_session)) -> Session:
    """Current session with the ADMIN role. Raises 403 for any other role."""
    if not has_role(session, Role.ADMIN):
        logger.info("Admin access denied", extra={"userId": session.id, "role": session.role.value})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return session


def has_role(session: Optional[Session], role: Role) -> bool:
    """True when a session is present and carries exactly the given role."""
    return session is not None and session.role == role
