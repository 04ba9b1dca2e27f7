"""Authentication routes (login, logout, current session)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_session_issuer, get_user_repo
from api.models import LoginRequest, LoginResponse, SessionResponse, UserSummary
from api.security import clear_session_cookie, require_session, set_session_cookie
from domain.model.errors import BannedAccountError
from domain.model.session import Session
from port.user_repository import UserRepository
from services.auth_service import validate_credentials
from services.session_service import SessionTokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
async def login(
    request: LoginRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repo),
    issuer: SessionTokenIssuer = Depends(get_session_issuer),
):
    """Validate credentials and set the session cookie.

    Raises:
        HTTPException: 401 if credentials are invalid, 403 if the account is banned
    """
    try:
        user = validate_credentials(repo, request.email, request.password)
    except BannedAccountError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is banned",
        )

    if not user:
        # Same answer for unknown email and wrong password
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    set_session_cookie(response, issuer.issue(user), issuer)
    logger.info("User logged in", extra={"userId": user.id, "email": user.email})

    return LoginResponse(user=UserSummary.from_user(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    """Clear the session cookie. The token itself simply expires."""
    clear_session_cookie(response)
    return None


@router.get("/session", response_model=SessionResponse)
async def get_session(session: Session = Depends(require_session)):
    """Return the current session.

    Raises:
        HTTPException: 401 if not authenticated
    """
    return SessionResponse.from_session(session)
