"""Locale resolution and CMS access control for page requests.

Every page request gets a locale from its first path segment (falling back
to the default). Requests into the CMS area need an admin session, except
the CMS login page which is always reachable:

- no session        -> 307 /{locale}/cms/login
- non-admin session -> 307 /{locale}
- admin session     -> pass through

Everything else passes through with ``request.state.locale`` set, apart
from the bare root which is sent to the default locale's home page.
"""

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from api.security import read_session_token
from domain.model.locale import DEFAULT_LOCALE, locale_from_path, path_segments
from domain.model.user import Role
from services.session_service import SessionTokenIssuer

logger = logging.getLogger(__name__)

CMS_SEGMENT = "cms"
CMS_LOGIN_SEGMENT = "login"

# Paths the guard never touches (API, health and docs)
EXCLUDED_PREFIXES = ("/api", "/health", "/docs", "/redoc", "/openapi.json")


def is_excluded_path(path: str) -> bool:
    """API, infrastructure and file-like paths (``favicon.ico``) skip the guard."""
    if any(path == prefix or path.startswith(prefix + "/") for prefix in EXCLUDED_PREFIXES):
        return True
    segments = path_segments(path)
    return bool(segments) and "." in segments[-1]


def is_cms_path(path: str) -> bool:
    return CMS_SEGMENT in path_segments(path)


def is_cms_login_path(path: str) -> bool:
    segments = path_segments(path)
    return any(
        segments[i] == CMS_SEGMENT and segments[i + 1] == CMS_LOGIN_SEGMENT
        for i in range(len(segments) - 1)
    )


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Gate the CMS area by session and role, and attach the request locale."""

    def __init__(self, app: ASGIApp, session_issuer: SessionTokenIssuer):
        super().__init__(app)
        self.session_issuer = session_issuer

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_excluded_path(path):
            return await call_next(request)

        locale = locale_from_path(path)

        if is_cms_path(path) and not is_cms_login_path(path):
            session = self.session_issuer.resolve(read_session_token(request))

            if session is None:
                logger.info("CMS request without session", extra={"path": path, "locale": locale})
                return RedirectResponse(url=f"/{locale}/cms/login")

            if session.role != Role.ADMIN:
                logger.info("CMS request by non-admin", extra={"path": path, "userId": session.id})
                return RedirectResponse(url=f"/{locale}")

        if not path_segments(path):
            return RedirectResponse(url=f"/{DEFAULT_LOCALE}")

        request.state.locale = locale
        return await call_next(request)
