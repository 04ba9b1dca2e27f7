"""Localized page endpoints.

Rendering lives in the frontend; these return the data a page needs and
404 for an unsupported locale.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from api.security import require_admin
from domain.model.locale import is_supported_locale
from domain.model.session import Session

router = APIRouter(tags=["pages"])


def _page(request: Request, locale: str, page: str, **extra) -> dict:
    if not is_supported_locale(locale):
        raise HTTPException(status_code=404, detail="Locale not supported")
    return {"locale": getattr(request.state, "locale", locale), "page": page, **extra}


@router.get("/{locale}")
async def home(request: Request, locale: str):
    return _page(request, locale, "home")


@router.get("/{locale}/cms/login")
async def cms_login(request: Request, locale: str):
    return _page(request, locale, "cms-login")


@router.get("/{locale}/cms")
async def cms_dashboard(request: Request, locale: str, session: Session = Depends(require_admin)):
    # The route guard already redirected anyone without an admin session
    return _page(request, locale, "cms-dashboard", user={"id": session.id, "name": session.name})
