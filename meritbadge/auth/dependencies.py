"""FastAPI dependencies resolving the current user from session cookies."""

import logging
from typing import Optional

from fastapi import Cookie, Depends, Request, Response

from .supabase import AuthUser, SessionExpiredError, SupabaseAuthClient
from ..config.auth import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE

logger = logging.getLogger(__name__)

def get_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient()

def clear_session_cookies(response: Response) -> None:
    """Delete the session cookies with the attributes they were set with."""
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, path='/', secure=True, httponly=True, samesite='none')

def session_expired(request: Request) -> bool:
    """Whether Supabase rejected the session sent with this request."""
    return getattr(request.state, 'session_expired', False)

def get_current_user(
    request: Request,
    access_token: Optional[str] = Cookie(default=None, alias=ACCESS_TOKEN_COOKIE),
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> Optional[AuthUser]:
    """
    Resolve the signed-in user, or None.

    Both session cookies must be present. A session Supabase rejected is
    flagged on request.state so the route can clear the cookies; outages and
    missing configuration only resolve to None.
    """
    request.state.session_expired = False
    if not access_token or not refresh_token:
        return None

    try:
        return auth_client.get_user(access_token)
    except SessionExpiredError:
        logger.info("Session expired, treating request as signed out")
        request.state.session_expired = True
        return None
    except ValueError as e:
        logger.error(f"Supabase auth is not configured: {e}")
        return None
