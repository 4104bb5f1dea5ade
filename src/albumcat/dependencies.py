"""Shared dependencies for FastAPI endpoints."""

from typing import Optional

from fastapi import Header, HTTPException, status

from albumcat.database import get_db

__all__ = ["get_db", "get_current_login", "require_current_login"]


async def get_current_login(
    x_user_login: Optional[str] = Header(None, alias="X-User-Login"),
) -> Optional[str]:
    """Return the caller's login from the ``X-User-Login`` header, if any.

    Authentication happens upstream of this service; the header carries the
    already-authenticated login.
    """
    login = (x_user_login or "").strip()
    return login or None


async def require_current_login(
    x_user_login: Optional[str] = Header(None, alias="X-User-Login"),
) -> str:
    """Like ``get_current_login`` but rejects anonymous callers.

    Raises:
        HTTPException 401: Header missing or blank
    """
    login = await get_current_login(x_user_login)
    if login is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-Login header required")
    return login
